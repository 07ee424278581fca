"""OpenAPI / Swagger to Markdown converter.

Renders a parsed OpenAPI 2.0 / 3.x document into a single Markdown
document suitable for serving as ``llms.txt``. Every section generator
reads the document defensively: a missing or wrongly-typed field yields
an empty fragment instead of an error.
"""

import json
from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any

DEFAULT_TITLE = "API Documentation"


class EndpointKind(Enum):
    """Where an operation lives: under ``paths`` or under ``webhooks``."""

    PATH = 3
    WEBHOOK = 4

    @property
    def heading(self) -> str:
        return "#" * self.value

    @property
    def subheading(self) -> str:
        return "#" * (self.value + 1)


def _mapping(value: Any) -> Mapping:
    return value if isinstance(value, Mapping) else {}


def _sequence(value: Any) -> list:
    return value if isinstance(value, list) else []


def _text(value: Any) -> str:
    """Render a scalar for inline Markdown; containers and null become ''."""
    if value is None or isinstance(value, (Mapping, list)):
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _cell(value: Any) -> str:
    # Pipes and newlines would break the table row.
    return " ".join(_text(value).replace("|", "\\|").split())


def get_schema_type(schema: Any) -> str:
    """Resolve a display name for a schema node.

    ``type`` wins (arrays recurse into ``items`` as ``array[...]``), then the
    last segment of ``$ref``, then ``object``. References are named, never
    dereferenced.
    """
    schema = _mapping(schema)
    schema_type = schema.get("type")

    if isinstance(schema_type, list):
        # OpenAPI 3.1 allows e.g. ["string", "null"]
        schema_type = " | ".join(_text(t) for t in schema_type if _text(t))
    if schema_type:
        if schema_type == "array" and isinstance(schema.get("items"), Mapping):
            return f"array[{get_schema_type(schema['items'])}]"
        return _text(schema_type) or "object"

    ref = schema.get("$ref")
    if isinstance(ref, str):
        return ref.split("/")[-1] or "object"
    return "object"


def get_parameter_type(param: Mapping) -> str:
    """Type of a parameter: its ``schema`` (3.x), its own ``type`` (2.0), or string."""
    if isinstance(param.get("schema"), Mapping):
        return get_schema_type(param["schema"])
    if param.get("type"):
        return get_schema_type(param)
    return "string"


def _security_requirements(requirement: Any, indent: str = "") -> str:
    lines = ""
    for name, scopes in _mapping(requirement).items():
        lines += f"{indent}- **{name}**"
        scopes = [_text(s) for s in _sequence(scopes)]
        if scopes:
            lines += f" (scopes: {', '.join(scopes)})"
        lines += "\n"
    return lines


# Component renderers: (name, component) -> Markdown block


def _render_schema(name: str, schema: Any) -> str:
    dump = json.dumps(schema, indent=2, ensure_ascii=False, default=str)
    return f"### {name}\n\n```json\n{dump}\n```\n\n"


def _render_security_scheme(name: str, scheme: Any) -> str:
    s = _mapping(scheme)
    block = f"### {name}\n\n**Type**: {_text(s.get('type'))}\n\n"
    if s.get("description"):
        block += f"{_text(s['description'])}\n\n"
    for key, label in (
        ("scheme", "Scheme"),
        ("bearerFormat", "Bearer Format"),
        ("in", "In"),
        ("name", "Name"),
    ):
        if s.get(key):
            block += f"**{label}**: {_text(s[key])}\n\n"
    return block


def _render_described(name: str, component: Any) -> str:
    return f"### {name}\n\n{_text(_mapping(component).get('description'))}\n\n"


def _render_parameter(name: str, param: Any) -> str:
    p = _mapping(param)
    block = f"### {name}\n\n**In**: {_text(p.get('in'))}\n\n"
    block += f"**Required**: {'Yes' if p.get('required') else 'No'}\n\n"
    if p.get("description"):
        block += f"{_text(p['description'])}\n\n"
    return block


def _render_example(name: str, example: Any) -> str:
    e = _mapping(example)
    block = f"### {name}\n\n"
    if e.get("summary"):
        block += f"**Summary**: {_text(e['summary'])}\n\n"
    if e.get("description"):
        block += f"{_text(e['description'])}\n\n"
    return block


def _render_link(name: str, link: Any) -> str:
    block = f"### {name}\n\n"
    description = _text(_mapping(link).get("description"))
    if description:
        block += f"{description}\n\n"
    return block


COMPONENT_SECTIONS: list[tuple[str, str, Callable[[str, Any], str]]] = [
    ("Schemas", "schemas", _render_schema),
    ("Security Schemes", "securitySchemes", _render_security_scheme),
    ("Response Components", "responses", _render_described),
    ("Parameter Components", "parameters", _render_parameter),
    ("Example Components", "examples", _render_example),
    ("Request Body Components", "requestBodies", _render_described),
    ("Header Components", "headers", _render_described),
    ("Link Components", "links", _render_link),
]


class OpenAPIToMarkdownConverter:
    """Converts an OpenAPI specification object into a Markdown string."""

    def __init__(self, spec: Mapping):
        if not isinstance(spec, Mapping):
            raise TypeError(
                f"OpenAPI document must be a mapping, got {type(spec).__name__}"
            )
        self.spec = spec

    @property
    def info(self) -> Mapping:
        return _mapping(self.spec.get("info"))

    def convert(self) -> str:
        """Render the whole document; empty sections are left out."""
        sections = [
            self._title(),
            self._description(),
            self._contact(),
            self._license(),
            self._external_docs(),
            self._servers(),
            self._security(),
            self._tags(),
            self._paths(),
            self._webhooks(),
            self._components(),
        ]
        return "\n\n".join(s for s in sections if s)

    def _title(self) -> str:
        title = _text(self.info.get("title")) or DEFAULT_TITLE
        version = _text(self.info.get("version"))
        return f"# {title}{f' (v{version})' if version else ''}"

    def _description(self) -> str:
        return _text(self.info.get("description"))

    def _contact(self) -> str:
        contact = self.info.get("contact")
        if not isinstance(contact, Mapping):
            return ""

        block = "## Contact\n\n"
        for key, label in (("name", "Name"), ("email", "Email"), ("url", "URL")):
            if contact.get(key):
                block += f"**{label}**: {_text(contact[key])}\n\n"
        return block

    def _license(self) -> str:
        license_ = self.info.get("license")
        if not isinstance(license_, Mapping):
            return ""

        block = f"## License\n\n**{_text(license_.get('name'))}**"
        if license_.get("url"):
            block += f" - {_text(license_['url'])}"
        return block

    def _external_docs(self) -> str:
        docs = self.spec.get("externalDocs")
        if not isinstance(docs, Mapping):
            return ""

        description = _text(docs.get("description")) or "Additional documentation"
        return f"## External Documentation\n\n{description}: {_text(docs.get('url'))}"

    def _servers(self) -> str:
        servers = [s for s in _sequence(self.spec.get("servers")) if isinstance(s, Mapping)]
        if not servers:
            return ""

        entries = []
        for server in servers:
            entry = f"- {_text(server.get('url'))}"
            if server.get("description"):
                entry += f" - {_text(server['description'])}"
            variables = server.get("variables")
            if isinstance(variables, Mapping):
                entry += "\n  - Variables:"
                for name, variable in variables.items():
                    v = _mapping(variable)
                    entry += (
                        f"\n    - `{name}`: {_text(v.get('description'))}"
                        f" (default: `{_text(v.get('default'))}`)"
                    )
            entries.append(entry)
        return "## Servers\n\n" + "\n".join(entries)

    def _security(self) -> str:
        requirements = _sequence(self.spec.get("security"))
        if not requirements:
            return ""

        block = "## Security\n\n"
        for index, requirement in enumerate(requirements, start=1):
            block += f"### Requirement {index}\n\n"
            block += _security_requirements(requirement)
            block += "\n"
        return block

    def _tags(self) -> str:
        tags = [t for t in _sequence(self.spec.get("tags")) if isinstance(t, Mapping)]
        if not tags:
            return ""

        block = "## Tags\n\n"
        for tag in tags:
            block += f"### {_text(tag.get('name'))}\n\n"
            if tag.get("description"):
                block += f"{_text(tag['description'])}\n\n"
            docs = tag.get("externalDocs")
            if isinstance(docs, Mapping):
                block += f"External Docs: {_text(docs.get('url'))}\n\n"
        return block

    def _paths(self) -> str:
        paths = _mapping(self.spec.get("paths"))
        if not paths:
            return ""

        block = "## Endpoints\n\n"
        for path, methods in paths.items():
            for method, operation in _mapping(methods).items():
                # path-level "parameters" is shared, not an operation
                if method == "parameters" or not isinstance(operation, Mapping):
                    continue
                block += self._endpoint(EndpointKind.PATH, str(method).upper(), operation, str(path))
        return block

    def _webhooks(self) -> str:
        webhooks = _mapping(self.spec.get("webhooks"))
        if not webhooks:
            return ""

        block = "## Webhooks\n\n"
        for name, webhook in webhooks.items():
            block += f"### {name}\n\n"
            for method, operation in _mapping(webhook).items():
                if isinstance(operation, Mapping):
                    block += self._endpoint(EndpointKind.WEBHOOK, str(method).upper(), operation)
        return block

    def _endpoint(
        self,
        kind: EndpointKind,
        method: str,
        operation: Mapping,
        path: str | None = None,
    ) -> str:
        """Render one operation of a path or a webhook."""
        if kind is EndpointKind.PATH:
            fallback = f"{method} {path}"
        else:
            fallback = method
        summary = _text(operation.get("summary")) or fallback

        block = f"{kind.heading} {summary}\n\n"
        if kind is EndpointKind.PATH:
            block += f"**{method}** `{path}`\n\n"

        tags = [_text(t) for t in _sequence(operation.get("tags"))]
        if tags:
            block += f"**Tags**: {', '.join(tags)}\n\n"
        if operation.get("description"):
            block += f"{_text(operation['description'])}\n\n"
        if operation.get("operationId"):
            block += f"**Operation ID**: `{_text(operation['operationId'])}`\n\n"
        if operation.get("deprecated"):
            block += "**⚠️ DEPRECATED**\n\n"

        heading = kind.subheading
        if _sequence(operation.get("security")):
            block += self._endpoint_security(operation["security"], heading)
        if _sequence(operation.get("parameters")):
            block += self._parameters(operation["parameters"], heading)
        if isinstance(operation.get("requestBody"), Mapping):
            block += self._request_body(operation["requestBody"], heading)
        if isinstance(operation.get("responses"), Mapping):
            block += self._responses(operation["responses"], heading)
        if isinstance(operation.get("callbacks"), Mapping):
            block += self._callbacks(operation["callbacks"], heading)

        return block + "\n"

    def _endpoint_security(self, security: list, heading: str) -> str:
        block = f"{heading} Security\n\n"
        for index, requirement in enumerate(security, start=1):
            block += f"- Requirement {index}:\n"
            block += _security_requirements(requirement, indent="  ")
        return block + "\n"

    def _parameters(self, parameters: list, heading: str) -> str:
        block = f"{heading} Parameters\n\n"
        block += "| Name | In | Type | Required | Description |\n"
        block += "|------|----|------|----------|-------------|\n"

        for param in parameters:
            if not isinstance(param, Mapping):
                continue
            if "$ref" in param and "name" not in param:
                row = [get_schema_type(param), "", "", "", ""]
            else:
                row = [
                    _cell(param.get("name")),
                    _cell(param.get("in")),
                    _cell(get_parameter_type(param)),
                    "Yes" if param.get("required") else "No",
                    _cell(param.get("description")),
                ]
            block += f"| {' | '.join(row)} |\n"
        return block + "\n"

    def _request_body(self, request_body: Mapping, heading: str) -> str:
        block = f"{heading} Request Body\n\n"

        if request_body.get("description"):
            block += f"{_text(request_body['description'])}\n\n"
        if request_body.get("required"):
            block += "**Required**: Yes\n\n"

        content = request_body.get("content")
        if isinstance(content, Mapping):
            block += "**Content Types**:\n\n"
            block += self._media_types(content, indent="")
            block += "\n"
        return block

    def _responses(self, responses: Mapping, heading: str) -> str:
        block = f"{heading} Responses\n\n"

        for code, response in responses.items():
            r = _mapping(response)
            block += f"**{code}**: {_text(r.get('description'))}\n\n"

            headers = r.get("headers")
            if isinstance(headers, Mapping):
                block += "  Headers:\n"
                for name, header in headers.items():
                    block += f"  - `{name}`: {_text(_mapping(header).get('description'))}\n"
                block += "\n"

            content = r.get("content")
            if isinstance(content, Mapping):
                block += "  Content Types:\n"
                block += self._media_types(content, indent="  ")
                block += "\n"
            elif isinstance(r.get("schema"), Mapping):
                # Swagger 2.0 puts the schema directly on the response
                block += f"  Type: {get_schema_type(r['schema'])}\n\n"
        return block

    def _media_types(self, content: Mapping, indent: str) -> str:
        lines = ""
        for media_type, media in content.items():
            lines += f"{indent}- `{media_type}`\n"
            schema = _mapping(media).get("schema")
            if isinstance(schema, Mapping):
                lines += f"{indent}  - Type: {get_schema_type(schema)}\n"
        return lines

    def _callbacks(self, callbacks: Mapping, heading: str) -> str:
        block = f"{heading} Callbacks\n\n"

        for name, callback in callbacks.items():
            block += f"**{name}**\n\n"
            for expression, path_item in _mapping(callback).items():
                block += f"- Expression: `{expression}`\n"
                for method, operation in _mapping(path_item).items():
                    if isinstance(operation, Mapping):
                        summary = _text(operation.get("summary"))
                        block += f"  - {str(method).upper()}: {summary}\n"
            block += "\n"
        return block

    def _components(self) -> str:
        components = _mapping(self.spec.get("components"))
        sections = []
        for title, key, render in COMPONENT_SECTIONS:
            items = _mapping(components.get(key))
            if not items:
                continue
            sections.append(
                f"## {title}\n\n" + "".join(render(str(name), item) for name, item in items.items())
            )
        return "\n\n".join(sections)


def render_llms_txt(
    spec: Mapping,
    header: str | None = None,
    footer: str | None = None,
) -> str:
    """Convert a document and wrap it with optional raw header/footer text."""
    output = OpenAPIToMarkdownConverter(spec).convert()
    if header:
        output = f"{header}\n\n{output}"
    if footer:
        output = f"{output}\n\n{footer}"
    return output
