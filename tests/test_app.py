from pathlib import Path
from unittest.mock import AsyncMock, patch

from starlette.testclient import TestClient

from llms_txt.app import create_app
from llms_txt.config import LlmsOptions, SourceConfig

FIXTURES = Path(__file__).parent / "fixtures"
PETSTORE = str(FIXTURES / "petstore.json")


def _client(**kwargs) -> TestClient:
    kwargs.setdefault("source", SourceConfig(type="file", file=PETSTORE))
    return TestClient(create_app(LlmsOptions(**kwargs)))


class TestLlmsRoute:
    def test_serves_markdown(self):
        response = _client().get("/llms.txt")
        assert response.status_code == 200
        assert response.headers["content-type"] == "text/markdown; charset=utf-8"
        assert response.text.startswith("# Swagger Petstore (v1.0.0)")
        assert "## Endpoints" in response.text

    def test_custom_content_type(self):
        response = _client(content_type="text/plain").get("/llms.txt")
        assert response.headers["content-type"] == "text/plain; charset=utf-8"

    def test_header_and_footer(self):
        response = _client(header="# Preamble", footer="-- end --").get("/llms.txt")
        assert response.text.startswith("# Preamble\n\n# Swagger Petstore")
        assert response.text.endswith("\n\n-- end --")

    def test_relative_url_resolved_against_host(self):
        with patch("llms_txt.parser.loader.load_from_url", new_callable=AsyncMock) as mock_load:
            mock_load.return_value = {"info": {"title": "Remote"}}
            client = TestClient(create_app(LlmsOptions()))
            response = client.get("/llms.txt")

        assert response.status_code == 200
        assert response.text == "# Remote"
        mock_load.assert_awaited_once_with("http://testserver/swagger/json")

    def test_load_error_returns_500(self, tmp_path):
        missing = str(tmp_path / "missing.json")
        response = _client(source=SourceConfig(type="file", file=missing)).get("/llms.txt")
        assert response.status_code == 500
        assert response.text.startswith(
            f"Error generating LLMs documentation: Failed to read file: {missing}"
        )

    def test_configuration_error_returns_500(self):
        response = _client(source=SourceConfig(type="url")).get("/llms.txt")
        assert response.status_code == 500
        assert response.text == (
            'Error generating LLMs documentation: URL is required when source type is "url"'
        )


class TestLlmsFullRoute:
    def test_permanent_redirect(self):
        response = _client().get("/llms-full.txt", follow_redirects=False)
        assert response.status_code == 301
        assert response.headers["location"] == "/llms.txt"

    def test_redirect_followed(self):
        response = _client().get("/llms-full.txt")
        assert response.status_code == 200
        assert response.text.startswith("# Swagger Petstore")
