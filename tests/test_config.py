from pathlib import Path

import pytest

from llms_txt.config import (
    DEFAULT_SOURCE_URL,
    LlmsOptions,
    SourceConfig,
    load_options,
    validate_options,
)
from llms_txt.errors import ConfigurationError

FIXTURES = Path(__file__).parent / "fixtures"


class TestLlmsOptions:
    def test_defaults(self):
        options = LlmsOptions()
        assert options.source.type == "url"
        assert options.source.url == DEFAULT_SOURCE_URL
        assert options.content_type == "text/markdown"
        assert options.header is None
        assert options.footer is None

    def test_from_mapping_accepts_camel_case(self):
        options = LlmsOptions.from_mapping({
            "source": {"type": "file", "file": "spec.json"},
            "contentType": "text/plain",
        })
        assert options.source.file == "spec.json"
        assert options.content_type == "text/plain"

    def test_accepts_field_names(self):
        options = LlmsOptions(content_type="text/plain")
        assert options.content_type == "text/plain"

    def test_invalid_source_type(self):
        with pytest.raises(ConfigurationError, match="Invalid options"):
            LlmsOptions.from_mapping({"source": {"type": "ftp"}})

    def test_invalid_content_type(self):
        with pytest.raises(ConfigurationError):
            LlmsOptions.from_mapping({"contentType": "application/json"})


class TestValidateOptions:
    def test_file_source_requires_path(self):
        options = LlmsOptions(source=SourceConfig(type="file"))
        with pytest.raises(ConfigurationError, match="File path is required"):
            validate_options(options)

    def test_url_source_requires_url(self):
        options = LlmsOptions(source=SourceConfig(type="url"))
        with pytest.raises(ConfigurationError, match="URL is required"):
            validate_options(options)

    def test_valid_options(self):
        validate_options(LlmsOptions(source=SourceConfig(type="file", file="spec.json")))
        validate_options(LlmsOptions())


class TestLoadOptions:
    def test_load_yaml_file(self):
        options = load_options(FIXTURES / "options.yaml")
        assert options.source.type == "file"
        assert options.source.file == "tests/fixtures/petstore.json"
        assert options.content_type == "text/plain"
        assert options.header == "# Preamble"
        assert options.footer == "Generated by llms-txt"

    def test_empty_file_gives_defaults(self, tmp_path):
        f = tmp_path / "options.yaml"
        f.write_text("", encoding="utf-8")
        assert load_options(f) == LlmsOptions()

    def test_non_mapping_file(self, tmp_path):
        f = tmp_path / "options.yaml"
        f.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="must contain a mapping"):
            load_options(f)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Failed to read options file"):
            load_options(tmp_path / "missing.yaml")
