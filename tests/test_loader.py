"""Tests for toml_env.loader"""

from datetime import date
from pathlib import Path

import pytest

from toml_env.environment import Environment
from toml_env.exceptions import (
    ConfigIOError,
    ConfigParseError,
    MissingSourceError,
    SectionTypeError,
)
from toml_env.loader import (
    extract_section,
    load_config_file,
    load_dotenv,
    load_env_variable,
    parse_document,
    render_document,
)
from toml_env.testing import write_document


class TestParseDocument:
    """Tests for parse_document and render_document"""

    def test_returns_plain_python(self):
        tree = parse_document(
            'a = "x"\nb = 1\nc = 1.5\nd = true\ne = [1, 2]\nf = 2024-01-02\n[t]\ng = "y"\n',
            "test",
        )
        assert tree == {
            "a": "x",
            "b": 1,
            "c": 1.5,
            "d": True,
            "e": [1, 2],
            "f": date(2024, 1, 2),
            "t": {"g": "y"},
        }
        assert type(tree) is dict
        assert type(tree["t"]) is dict
        assert type(tree["e"]) is list

    def test_malformed_names_source(self):
        with pytest.raises(ConfigParseError) as exc_info:
            parse_document("this is = = not toml", "my source")
        assert exc_info.value.code == "PARSE_ERROR"
        assert exc_info.value.details["source"] == "my source"

    def test_render_drops_none_placeholders(self):
        text = render_document({"a": 1, "arr": [None, "x"], "t": {"b": None, "c": "d"}})
        assert parse_document(text, "rendered") == {"a": 1, "arr": ["x"], "t": {"c": "d"}}


class TestLoadFiles:
    """Tests for load_dotenv and load_config_file"""

    def test_missing_optional_file_returns_none(self, tmp_path: Path):
        assert load_dotenv(tmp_path / ".env.toml") is None
        assert load_config_file(tmp_path / "config.toml") is None

    def test_missing_required_file_raises(self, tmp_path: Path):
        with pytest.raises(MissingSourceError) as exc_info:
            load_config_file(tmp_path / "config.toml", required=True)
        assert exc_info.value.code == "MISSING_SOURCE"
        assert "config.toml" in exc_info.value.details["path"]

        with pytest.raises(MissingSourceError):
            load_dotenv(tmp_path / ".env.toml", required=True)

    def test_loads_existing_file(self, tmp_path: Path):
        path = write_document(
            tmp_path / "config.toml",
            """
            value_1 = "Something from config.toml"
            [child]
            value_4 = 5
            """,
        )
        assert load_config_file(path) == {
            "value_1": "Something from config.toml",
            "child": {"value_4": 5},
        }

    def test_accepts_string_paths(self, tmp_path: Path):
        path = write_document(tmp_path / ".env.toml", 'SECRET = "hello-world"\n')
        assert load_dotenv(str(path)) == {"SECRET": "hello-world"}

    def test_malformed_file_raises_parse_error(self, tmp_path: Path):
        path = write_document(tmp_path / ".env.toml", "[unclosed\n")
        with pytest.raises(ConfigParseError) as exc_info:
            load_dotenv(path)
        assert "dotenv TOML file" in exc_info.value.details["source"]

    def test_unreadable_file_raises_io_error(self, tmp_path: Path):
        directory = tmp_path / "config.toml"
        directory.mkdir()
        with pytest.raises(ConfigIOError) as exc_info:
            load_config_file(directory)
        assert exc_info.value.code == "IO_ERROR"


class TestLoadEnvVariable:
    """Tests for load_env_variable"""

    def test_unset_returns_none(self):
        assert load_env_variable("CONFIG", Environment({})) is None

    def test_parses_toml_value(self):
        environment = Environment({"MY_CONFIG": 'value_1 = "a"\nvalue_2 = true\n'})
        assert load_env_variable("MY_CONFIG", environment) == {"value_1": "a", "value_2": True}

    def test_value_naming_a_file_loads_the_file(self, tmp_path: Path):
        path = write_document(tmp_path / "app.toml", "port = 8080\n")
        environment = Environment({"CONFIG": str(path)})
        assert load_env_variable("CONFIG", environment) == {"port": 8080}

    def test_malformed_value_raises(self):
        environment = Environment({"CONFIG": "not = = toml"})
        with pytest.raises(ConfigParseError) as exc_info:
            load_env_variable("CONFIG", environment)
        assert exc_info.value.details["source"] == "environment variable CONFIG"
        assert exc_info.value.details["value"] == "not = = toml"

    def test_named_file_with_bad_toml_raises(self, tmp_path: Path):
        path = write_document(tmp_path / "bad.toml", "[[[\n")
        environment = Environment({"CONFIG": str(path)})
        with pytest.raises(ConfigParseError) as exc_info:
            load_env_variable("CONFIG", environment)
        assert "bad.toml" in exc_info.value.details["source"]


class TestExtractSection:
    """Tests for extract_section"""

    def test_returns_table(self):
        assert extract_section({"CONFIG": {"a": 1}, "SECRET": "x"}, "CONFIG") == {"a": 1}

    def test_absent_returns_none(self):
        assert extract_section({"SECRET": "x"}, "CONFIG") is None

    def test_non_table_raises(self):
        with pytest.raises(SectionTypeError) as exc_info:
            extract_section({"CONFIG": "not a table"}, "CONFIG")
        assert exc_info.value.code == "SECTION_TYPE_ERROR"
        assert exc_info.value.details == {"key": "CONFIG", "type": "str"}
