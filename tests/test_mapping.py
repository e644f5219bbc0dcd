"""Tests for toml_env.mapping"""

import io

import pytest

from toml_env.environment import Environment
from toml_env.exceptions import InvalidAutoMapNameError, InvalidKeyPathError
from toml_env.key_path import KeyPath
from toml_env.logger import DefaultLogger
from toml_env.mapping import AutoMapEnvArgs, auto_map_env, auto_map_key_path, map_env


class TestMapEnv:
    """Tests for explicit mapping"""

    def test_maps_set_variables(self):
        environment = Environment({"VALUE_1": "one", "VALUE_5": "five"})
        tree = map_env({"VALUE_1": "value_1", "VALUE_5": "child.value_5"}, environment)
        assert tree == {"value_1": "one", "child": {"value_5": "five"}}

    def test_unset_variable_is_absent(self):
        environment = Environment({"VALUE_1": "one"})
        tree = map_env({"VALUE_1": "value_1", "VALUE_99": "child.value_99"}, environment)
        assert tree == {"value_1": "one"}
        assert "child" not in tree

    def test_nothing_set_gives_empty_tree(self):
        assert map_env({"VALUE_99": "value_99"}, Environment({})) == {}

    def test_accepts_key_path_objects(self):
        environment = Environment({"HOST": "example.com"})
        tree = map_env({"HOST": KeyPath.parse("servers.0.host")}, environment)
        assert tree == {"servers": [{"host": "example.com"}]}

    def test_values_stay_strings(self):
        environment = Environment({"PORT": "8080", "DEBUG": "true"})
        assert map_env({"PORT": "port", "DEBUG": "debug"}, environment) == {
            "port": "8080",
            "debug": "true",
        }

    def test_invalid_path_raises_even_when_unset(self):
        with pytest.raises(InvalidKeyPathError):
            map_env({"VALUE_1": "child..value"}, Environment({}))

    def test_later_entry_wins_on_same_path(self):
        environment = Environment({"A": "first", "B": "second"})
        assert map_env({"A": "value", "B": "value"}, environment) == {"value": "second"}


class TestAutoMapEnvArgs:
    """Tests for AutoMapEnvArgs defaults"""

    def test_defaults(self):
        args = AutoMapEnvArgs()
        assert args.divider == "__"
        assert args.prefix == "CONFIG"
        assert args.transform("VALUE_6") == "value_6"
        assert args.full_prefix == "CONFIG__"

    def test_no_prefix(self):
        assert AutoMapEnvArgs(prefix=None).full_prefix == ""

    def test_empty_divider_rejected(self):
        with pytest.raises(ValueError):
            AutoMapEnvArgs(divider="")


class TestAutoMapKeyPath:
    """Tests for auto_map_key_path"""

    def test_splits_and_lowercases(self):
        args = AutoMapEnvArgs(prefix="MY_APP")
        assert auto_map_key_path("MY_APP__CHILD__VALUE_6", args).render() == "child.value_6"

    def test_numeric_component_is_index(self):
        args = AutoMapEnvArgs(prefix="MY_APP")
        path = auto_map_key_path("MY_APP__ARRAY__0", args)
        assert path == KeyPath.parse("array.0")

    def test_custom_transform_and_divider(self):
        args = AutoMapEnvArgs(prefix="APP", divider="_", transform=str.title)
        assert auto_map_key_path("APP_SERVER_HOST", args).render() == "Server.Host"

    def test_nothing_after_prefix_raises(self):
        args = AutoMapEnvArgs(prefix="MY_APP")
        with pytest.raises(InvalidAutoMapNameError) as exc_info:
            auto_map_key_path("MY_APP__", args)
        assert exc_info.value.details == {"variable": "MY_APP__"}

    def test_empty_component_raises(self):
        args = AutoMapEnvArgs(prefix="MY_APP")
        with pytest.raises(InvalidAutoMapNameError):
            auto_map_key_path("MY_APP__A____B", args)


class TestAutoMapEnv:
    """Tests for automatic mapping"""

    def test_prefix_mapping(self):
        environment = Environment(
            {
                "MY_APP__CHILD__VALUE_6": "X",
                "MY_APP__ARRAY__0": "Hello",
                "MY_APP__ARRAY__1": "Hello",
                "UNRELATED": "ignored",
                "MY_APPLE": "ignored",
            }
        )
        tree = auto_map_env(AutoMapEnvArgs(prefix="MY_APP"), environment)
        assert tree == {"child": {"value_6": "X"}, "array": ["Hello", "Hello"]}

    def test_prefix_itself_is_not_mapped(self):
        environment = Environment({"MY_APP": "whole", "MY_APP__VALUE": "v"})
        assert auto_map_env(AutoMapEnvArgs(prefix="MY_APP"), environment) == {"value": "v"}

    def test_without_prefix_maps_everything(self):
        environment = Environment({"HOST": "h", "DB__PORT": "5432"})
        tree = auto_map_env(AutoMapEnvArgs(prefix=None), environment)
        assert tree == {"host": "h", "db": {"port": "5432"}}

    def test_indices_out_of_order(self):
        environment = Environment({"CONFIG__ARR__2": "c", "CONFIG__ARR__10": "k"})
        tree = auto_map_env(AutoMapEnvArgs(), environment)
        assert len(tree["arr"]) == 11
        assert tree["arr"][2] == "c"
        assert tree["arr"][10] == "k"
        assert tree["arr"][0] is None

    def test_table_key_keeps_earlier_array_items(self):
        environment = Environment({"MY_APP__A__0": "zero", "MY_APP__A__X": "x"})
        # A__0 sorts first and creates an array, A__X needs a table
        tree = auto_map_env(AutoMapEnvArgs(prefix="MY_APP"), environment)
        assert tree == {"a": {"0": "zero", "x": "x"}}

    def test_degenerate_names_skipped_with_warning(self):
        output = io.StringIO()
        environment = Environment({"MY_APP__": "empty", "MY_APP__OK": "fine"})

        tree = auto_map_env(
            AutoMapEnvArgs(prefix="MY_APP"), environment, DefaultLogger(output=output)
        )

        assert tree == {"ok": "fine"}
        assert "[WARNING]" in output.getvalue()
        assert "MY_APP__" in output.getvalue()

    def test_no_matching_variables(self):
        assert auto_map_env(AutoMapEnvArgs(prefix="MY_APP"), Environment({"X": "1"})) == {}
