"""Tests for settings loading and their effect on tree defaults."""

import json

import pytest

from structured.config import (
    StructuredSettings,
    env_overrides,
    get_settings,
    load_settings,
    set_settings,
)
from structured.exceptions import ConfigurationError, NotFoundError, StructuredError
from structured.tree import Tree


class TestStructuredSettings:
    """Test the settings dataclass."""

    def test_defaults(self):
        settings = StructuredSettings()
        assert settings.traversal == "dfs"
        assert settings.string_delim == " "
        assert settings.multiline is False
        assert settings.dot_graph_attr == {}
        assert settings.dot_node_attr == {}

    def test_invalid_traversal(self):
        with pytest.raises(ConfigurationError) as excinfo:
            StructuredSettings(traversal="sideways")
        assert excinfo.value.context["allowed"] == ["dfs", "bfs"]

    def test_invalid_dot_attrs(self):
        with pytest.raises(ConfigurationError):
            StructuredSettings(dot_node_attr="box")

    def test_invalid_scalar_types(self):
        with pytest.raises(ConfigurationError) as excinfo:
            StructuredSettings(string_delim=2)
        assert excinfo.value.context["setting"] == "string_delim"
        with pytest.raises(ConfigurationError):
            StructuredSettings(multiline="yes")
        with pytest.raises(ConfigurationError):
            StructuredSettings.from_dict({"multiline": 1})

    def test_unknown_keys(self):
        with pytest.raises(ConfigurationError) as excinfo:
            StructuredSettings.from_dict({"traversal": "bfs", "colour": "red"})
        assert excinfo.value.context["unknown"] == ["colour"]

    def test_to_dict(self):
        settings = StructuredSettings(traversal="bfs", dot_node_attr={"shape": "box"})
        data = settings.to_dict()
        assert data["traversal"] == "bfs"
        data["dot_node_attr"]["shape"] = "circle"
        assert settings.dot_node_attr == {"shape": "box"}

    def test_errors_share_base_class(self):
        with pytest.raises(StructuredError):
            StructuredSettings(traversal="sideways")


class TestLoadSettings:
    """Test loading settings from dicts, files and the environment."""

    def test_no_source(self, clean_env):
        assert load_settings() == StructuredSettings()

    def test_from_dict(self, clean_env):
        settings = load_settings({"traversal": "bfs", "multiline": True})
        assert settings.traversal == "bfs"
        assert settings.multiline is True

    def test_from_yaml(self, clean_env, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("traversal: bfs\nstring_delim: '  '\ndot_node_attr:\n  shape: box\n")
        settings = load_settings(path)
        assert settings.traversal == "bfs"
        assert settings.string_delim == "  "
        assert settings.dot_node_attr == {"shape": "box"}

    def test_from_json(self, clean_env, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"multiline": True}))
        assert load_settings(str(path)).multiline is True

    def test_empty_yaml(self, clean_env, tmp_path):
        path = tmp_path / "settings.yml"
        path.write_text("")
        assert load_settings(path) == StructuredSettings()

    def test_missing_file(self, clean_env, tmp_path):
        with pytest.raises(NotFoundError):
            load_settings(tmp_path / "missing.yaml")

    def test_unsupported_format(self, clean_env, tmp_path):
        path = tmp_path / "settings.ini"
        path.write_text("[settings]\n")
        with pytest.raises(ConfigurationError):
            load_settings(path)

    def test_non_mapping_file(self, clean_env, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("- dfs\n- bfs\n")
        with pytest.raises(ConfigurationError):
            load_settings(path)

    def test_invalid_source_type(self, clean_env):
        with pytest.raises(ConfigurationError):
            load_settings(42)

    def test_environment_overrides(self, clean_env):
        clean_env.setenv("STRUCTURED_TRAVERSAL", "bfs")
        clean_env.setenv("STRUCTURED_MULTILINE", "true")
        clean_env.setenv("STRUCTURED_DOT_NODE_ATTR", "ignored")
        assert env_overrides() == {"traversal": "bfs", "multiline": True}
        settings = load_settings({"traversal": "dfs"})
        assert settings.traversal == "bfs"
        assert settings.multiline is True

    def test_numeric_environment_delim_stays_a_string(self, clean_env):
        clean_env.setenv("STRUCTURED_STRING_DELIM", "2")
        assert env_overrides() == {"string_delim": "2"}
        settings = load_settings()
        assert settings.string_delim == "2"
        tree = Tree.new(["a", "b"])
        set_settings(settings)
        assert tree.as_string() == "(a2b)"

    def test_non_boolean_environment_multiline(self, clean_env):
        clean_env.setenv("STRUCTURED_MULTILINE", "2")
        with pytest.raises(ConfigurationError):
            load_settings()

    def test_environment_ignored_when_disabled(self, clean_env):
        clean_env.setenv("STRUCTURED_TRAVERSAL", "bfs")
        assert load_settings({"traversal": "dfs"}, use_env=False).traversal == "dfs"


class TestSettingsDefaults:
    """Test that active settings supply tree defaults."""

    def test_set_settings_returns_previous(self):
        original = get_settings()
        bfs = StructuredSettings(traversal="bfs")
        assert set_settings(bfs) is original
        assert get_settings() is bfs

    def test_traversal_default(self):
        tree = Tree.new(["a", ["b", "d"], "c"])
        assert [n.value for n in tree.find_nodes(lambda n: True)] == ["a", "b", "d", "c"]
        set_settings(StructuredSettings(traversal="bfs"))
        assert [n.value for n in tree.find_nodes(lambda n: True)] == ["a", "b", "c", "d"]
        assert [n.value for n in tree.find_nodes(lambda n: True, traversal="dfs")] == [
            "a",
            "b",
            "d",
            "c",
        ]

    def test_as_string_defaults(self):
        tree = Tree.new(["a", "b"])
        set_settings(StructuredSettings(string_delim="\t", multiline=True))
        assert tree.as_string() == "(a\n\tb)"
        assert tree.as_string(delim=" ", multiline=False) == "(a b)"

    def test_build_dot_defaults(self):
        set_settings(StructuredSettings(dot_node_attr={"shape": "box"}))
        source = Tree.new(["a", "b"]).build_dot().source
        assert "node [shape=box]" in source
        source = Tree.new(["a", "b"]).build_dot(node_attr={"shape": "circle"}).source
        assert "node [shape=circle]" in source
