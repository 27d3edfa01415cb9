"""Tests for the YAML config loader."""

import pytest

from toolprep.errors import ConfigError
from toolprep.loader import load_config_file, resolve_import_path
from toolprep.pipeline import prepare_tools


class TestResolveImportPath:
    """Tests for resolve_import_path."""

    def test_resolves_attribute(self, sample_tools):
        """Resolves module:Attribute."""
        import sample_editor_tools

        assert resolve_import_path("sample_editor_tools:Markdown") is sample_editor_tools.Markdown

    def test_resolves_nested_attribute(self, sample_tools):
        """Follows dotted attributes after the colon."""
        obj = resolve_import_path("sample_editor_tools:nested.Header")

        assert obj.__name__ == "Header"

    @pytest.mark.parametrize("path", ["no_colon", ":Attr", "module:"])
    def test_malformed(self, path):
        """Rejects malformed paths."""
        with pytest.raises(ConfigError):
            resolve_import_path(path)

    def test_missing_module(self):
        """Unknown modules raise ConfigError."""
        with pytest.raises(ConfigError, match="Cannot import"):
            resolve_import_path("definitely_not_a_module_xyz:Tool")

    def test_missing_attribute(self, sample_tools):
        """Unknown attributes raise ConfigError."""
        with pytest.raises(ConfigError, match="no attribute"):
            resolve_import_path("sample_editor_tools:Missing")


class TestLoadConfigFile:
    """Tests for load_config_file."""

    def test_loads_tools_in_order(self, config_file):
        """Loads tools and tool config in file order."""
        config = load_config_file(config_file)

        assert list(config.tools) == ["markdown", "embed", "paragraph"]
        assert config.tools_config["markdown"].icon_class_name == "md-icon"
        assert config.tools_config["markdown"].display_in_toolbox is True

    def test_missing_file(self, tmp_path):
        """A missing file is a ConfigError."""
        with pytest.raises(ConfigError, match="Cannot read"):
            load_config_file(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path):
        """Broken YAML is a ConfigError."""
        path = tmp_path / "bad.yaml"
        path.write_text("tools: [unclosed", encoding="utf-8")

        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config_file(path)

    def test_missing_tools(self, tmp_path):
        """A file without tools is a ConfigError."""
        path = tmp_path / "empty.yaml"
        path.write_text("toolsConfig: {}\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="without tools"):
            load_config_file(path)

    def test_non_string_target(self, tmp_path):
        """Tool entries must be import path strings."""
        path = tmp_path / "weird.yaml"
        path.write_text("tools:\n  a: 3\n", encoding="utf-8")

        with pytest.raises(ConfigError):
            load_config_file(path)

    @pytest.mark.asyncio
    async def test_end_to_end(self, config_file):
        """A loaded config prepares as expected."""
        registry = await prepare_tools(load_config_file(config_file))

        assert list(registry.available) == ["markdown"]
        assert list(registry.unavailable) == ["embed"]
        assert list(registry.unprepared()) == ["paragraph"]
