"""Shared fixtures for toolprep tests."""

import textwrap

import pytest

SAMPLE_TOOLS = textwrap.dedent(
    '''
    """Tools used by the loader and CLI tests."""


    class Markdown:
        @staticmethod
        async def prepare():
            return None


    class Embed:
        @staticmethod
        async def prepare():
            raise ConnectionError("network down")


    class Paragraph:
        pass


    class nested:
        class Header:
            @classmethod
            def prepare(cls, config):
                cls.icon = config.icon_class_name
    '''
)

SAMPLE_CONFIG = textwrap.dedent(
    """
    tools:
      markdown: sample_editor_tools:Markdown
      embed: sample_editor_tools:Embed
      paragraph: sample_editor_tools:Paragraph
    toolsConfig:
      markdown:
        iconClassName: md-icon
        displayInToolbox: true
    """
)


@pytest.fixture
def sample_tools(tmp_path, monkeypatch):
    """Put an importable tools module on sys.path."""
    (tmp_path / "sample_editor_tools.py").write_text(SAMPLE_TOOLS, encoding="utf-8")
    monkeypatch.syspath_prepend(str(tmp_path))
    return tmp_path


@pytest.fixture
def config_file(sample_tools):
    """A YAML editor config referencing the sample tools."""
    path = sample_tools / "toolprep.yaml"
    path.write_text(SAMPLE_CONFIG, encoding="utf-8")
    return path
