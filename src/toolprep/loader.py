"""Load an editor configuration from a YAML file.

Example file::

    tools:
      markdown: my_editor.tools.markdown:MarkdownTool
      paragraph: my_editor.tools.paragraph:ParagraphTool
    toolsConfig:
      markdown:
        iconClassName: md-icon
        displayInToolbox: true
"""

import importlib
import logging
from pathlib import Path
from typing import Any

import yaml

from .config import EditorConfig
from .errors import ConfigError

logger = logging.getLogger(__name__)


def resolve_import_path(path: str) -> Any:
    """Import the object named by ``package.module:Attribute``.

    Args:
        path: Import path. Dotted attributes after the colon are followed.

    Returns:
        The resolved object.

    Raises:
        ConfigError: If the path is malformed or cannot be imported.
    """
    module_name, sep, attr_path = path.partition(":")
    if not sep or not module_name or not attr_path:
        raise ConfigError(f"Invalid tool import path '{path}', expected 'module:Attribute'")

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigError(f"Cannot import module '{module_name}': {e}") from e

    for attr in attr_path.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError as e:
            raise ConfigError(f"'{module_name}' has no attribute '{attr_path}'") from e
    return obj


def load_config_file(path: Path) -> EditorConfig:
    """Read a YAML editor configuration and resolve its tool import paths.

    Args:
        path: Path to the YAML file.

    Returns:
        EditorConfig with resolved tool definitions, in file order.

    Raises:
        ConfigError: If the file is missing, unreadable, not a mapping, has no
            ``tools`` entry, or names a tool that cannot be imported.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    if "tools" not in data:
        raise ConfigError("Can't start without tools")

    raw_tools = data["tools"] or {}
    if not isinstance(raw_tools, dict):
        raise ConfigError(f"'tools' in {path} must be a mapping of name to import path")

    tools = {}
    for name, target in raw_tools.items():
        if not isinstance(target, str):
            raise ConfigError(f"Tool '{name}' must be given as an import path string")
        tools[str(name)] = resolve_import_path(target)
        logger.debug(f"Resolved tool {name} -> {target}")

    return EditorConfig.from_mapping(
        {"tools": tools, "toolsConfig": data.get("toolsConfig") or {}}
    )
