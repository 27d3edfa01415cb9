"""Tool registry: name to definition storage and preparation partitions."""

import logging
from collections.abc import Callable, Iterator, Mapping
from types import MappingProxyType
from typing import Any

from .config import EditorConfig, ToolConfig
from .errors import ConfigError

logger = logging.getLogger(__name__)


def get_prepare_routine(definition: Any) -> Callable[..., Any] | None:
    """Return the definition's preparation routine, or None if it has none.

    Definitions may be classes/objects exposing a ``prepare`` attribute or
    plain mappings with a ``prepare`` key. Non-callable values count as absent.
    """
    if isinstance(definition, Mapping):
        routine = definition.get("prepare")
    else:
        routine = getattr(definition, "prepare", None)
    return routine if callable(routine) else None


class ToolRegistry:
    """Holds the tools of one editor instance and the outcome of preparing them.

    The name to definition mapping is fixed at construction. The ``available``
    and ``unavailable`` partitions stay empty until a preparation cycle fills them.
    """

    def __init__(
        self,
        config: EditorConfig | Mapping[str, Any],
        default_config: ToolConfig | None = None,
    ):
        """Initialize the registry.

        Args:
            config: Editor configuration, either an EditorConfig or a mapping
                with a ``tools`` entry.
            default_config: Per-tool defaults. Defaults to ToolConfig().

        Raises:
            ConfigError: If the configuration has no ``tools`` entry.
        """
        if not isinstance(config, EditorConfig):
            if not isinstance(config, Mapping):
                raise ConfigError(
                    f"Editor config must be a mapping or EditorConfig, got {type(config).__name__}"
                )
            config = EditorConfig.from_mapping(config)

        self.config = config
        self._default_config = default_config or ToolConfig()
        self._tool_classes: dict[str, Any] = {}
        for name, definition in config.tools.items():
            self._tool_classes[name] = definition

        self._available: dict[str, Any] = {}
        self._unavailable: dict[str, Any] = {}

        logger.debug(f"Registered {len(self._tool_classes)} tools: {list(self._tool_classes)}")

    @property
    def available(self) -> Mapping[str, Any]:
        """Tools whose preparation succeeded in the last cycle."""
        return MappingProxyType(self._available)

    @property
    def unavailable(self) -> Mapping[str, Any]:
        """Tools whose preparation failed in the last cycle."""
        return MappingProxyType(self._unavailable)

    @property
    def tool_classes(self) -> Mapping[str, Any]:
        """All registered tool definitions, in registration order."""
        return MappingProxyType(self._tool_classes)

    @property
    def default_config(self) -> ToolConfig:
        """Configuration used for tools the host did not configure."""
        return self._default_config

    def __contains__(self, name: object) -> bool:
        return name in self._tool_classes

    def __iter__(self) -> Iterator[str]:
        return iter(self._tool_classes)

    def __len__(self) -> int:
        return len(self._tool_classes)

    def names(self) -> list[str]:
        """Tool names in registration order."""
        return list(self._tool_classes)

    def get(self, name: str) -> Any | None:
        """Get a tool definition by name.

        Args:
            name: Tool name

        Returns:
            The definition if registered
        """
        return self._tool_classes.get(name)

    def get_tools(self) -> list[Any]:
        """Return every registered definition in registration order."""
        return list(self._tool_classes.values())

    def tool_config(self, name: str) -> ToolConfig:
        """Return the merged configuration for a tool.

        Args:
            name: Tool name

        Raises:
            KeyError: If no tool with that name is registered.
        """
        if name not in self._tool_classes:
            raise KeyError(name)
        return self._default_config.merged_with(self.config.tools_config.get(name))

    def has_preparation(self, name: str) -> bool:
        """Check whether a registered tool exposes a preparation routine."""
        return get_prepare_routine(self._tool_classes.get(name)) is not None

    def unprepared(self) -> dict[str, Any]:
        """Tools without a preparation routine.

        These never land in either partition; hosts that want a complete usable
        set merge them into ``available`` themselves.
        """
        return {
            name: definition
            for name, definition in self._tool_classes.items()
            if get_prepare_routine(definition) is None
        }

    def reset_partitions(self) -> None:
        """Empty both partitions before a new cycle."""
        self._available.clear()
        self._unavailable.clear()

    def record_available(self, name: str) -> None:
        """Mark a tool as successfully prepared."""
        self._record(self._available, name)

    def record_unavailable(self, name: str) -> None:
        """Mark a tool as failed to prepare."""
        self._record(self._unavailable, name)

    def _record(self, partition: dict[str, Any], name: str) -> None:
        if name not in self._tool_classes:
            raise KeyError(name)
        if name in self._available or name in self._unavailable:
            raise RuntimeError(f"Tool '{name}' was already classified in this cycle")
        partition[name] = self._tool_classes[name]
