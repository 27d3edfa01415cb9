"""toolprep - sequential preparation of editor tools."""

from .config import EditorConfig, ToolConfig, ToolprepSettings, get_settings
from .errors import ConfigError, PreparationFailure, ToolprepError
from .observability import LoggingObserver, PreparationObserver, RecordingObserver
from .pipeline import PreparationPipeline, PreparationTask, TaskState, prepare_tools
from .registry import ToolRegistry

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "EditorConfig",
    "LoggingObserver",
    "PreparationFailure",
    "PreparationObserver",
    "PreparationPipeline",
    "PreparationTask",
    "RecordingObserver",
    "TaskState",
    "ToolConfig",
    "ToolRegistry",
    "ToolprepError",
    "ToolprepSettings",
    "get_settings",
    "prepare_tools",
]
