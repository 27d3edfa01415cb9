"""Exceptions raised by toolprep."""


class ToolprepError(Exception):
    """Base class for toolprep errors."""


class ConfigError(ToolprepError):
    """Editor configuration is missing something the pipeline cannot start without."""


class PreparationFailure(ToolprepError):
    """A tool's preparation routine failed.

    Never raised out of a preparation cycle. The pipeline builds one per failed
    tool and hands it to the observer so the original error is not lost.

    Attributes:
        tool_name: Name of the tool whose routine failed.
        cause: The exception the routine raised.
    """

    def __init__(self, tool_name: str, cause: BaseException):
        self.tool_name = tool_name
        self.cause = cause
        super().__init__(f"Preparation of tool '{tool_name}' failed: {cause!r}")
