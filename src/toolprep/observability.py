"""Observers that receive preparation cycle events.

The pipeline never logs on its own; it reports to whatever observer the host
injects. LoggingObserver is used when none is given.
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol

from .errors import PreparationFailure

if TYPE_CHECKING:
    from .pipeline import PreparationTask


class PreparationObserver(Protocol):
    """Receives events from a preparation cycle."""

    def cycle_started(self, tasks: Sequence["PreparationTask"]) -> None: ...

    def task_started(self, task: "PreparationTask") -> None: ...

    def task_succeeded(self, task: "PreparationTask") -> None: ...

    def task_failed(self, task: "PreparationTask", failure: PreparationFailure) -> None: ...

    def cycle_finished(
        self, available: Mapping[str, Any], unavailable: Mapping[str, Any]
    ) -> None: ...


class LoggingObserver:
    """Writes cycle events to a standard library logger."""

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger("toolprep.pipeline")

    def cycle_started(self, tasks: Sequence["PreparationTask"]) -> None:
        self.logger.debug(f"Preparing {len(tasks)} tools: {[t.name for t in tasks]}")

    def task_started(self, task: "PreparationTask") -> None:
        self.logger.debug(f"Preparing tool «{task.name}»")

    def task_succeeded(self, task: "PreparationTask") -> None:
        self.logger.debug(f"Tool «{task.name}» is ready")

    def task_failed(self, task: "PreparationTask", failure: PreparationFailure) -> None:
        self.logger.warning(
            f"Tool «{task.name}» was not loaded. Preparation failed because {failure.cause!r}"
        )

    def cycle_finished(
        self, available: Mapping[str, Any], unavailable: Mapping[str, Any]
    ) -> None:
        self.logger.info(
            f"Tools prepared: {len(available)} available, {len(unavailable)} unavailable"
        )


@dataclass
class RecordingObserver:
    """Keeps every event in memory.

    Useful for hosts that want to show why a tool is unavailable.
    """

    events: list[tuple[str, str | None]] = field(default_factory=list)
    failures: dict[str, PreparationFailure] = field(default_factory=dict)

    def cycle_started(self, tasks: Sequence["PreparationTask"]) -> None:
        self.events.append(("cycle_started", None))

    def task_started(self, task: "PreparationTask") -> None:
        self.events.append(("task_started", task.name))

    def task_succeeded(self, task: "PreparationTask") -> None:
        self.events.append(("task_succeeded", task.name))

    def task_failed(self, task: "PreparationTask", failure: PreparationFailure) -> None:
        self.events.append(("task_failed", task.name))
        self.failures[task.name] = failure

    def cycle_finished(
        self, available: Mapping[str, Any], unavailable: Mapping[str, Any]
    ) -> None:
        self.events.append(("cycle_finished", None))

    def started_order(self) -> list[str]:
        """Tool names in the order their routines were started."""
        return [name for kind, name in self.events if kind == "task_started" and name]
