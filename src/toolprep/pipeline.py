"""Sequential preparation of registered tools.

Each tool may expose a ``prepare`` routine. Routines run one after another in
registration order; a routine that raises marks its tool unavailable and the
cycle moves on to the next one.
"""

import inspect
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .config import EditorConfig, ToolConfig
from .errors import PreparationFailure
from .observability import LoggingObserver, PreparationObserver
from .registry import ToolRegistry, get_prepare_routine


class TaskState(str, Enum):
    """Lifecycle of a single preparation task."""

    PENDING = "pending"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


def _accepts_config(routine: Callable[..., Any]) -> bool:
    """Check whether a routine needs a positional argument for its tool config.

    Positional parameters with a default are left alone.
    """
    try:
        params = inspect.signature(routine).parameters.values()
    except (TypeError, ValueError):
        return False
    for p in params:
        if p.kind is inspect.Parameter.VAR_POSITIONAL:
            return True
        if (
            p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
            and p.default is p.empty
        ):
            return True
    return False


@dataclass
class PreparationTask:
    """A tool's preparation routine paired with the tool it belongs to.

    Attributes:
        name: Tool name.
        routine: The tool's ``prepare`` callable.
        definition: The tool definition itself.
        config: Merged configuration handed to the routine if it accepts one.
        state: Where the task is in its lifecycle.
    """

    name: str
    routine: Callable[..., Any]
    definition: Any
    config: ToolConfig
    state: TaskState = TaskState.PENDING

    async def run(self) -> None:
        """Invoke the routine and wait for it, however it reports completion."""
        if _accepts_config(self.routine):
            result = self.routine(self.config)
        else:
            result = self.routine()
        if inspect.isawaitable(result):
            await result


class PreparationPipeline:
    """Runs every tool's preparation routine and partitions the tools.

    There is no timeout and no retry: a routine that never completes stalls
    the whole cycle.
    """

    def __init__(self, registry: ToolRegistry, observer: PreparationObserver | None = None):
        """Initialize the pipeline.

        Args:
            registry: Tools to prepare. Partitions are written back into it.
            observer: Receives cycle events, including failure details.
                Defaults to a LoggingObserver.
        """
        self.registry = registry
        self.observer = observer or LoggingObserver()
        self.tasks: list[PreparationTask] = []

    def build_tasks(self) -> list[PreparationTask]:
        """Build the ordered task list, skipping tools without a routine."""
        tasks = []
        for name, definition in self.registry.tool_classes.items():
            routine = get_prepare_routine(definition)
            if routine is None:
                continue
            tasks.append(
                PreparationTask(
                    name=name,
                    routine=routine,
                    definition=definition,
                    config=self.registry.tool_config(name),
                )
            )
        return tasks

    async def prepare(self) -> None:
        """Run one preparation cycle.

        Partitions from a previous cycle are discarded first. Returns once every
        task has been attempted; failures of individual tools do not raise.
        """
        self.registry.reset_partitions()
        self.tasks = self.build_tasks()
        self.observer.cycle_started(self.tasks)

        for task in self.tasks:
            await self._run_task(task)

        self.observer.cycle_finished(self.registry.available, self.registry.unavailable)

    async def _run_task(self, task: PreparationTask) -> None:
        task.state = TaskState.RUNNING
        self.observer.task_started(task)
        try:
            await task.run()
        except Exception as e:
            task.state = TaskState.FAILED
            self.registry.record_unavailable(task.name)
            self.observer.task_failed(task, PreparationFailure(task.name, e))
        else:
            task.state = TaskState.SUCCEEDED
            self.registry.record_available(task.name)
            self.observer.task_succeeded(task)


async def prepare_tools(
    config: EditorConfig | Mapping[str, Any],
    observer: PreparationObserver | None = None,
    default_config: ToolConfig | None = None,
) -> ToolRegistry:
    """Build a registry from config and run one preparation cycle on it.

    Args:
        config: Editor configuration with a ``tools`` entry.
        observer: Optional observer for cycle events.
        default_config: Per-tool defaults for tools the host did not configure.

    Returns:
        The registry, with ``available`` and ``unavailable`` filled in.

    Raises:
        ConfigError: If the configuration has no ``tools`` entry. No routine runs.
    """
    registry = ToolRegistry(config, default_config=default_config)
    await PreparationPipeline(registry, observer).prepare()
    return registry
