"""
TaskOperator: Abstract interface between the scheduler and task operators.

An operator is handed to a task by the scheduler. During evaluation the
task asks the operator to provide() a spec builder, describes its work with
it, and the scheduler then calls perform() with the finished spec.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Generic, Hashable, TypeVar, TYPE_CHECKING

if TYPE_CHECKING:
    from floe.core.context import RunContext
    from floe.core.task import EvalContext

logger = logging.getLogger(__name__)

P = TypeVar("P")
S = TypeVar("S")
T = TypeVar("T")


class Listener(ABC):
    """
    Receives informational metadata about running tasks.
    """

    @abstractmethod
    def meta(self, task_id: Hashable, key: str, value: str) -> None:
        """
        Report a key/value pair for a task.

        Args:
            task_id: Identity of the reporting task
            key: Metadata key
            value: Metadata value
        """
        pass


class LoggingListener(Listener):
    """Listener that writes metadata to the log."""

    def meta(self, task_id: Hashable, key: str, value: str) -> None:
        logger.info("%s: %s=%s", task_id, key, value)


class RecordingListener(Listener):
    """Listener that keeps every reported entry in memory."""

    def __init__(self):
        self.entries: list[tuple[Hashable, str, str]] = []

    def meta(self, task_id: Hashable, key: str, value: str) -> None:
        self.entries.append((task_id, key, value))

    def for_task(self, task_id: Hashable) -> dict[str, str]:
        """Get the metadata reported by one task"""
        return {key: value for tid, key, value in self.entries if tid == task_id}


class TaskOperator(ABC, Generic[P, S, T]):
    """
    Abstract task operator.

    Type parameters:
        P: What provide() hands to the task (usually a spec builder)
        S: The spec passed back to perform()
        T: The task's result type
    """

    @abstractmethod
    def provide(self, eval_context: 'EvalContext') -> P:
        """
        Provide the task with the means to describe its work.

        Args:
            eval_context: The scheduler's evaluation context

        Returns:
            Provider state for the current task
        """
        pass

    @abstractmethod
    def perform(
        self,
        spec: S,
        listener: Listener,
        run_context: 'RunContext | None' = None,
    ) -> T:
        """
        Perform the work described by spec.

        Args:
            spec: The spec built by the task
            listener: Receives informational metadata
            run_context: Execution mode; production when omitted

        Returns:
            The task result
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


def describe(value: Any) -> str:
    """Short description of a value for log messages"""
    text = repr(value)
    return text if len(text) <= 80 else text[:77] + "..."
