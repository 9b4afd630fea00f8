"""
Scheduler-facing contract.

- TaskId: identity of a task invocation
- TaskOperator: provide/perform lifecycle implemented by operators
- Listener: receives informational task metadata
- RunContext: explicit execution mode and test-scoped state
"""

from floe.core.task import TaskId, EvalContext
from floe.core.context import ExecutionMode, TestContext, RunContext
from floe.core.operator import (
    Listener,
    LoggingListener,
    RecordingListener,
    TaskOperator,
)

__all__ = [
    "TaskId",
    "EvalContext",
    "ExecutionMode",
    "TestContext",
    "RunContext",
    "Listener",
    "LoggingListener",
    "RecordingListener",
    "TaskOperator",
]
