"""
Task identity: how the scheduler names a single task invocation.

A TaskId combines the task name with the arguments it was invoked with,
so two invocations of the same task with different arguments are distinct.
"""

import hashlib
from dataclasses import dataclass, field
from typing import Any, Hashable


@dataclass(frozen=True)
class TaskId:
    """
    Identity of a task invocation.

    Example:
        task_id = TaskId.create("word-count", "2024-01-01")
        str(task_id)  # 'word-count(2024-01-01)#1b2c3d4e'
    """

    name: str
    args: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def create(cls, name: str, *args: Any) -> "TaskId":
        """Create a task id from a name and the invocation arguments"""
        if not name:
            raise ValueError("Task name must not be empty")
        return cls(name=name, args=tuple(str(arg) for arg in args))

    @property
    def hash(self) -> str:
        """Short digest of name and args"""
        digest = hashlib.sha1(self.name.encode("utf-8"))
        for arg in self.args:
            digest.update(b"\0")
            digest.update(arg.encode("utf-8"))
        return digest.hexdigest()[:8]

    def __str__(self) -> str:
        return f"{self.name}({','.join(self.args)})#{self.hash}"


@dataclass(frozen=True)
class EvalContext:
    """The scheduler's view of the task currently being evaluated"""

    current_task_id: Hashable
