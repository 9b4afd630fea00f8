"""
Run context for task operators.

The run context makes the execution mode an explicit input: operators are
told whether they run for real or under test, and test runs carry their own
TestContext instead of sharing process-wide state.
"""

from typing import Any, Callable, Dict, Hashable
from dataclasses import dataclass, field
from enum import Enum


class ExecutionMode(Enum):
    """Execution modes for task operators."""

    PRODUCTION = "production"
    TEST = "test"


class TestContext:
    """
    Values scoped to a single test run.

    Values are created lazily on first access and shared by every operator
    that receives the same TestContext.
    """

    # Not a pytest test class
    __test__ = False

    def __init__(self):
        self._values: Dict[Hashable, Any] = {}

    def value(self, key: Hashable, factory: Callable[[], Any]) -> Any:
        """Get the value stored under key, creating it with factory if absent."""
        if key not in self._values:
            self._values[key] = factory()
        return self._values[key]

    def reset(self) -> None:
        """Drop all values."""
        self._values.clear()

    def __contains__(self, key: Hashable) -> bool:
        return key in self._values


@dataclass
class RunContext:
    """
    Execution mode plus the test context used in test mode.
    """

    mode: ExecutionMode = ExecutionMode.PRODUCTION
    test: TestContext = field(default_factory=TestContext)

    @classmethod
    def production(cls) -> "RunContext":
        return cls(mode=ExecutionMode.PRODUCTION)

    @classmethod
    def for_test(cls, test_context: TestContext | None = None) -> "RunContext":
        return cls(mode=ExecutionMode.TEST, test=test_context or TestContext())

    @property
    def is_test(self) -> bool:
        return self.mode is ExecutionMode.TEST
