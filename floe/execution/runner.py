"""
Runner: Abstract interface for pipeline execution.

Runners take a closed PipelineContext and execute it somewhere:
in the calling thread, on a worker thread, or on a remote backend.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from floe.pipeline.context import PipelineContext
    from floe.pipeline.handle import JobHandle


class Runner(ABC):
    """
    Abstract runner interface.

    The runner is responsible for:
    1. Starting execution of the context's sinks
    2. Returning a JobHandle without waiting, when the backend allows it
    3. Assigning backend job ids, when the backend has them
    """

    @abstractmethod
    def run(self, context: 'PipelineContext') -> 'JobHandle':
        """
        Start executing a pipeline.

        Args:
            context: The closed context to execute

        Returns:
            Handle to the submitted job
        """
        pass

    def __repr__(self):
        return f"{self.__class__.__name__}()"


def get_runner(name: str) -> type[Runner]:
    """
    Resolve a runner class by name.

    Raises:
        ValueError: If no runner is registered under name
    """
    # Import here to avoid circular dependency
    from floe.runtime.direct import DirectRunner
    from floe.runtime.threaded import ThreadedRunner

    runners: dict[str, type[Runner]] = {
        "direct": DirectRunner,
        "threaded": ThreadedRunner,
    }
    if name not in runners:
        raise ValueError(
            f"Unknown runner '{name}', expected one of: {', '.join(sorted(runners))}"
        )
    return runners[name]
