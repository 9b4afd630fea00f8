"""
Execution interfaces for floe pipelines.

Concrete runners live in floe.runtime and are resolved by name
from the pipeline options.
"""

from floe.execution.runner import Runner, get_runner

__all__ = [
    "Runner",
    "get_runner",
]
