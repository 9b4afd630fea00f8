"""
Runners for floe pipelines.
"""

from floe.runtime.direct import DirectRunner
from floe.runtime.threaded import ThreadedRunner

__all__ = [
    "DirectRunner",
    "ThreadedRunner",
]
