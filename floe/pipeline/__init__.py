"""
Pipeline definition and submitted jobs.
"""

from floe.pipeline.context import PipelineContext, Sink
from floe.pipeline.handle import JobHandle, JobState

__all__ = [
    "PipelineContext",
    "Sink",
    "JobHandle",
    "JobState",
]
