"""
floe: run polars pipeline jobs as workflow tasks.

floe bridges a workflow scheduler's task lifecycle (provide, perform,
success or failure) and a pipeline job's lifecycle (define, submit,
await completion, extract result).

Core concepts:
- JobSpec: How to define a pipeline and turn its outcome into a task result
- JobOperator: Runs a JobSpec synchronously within a task
- PipelineContext: Where sources, transforms and sinks are defined
- Mocking / JobTest: Test-mode results and scripted pipeline tests

Example:
    from floe import EvalContext, JobOperator, LoggingListener, TaskId

    def word_count(ctx):
        lines = ctx.source("lines", lambda: pl.scan_csv("lines.csv"))
        ctx.sink("counts", count_words(lines), lambda df: df.write_csv("counts.csv"))

    operator = JobOperator()
    spec = (
        operator.provide(EvalContext(TaskId.create("word-count")))
        .pipeline(word_count)
        .result(lambda ctx, handle: handle.output("counts").height)
        .success(lambda rows: rows)
        .build()
    )
    rows = operator.perform(spec, LoggingListener())
"""

from floe.config.options import PipelineOptions
from floe.core.context import ExecutionMode, RunContext, TestContext
from floe.core.operator import Listener, LoggingListener, RecordingListener, TaskOperator
from floe.core.task import EvalContext, TaskId
from floe.errors import PipelineExecutionError
from floe.operator import (
    JOB_ID_META_KEY,
    Failure,
    JobOperator,
    JobSpec,
    JobSpecBuilder,
    Mocking,
    Success,
)
from floe.pipeline import JobHandle, JobState, PipelineContext
from floe.testing import JobTest, expect_frame

__version__ = "0.1.0"
__all__ = [
    "PipelineOptions",
    "ExecutionMode",
    "RunContext",
    "TestContext",
    "Listener",
    "LoggingListener",
    "RecordingListener",
    "TaskOperator",
    "EvalContext",
    "TaskId",
    "PipelineExecutionError",
    "JOB_ID_META_KEY",
    "JobOperator",
    "JobSpec",
    "JobSpecBuilder",
    "Success",
    "Failure",
    "Mocking",
    "JobHandle",
    "JobState",
    "PipelineContext",
    "JobTest",
    "expect_frame",
]
