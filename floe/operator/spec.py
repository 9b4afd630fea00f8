"""
JobSpec: what a task hands to the JobOperator.

A spec describes one pipeline job: how to define the pipeline, how to
extract a result once the job completed, and how to turn the outcome
into the task's return value.

Example:
    def daily_counts(operator: JobOperator, eval_context: EvalContext) -> JobSpec:
        return (
            operator.provide(eval_context)
            .pipeline(word_count)
            .result(lambda ctx, handle: handle.output("counts").height)
            .success(lambda rows: f"wrote {rows} rows")
            .build()
        )
"""

from dataclasses import dataclass
from typing import Any, Callable, Generic, Hashable, TypeVar, Union

from floe.config.options import PipelineOptions
from floe.pipeline.context import PipelineContext
from floe.pipeline.handle import JobHandle

R = TypeVar("R")
T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[R]):
    """The job completed and produced a result"""
    value: R


@dataclass(frozen=True)
class Failure:
    """The job failed at submission, while running, or during extraction"""
    error: Exception


Outcome = Union[Success, Failure]


def reraise(error: Exception) -> Any:
    """Default failure handler: the task fails with the job's error"""
    raise error


@dataclass
class JobSpec(Generic[R, T]):
    """
    Specification of a pipeline job.

    Type parameters:
        R: Raw result extracted from the completed job
        T: Value returned by the task
    """

    task_id: Hashable
    pipeline: Callable[[PipelineContext], None] | None = None
    result: Callable[[PipelineContext, JobHandle], R] | None = None
    success: Callable[[R], T] | None = None
    failure: Callable[[Exception], T] | None = reraise
    options: Callable[[], PipelineOptions] | None = None

    def validate(self) -> None:
        """
        Check that the spec is complete.

        Raises:
            ValueError: If a required callable is missing
        """
        for name in ("pipeline", "result", "success", "failure"):
            fn = getattr(self, name)
            if fn is None:
                raise ValueError(f"JobSpec for {self.task_id} is missing '{name}'")
            if not callable(fn):
                raise ValueError(
                    f"JobSpec for {self.task_id}: '{name}' must be callable, "
                    f"got {type(fn).__name__}"
                )
        if self.options is not None and not callable(self.options):
            raise ValueError(
                f"JobSpec for {self.task_id}: 'options' must be a callable "
                f"returning PipelineOptions"
            )

    def complete(self, outcome: Outcome) -> T:
        """Map an outcome to the task's return value"""
        if isinstance(outcome, Success):
            return self.success(outcome.value)
        return self.failure(outcome.error)


class JobSpecBuilder(Generic[T]):
    """
    Fluent builder for a JobSpec, bound to the current task.
    """

    def __init__(self, task_id: Hashable):
        self.task_id = task_id
        self._fields: dict[str, Any] = {}

    def options(self, options: Callable[[], PipelineOptions]) -> "JobSpecBuilder[T]":
        self._fields["options"] = options
        return self

    def pipeline(self, pipeline: Callable[[PipelineContext], None]) -> "JobSpecBuilder[T]":
        self._fields["pipeline"] = pipeline
        return self

    def result(self, result: Callable[[PipelineContext, JobHandle], Any]) -> "JobSpecBuilder[T]":
        self._fields["result"] = result
        return self

    def success(self, success: Callable[[Any], T]) -> "JobSpecBuilder[T]":
        self._fields["success"] = success
        return self

    def failure(self, failure: Callable[[Exception], T]) -> "JobSpecBuilder[T]":
        self._fields["failure"] = failure
        return self

    def build(self) -> JobSpec[Any, T]:
        return JobSpec(task_id=self.task_id, **self._fields)

    def __repr__(self):
        return f"JobSpecBuilder({self.task_id}, fields={sorted(self._fields)})"
