"""
JobOperator: runs pipeline jobs for tasks and waits for their results.

In production the operator defines the pipeline on a fresh context,
submits it, reports the backend job id, waits for completion and
extracts the result. In test mode it returns a mocked result or runs
the pipeline against a JobTest instead.
"""

import logging
from typing import Any, Hashable, TypeVar

from floe.config.options import PipelineOptions
from floe.core.context import RunContext
from floe.core.operator import Listener, TaskOperator, describe
from floe.core.task import EvalContext
from floe.operator.mocking import Mocking
from floe.operator.spec import Failure, JobSpec, JobSpecBuilder, Outcome, Success
from floe.pipeline.context import PipelineContext

logger = logging.getLogger(__name__)

T = TypeVar("T")

JOB_ID_META_KEY = "dataflow-job-id"
MOCK_KEY = "floe.operator.mock"


class JobOperator(TaskOperator[JobSpecBuilder[T], JobSpec[Any, T], T]):
    """
    Task operator for pipeline jobs.

    Every job gets exactly one outcome. Submission, completion and
    extraction errors are handed to the spec's failure handler; there
    are no retries. Only an invalid spec, and in test mode a missing
    mock, raise out of perform().

    Example:
        operator = JobOperator()
        spec = (
            operator.provide(EvalContext(task_id))
            .pipeline(word_count)
            .result(lambda ctx, handle: handle.output("counts"))
            .success(lambda counts: counts.height)
            .build()
        )
        rows = operator.perform(spec, LoggingListener())
    """

    def provide(self, eval_context: EvalContext) -> JobSpecBuilder[T]:
        return JobSpecBuilder(eval_context.current_task_id)

    @staticmethod
    def mock(run_context: RunContext) -> Mocking:
        """Get the mock registry of a test run, creating it on first use"""
        return run_context.test.value(MOCK_KEY, Mocking)

    def perform(
        self,
        spec: JobSpec[Any, T],
        listener: Listener,
        run_context: RunContext | None = None,
    ) -> T:
        spec.validate()
        run_context = run_context or RunContext.production()
        if run_context.is_test:
            return self._run_test(spec, run_context)
        return self._run_prod(spec, listener)

    def _run_test(self, spec: JobSpec[Any, T], run_context: RunContext) -> T:
        mocking = self.mock(run_context)

        mocked = mocking.lookup_result(spec.task_id)
        if mocked is not None:
            logger.debug("Task %s: using mocked result %s", spec.task_id, describe(mocked.value))
            return spec.complete(mocked)

        factory = mocking.lookup_job_test(spec.task_id)
        if factory is None:
            raise AssertionError(
                f"Missing either mocked job result or JobTest for {spec.task_id}, "
                f"please set them up using either JobOperator.mock(run_context).result(...) "
                f"or JobOperator.mock(run_context).job_test(...) before running the workflow"
            )

        job_test = factory()
        job_test.set_up()
        ctx = self._test_context(job_test.test_id)
        logger.debug("Task %s: running %s", spec.task_id, job_test)

        outcome = self._execute(spec, ctx)

        # The JobTest is only torn down when the job succeeded
        if isinstance(outcome, Success):
            job_test.tear_down()
        return spec.complete(outcome)

    def _test_context(self, test_id: str) -> PipelineContext:
        options = PipelineOptions.from_args([f"--app_name={test_id}"])
        ctx = PipelineContext(options)
        if not ctx.is_test:
            raise AssertionError(f"Failed to create PipelineContext for test with id {test_id}")
        return ctx

    def _run_prod(self, spec: JobSpec[Any, T], listener: Listener) -> T:
        try:
            options = spec.options() if spec.options is not None else None
            ctx = PipelineContext(options)
        except Exception as e:
            return spec.complete(self._failed(spec.task_id, "create context", e))

        return spec.complete(self._execute(spec, ctx, listener))

    def _execute(
        self,
        spec: JobSpec[Any, T],
        ctx: PipelineContext,
        listener: Listener | None = None,
    ) -> Outcome:
        """
        Define, submit, await and extract. The job id is reported only
        when a listener is given.
        """
        task_id = spec.task_id

        try:
            spec.pipeline(ctx)
        except Exception as e:
            return self._failed(task_id, "define pipeline", e)

        try:
            handle = ctx.close()
        except Exception as e:
            return self._failed(task_id, "submit job", e)

        if listener is not None and handle.job_id is not None:
            self._report_job_id(task_id, ctx.options.runner, handle.job_id, listener)

        try:
            handle.wait_until_done()
        except Exception as e:
            return self._failed(task_id, "run job", e)

        try:
            result = spec.result(ctx, handle)
        except Exception as e:
            return self._failed(task_id, "extract result", e)

        logger.debug("Task %s: job completed", task_id)
        return Success(result)

    def _report_job_id(
        self, task_id: Hashable, runner: str, job_id: str, listener: Listener
    ) -> None:
        logger.info("Started pipeline job (%s): %s", runner, job_id)
        listener.meta(task_id, JOB_ID_META_KEY, job_id)

    def _failed(self, task_id: Hashable, step: str, error: Exception) -> Failure:
        logger.warning("Task %s: failed to %s: %s", task_id, step, error)
        return Failure(error)
