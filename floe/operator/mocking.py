"""
Mocking: test-mode stand-ins for pipeline jobs.

Tests register, per task id, either the result the job would have
produced or a JobTest that runs the pipeline against in-memory data.
The registry lives in the run's TestContext, so separate test runs
never see each other's mocks.

Example:
    run_context = RunContext.for_test()
    JobOperator.mock(run_context).result(counts_id, 42)
    JobOperator.mock(run_context).job_test(
        report_id,
        lambda t: t.input("lines", lines).output("counts", expect_frame(counts)),
    )
"""

from typing import Any, Callable, Hashable

from floe.operator.spec import Success
from floe.testing.job_test import JobTest

JobTestFactory = Callable[[], JobTest]


def job_test_name(task_id: Hashable) -> str:
    """JobTest name for a task id; JobTest names may not contain dashes"""
    return str(task_id).replace("-", "_")


class Mocking:
    """
    Registry of mocked job results and scripted JobTests, keyed by task id.
    """

    def __init__(self):
        self._results: dict[Hashable, Any] = {}
        self._job_tests: dict[Hashable, JobTestFactory] = {}

    def result(self, task_id: Hashable, value: Any) -> "Mocking":
        """
        Make the job for task_id produce value without running a pipeline.
        """
        self._results[task_id] = value
        return self

    def job_test(
        self,
        task_id: Hashable,
        setup: Callable[[JobTest], Any] | None = None,
    ) -> "Mocking":
        """
        Run the job for task_id against a JobTest.

        Args:
            task_id: The task to mock
            setup: Registers inputs and outputs on a fresh JobTest;
                called again for every execution
        """
        def factory() -> JobTest:
            builder = JobTest(job_test_name(task_id))
            if setup is not None:
                setup(builder)
            return builder

        self._job_tests[task_id] = factory
        return self

    def lookup_result(self, task_id: Hashable) -> Success | None:
        """The mocked result for task_id, if any"""
        if task_id in self._results:
            return Success(self._results[task_id])
        return None

    def lookup_job_test(self, task_id: Hashable) -> JobTestFactory | None:
        """The JobTest factory for task_id, if any"""
        return self._job_tests.get(task_id)

    def __repr__(self):
        return f"Mocking(results={len(self._results)}, job_tests={len(self._job_tests)})"
