"""
Task operator for pipeline jobs.

- JobOperator: runs a JobSpec and returns the task's result
- JobSpec / JobSpecBuilder: describe a job
- Mocking: test-mode results and JobTests per task
"""

from floe.operator.spec import (
    Failure,
    JobSpec,
    JobSpecBuilder,
    Outcome,
    Success,
)
from floe.operator.mocking import Mocking, job_test_name
from floe.operator.job import JOB_ID_META_KEY, JobOperator

__all__ = [
    "JobOperator",
    "JobSpec",
    "JobSpecBuilder",
    "Outcome",
    "Success",
    "Failure",
    "Mocking",
    "job_test_name",
    "JOB_ID_META_KEY",
]
