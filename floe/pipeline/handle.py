"""
JobHandle: a submitted pipeline job.
"""

from concurrent.futures import Future
from enum import Enum

import polars as pl

from floe.errors import PipelineExecutionError


class JobState(Enum):
    """States of a submitted job."""

    RUNNING = "running"
    DONE = "done"
    FAILED = "failed"


class JobHandle:
    """
    Handle to a submitted job.

    Wraps the future of the job's execution. Runners that hand work to a
    backend with its own job identifiers expose them through job_id;
    in-process runners leave it as None.
    """

    def __init__(self, future: Future, job_id: str | None = None):
        self._future = future
        self.job_id = job_id

    @property
    def state(self) -> JobState:
        if not self._future.done():
            return JobState.RUNNING
        if self._future.exception() is not None:
            return JobState.FAILED
        return JobState.DONE

    def wait_until_done(self) -> "JobHandle":
        """
        Block until the job terminates.

        There is no timeout; cancelling a job is up to the backend.

        Raises:
            PipelineExecutionError: If the job terminated abnormally
        """
        try:
            self._future.result()
        except Exception as e:
            self._raise_failure(e)
        return self

    @property
    def outputs(self) -> dict[str, pl.DataFrame]:
        """
        Frames collected for each sink.

        Raises:
            RuntimeError: If the job is still running
            PipelineExecutionError: If the job failed
        """
        if not self._future.done():
            raise RuntimeError("Job has not completed; call wait_until_done() first")
        error = self._future.exception()
        if error is not None:
            self._raise_failure(error)
        return dict(self._future.result())

    def output(self, name: str) -> pl.DataFrame:
        outputs = self.outputs
        if name not in outputs:
            raise KeyError(f"Job has no output '{name}'")
        return outputs[name]

    def _raise_failure(self, error: BaseException):
        label = f"Job {self.job_id}" if self.job_id else "Job"
        raise PipelineExecutionError(f"{label} failed: {error}", self.job_id) from error

    def __repr__(self):
        return f"JobHandle(job_id={self.job_id}, state={self.state.value})"
