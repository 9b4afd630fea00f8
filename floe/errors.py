"""
Exceptions raised by floe pipelines.
"""


class PipelineExecutionError(RuntimeError):
    """A submitted pipeline job terminated abnormally."""

    def __init__(self, message: str, job_id: str | None = None):
        super().__init__(message)
        self.job_id = job_id
