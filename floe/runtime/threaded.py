"""
Threaded runner: executes pipelines on a background worker.

Each submission gets a backend job id, which callers can report while
the job is still running.
"""

import logging
import uuid
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone

from floe.execution.runner import Runner
from floe.pipeline.handle import JobHandle

logger = logging.getLogger(__name__)


def new_job_id() -> str:
    """Job id of the form 2024-01-31_12_00_00-1a2b3c4d5e6f"""
    now = datetime.now(timezone.utc)
    return f"{now:%Y-%m-%d_%H_%M_%S}-{uuid.uuid4().hex[:12]}"


class ThreadedRunner(Runner):
    """
    Runs each pipeline on its own worker thread and returns immediately.
    """

    def run(self, context) -> JobHandle:
        job_id = new_job_id()
        pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix=f"floe-{job_id}")
        try:
            future = pool.submit(context.evaluate)
        finally:
            # The worker finishes the submitted job before the pool goes away
            pool.shutdown(wait=False)
        logger.debug("Submitted '%s' as job %s", context.options.app_name, job_id)
        return JobHandle(future, job_id=job_id)
