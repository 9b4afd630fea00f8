"""
Direct runner for executing pipelines in the calling thread.
"""

import logging
import time
from concurrent.futures import Future

from floe.execution.runner import Runner
from floe.pipeline.handle import JobHandle

logger = logging.getLogger(__name__)


class DirectRunner(Runner):
    """
    Executes pipelines synchronously in the current Python process.

    This is primarily used for:
    1. Development and testing
    2. Small-scale data processing
    3. Debugging pipeline logic before running on a backend

    The returned handle has already terminated and carries no job id.
    """

    def run(self, context) -> JobHandle:
        future: Future = Future()
        start_time = time.time()
        try:
            future.set_result(context.evaluate())
            logger.debug(
                "Pipeline '%s' completed in %.2fs",
                context.options.app_name,
                time.time() - start_time,
            )
        except Exception as e:
            logger.debug(
                "Pipeline '%s' failed after %.2fs",
                context.options.app_name,
                time.time() - start_time,
            )
            future.set_exception(e)
        return JobHandle(future)
