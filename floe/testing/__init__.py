"""
Test harness for floe pipelines.
"""

from floe.testing.job_test import JobTest, expect_frame, new_test_id

__all__ = [
    "JobTest",
    "expect_frame",
    "new_test_id",
]
