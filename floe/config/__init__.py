"""
Configuration classes for floe pipelines.
"""

from floe.config.options import PipelineOptions, TEST_APP_PREFIX

__all__ = [
    "PipelineOptions",
    "TEST_APP_PREFIX",
]
