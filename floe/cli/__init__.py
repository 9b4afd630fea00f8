"""
floe CLI - command-line interface for running pipeline jobs.
"""

from floe.cli.main import cli

__all__ = ["cli"]
