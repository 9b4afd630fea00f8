"""
floe CLI - run and validate pipeline jobs from the command line.
"""

import dataclasses
import importlib.util
import logging
import sys
from pathlib import Path
from typing import Any

import click

from floe.config.options import PipelineOptions
from floe.core.operator import RecordingListener
from floe.core.task import EvalContext, TaskId
from floe.operator.job import JobOperator
from floe.operator.spec import JobSpec, JobSpecBuilder


@click.group()
@click.version_option(version="0.1.0")
def cli():
    """
    floe - run polars pipeline jobs as workflow tasks.
    """
    pass


@cli.command()
@click.argument("target")
@click.option(
    "--options",
    "options_file",
    type=click.Path(exists=True, dir_okay=False),
    help="YAML file with pipeline options, overriding the job's own",
)
@click.option("--arg", "args", multiple=True, help="Task argument (repeatable)")
@click.option("--debug", is_flag=True, help="Enable debug output")
def run(target: str, options_file: str | None, args: tuple[str, ...], debug: bool):
    """
    Run a job in production mode.

    TARGET is FILE.py:NAME, where NAME is a function that receives a
    JobSpecBuilder and returns the configured builder or a JobSpec.

    Example:
        floe run jobs/word_count.py:word_count
        floe run jobs/word_count.py:word_count --options prod.yaml --arg 2024-01-01
    """
    _configure_logging(debug)
    operator = JobOperator()

    try:
        spec = _load_spec(target, operator, args)
    except Exception as e:
        click.echo(f"Error: Could not load job from {target}: {e}", err=True)
        sys.exit(1)

    if options_file:
        spec = dataclasses.replace(
            spec, options=lambda: PipelineOptions.from_yaml(options_file)
        )

    listener = RecordingListener()
    click.echo(f"Running job {spec.task_id}")
    try:
        result = operator.perform(spec, listener)
    except Exception as e:
        click.echo(f"✗ Job failed: {e}", err=True)
        if debug:
            import traceback

            traceback.print_exc()
        sys.exit(1)
    finally:
        for key, value in listener.for_task(spec.task_id).items():
            click.echo(f"  {key}: {value}")

    click.echo(f"✓ Job {spec.task_id} completed")
    click.echo(f"Result: {result!r}")


@cli.command()
@click.argument("target")
@click.option("--arg", "args", multiple=True, help="Task argument (repeatable)")
def validate(target: str, args: tuple[str, ...]):
    """
    Validate a job spec without running it.

    Example:
        floe validate jobs/word_count.py:word_count
    """
    try:
        spec = _load_spec(target, JobOperator(), args)
        spec.validate()
    except Exception as e:
        click.echo(f"✗ Validation failed: {e}", err=True)
        sys.exit(1)

    click.echo(f"✓ Job {spec.task_id} is valid")


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _load_spec(target: str, operator: JobOperator, args: tuple[str, ...]) -> JobSpec:
    """
    Load a job spec from FILE.py:NAME.

    The function is called with a builder for TaskId(NAME, *args).
    """
    path, sep, name = target.rpartition(":")
    if not sep or not path or not name:
        raise click.BadParameter(f"Expected FILE.py:NAME, got '{target}'")

    module = _load_module(path)
    fn: Any = getattr(module, name, None)
    if fn is None or not callable(fn):
        raise click.BadParameter(f"'{name}' is not a function in {path}")

    builder = operator.provide(EvalContext(TaskId.create(name, *args)))
    spec = fn(builder)
    if isinstance(spec, JobSpecBuilder):
        spec = spec.build()
    if not isinstance(spec, JobSpec):
        raise click.BadParameter(
            f"'{name}' returned {type(spec).__name__}, expected JobSpec or JobSpecBuilder"
        )
    return spec


def _load_module(path: str):
    if not Path(path).is_file():
        raise click.BadParameter(f"No such file: {path}")
    spec = importlib.util.spec_from_file_location("floe_job_module", path)
    module = importlib.util.module_from_spec(spec)
    sys.modules["floe_job_module"] = module
    spec.loader.exec_module(module)
    return module


if __name__ == "__main__":
    cli()
