"""
PipelineContext: where a pipeline's computation is defined.

A pipeline function receives a context, reads its inputs with source(),
transforms them as Polars LazyFrames and registers results with sink().
Nothing runs until close() submits the computation to a runner.

Example:
    def word_count(ctx: PipelineContext) -> None:
        lines = ctx.source("lines", lambda: pl.scan_csv("lines.csv"))
        counts = (
            lines.select(pl.col("line").str.split(" ").alias("word"))
            .explode("word")
            .group_by("word")
            .len()
        )
        ctx.sink("counts", counts, lambda df: df.write_parquet("counts.parquet"))

    ctx = PipelineContext(PipelineOptions(runner="threaded"))
    word_count(ctx)
    handle = ctx.close()
    handle.wait_until_done()
"""

import logging
from dataclasses import dataclass
from typing import Callable

import polars as pl

from floe.config.options import PipelineOptions
from floe.testing import job_test

logger = logging.getLogger(__name__)

Reader = Callable[[], pl.LazyFrame | pl.DataFrame]
Writer = Callable[[pl.DataFrame], None]


@dataclass
class Sink:
    """An output registered with a context"""
    name: str
    frame: pl.LazyFrame
    writer: Writer | None = None


class PipelineContext:
    """
    Collects the sources and sinks of one pipeline execution.

    A context whose application name marks it as a JobTest reads its
    sources from, and writes its sinks to, the registered test data
    instead of calling readers and writers.
    """

    def __init__(self, options: PipelineOptions | None = None):
        self.options = options or PipelineOptions()
        self.sources: list[str] = []
        self.sinks: dict[str, Sink] = {}
        self._closed = False

    @property
    def is_test(self) -> bool:
        return self.options.is_test

    @property
    def test_id(self) -> str | None:
        return self.options.app_name if self.is_test else None

    @property
    def is_closed(self) -> bool:
        return self._closed

    def source(self, name: str, reader: Reader) -> pl.LazyFrame:
        """
        Register an input.

        Args:
            name: Source name, matched against JobTest inputs in tests
            reader: Produces the input frame in production

        Returns:
            The input as a LazyFrame
        """
        self._check_open()
        self.sources.append(name)
        if self.is_test:
            return job_test.lookup(self.test_id).input(name)
        frame = reader()
        return frame.lazy() if isinstance(frame, pl.DataFrame) else frame

    def sink(
        self,
        name: str,
        frame: pl.LazyFrame | pl.DataFrame,
        writer: Writer | None = None,
    ) -> None:
        """
        Register an output.

        Args:
            name: Sink name, matched against JobTest outputs in tests
            frame: The computation to materialize
            writer: Receives the collected frame in production
        """
        self._check_open()
        if name in self.sinks:
            raise ValueError(f"Sink '{name}' is already registered")
        self.sinks[name] = Sink(name=name, frame=frame.lazy(), writer=writer)

    def close(self):
        """
        Submit the pipeline to the runner named by the options.

        Returns:
            JobHandle for the submitted job

        Raises:
            RuntimeError: If the context was already closed
            ValueError: If no sinks were registered
        """
        from floe.execution.runner import get_runner

        self._check_open()
        if not self.sinks:
            raise ValueError("Pipeline has no sinks; nothing to run")
        self._closed = True

        runner = get_runner(self.options.runner)()
        logger.debug("Submitting '%s' to %s", self.options.app_name, runner)
        return runner.run(self)

    def evaluate(self) -> dict[str, pl.DataFrame]:
        """
        Materialize every sink.

        Called by runners; collected frames go to the writers, or to the
        test data when running under a JobTest.
        """
        test_data = job_test.lookup(self.test_id) if self.is_test else None
        outputs = {}
        for sink in self.sinks.values():
            df = sink.frame.collect()
            if test_data is not None:
                test_data.write(sink.name, df)
            elif sink.writer is not None:
                sink.writer(df)
            outputs[sink.name] = df
            logger.debug("Sink '%s' wrote %d rows", sink.name, df.height)
        return outputs

    def _check_open(self) -> None:
        if self._closed:
            raise RuntimeError("PipelineContext is already closed")

    def __repr__(self):
        return (
            f"PipelineContext(app_name={self.options.app_name}, "
            f"sources={len(self.sources)}, sinks={len(self.sinks)})"
        )
