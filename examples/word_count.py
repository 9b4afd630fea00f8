"""
Word count job.

Run it with the CLI:
    floe run examples/word_count.py:word_count --arg examples/lines.csv
    floe run examples/word_count.py:word_count --arg examples/lines.csv --options examples/threaded.yaml

Or test it without touching the filesystem:
    python examples/word_count.py
"""

import polars as pl

from floe import EvalContext, JobOperator, RecordingListener, RunContext, TaskId, expect_frame


def count_words(lines: pl.LazyFrame) -> pl.LazyFrame:
    return (
        lines.select(pl.col("line").str.split(" ").alias("word"))
        .explode("word")
        .group_by("word")
        .agg(pl.len().alias("count"))
        .sort("word")
    )


def word_count(builder):
    path = builder.task_id.args[0] if builder.task_id.args else "lines.csv"

    def pipeline(ctx):
        lines = ctx.source("lines", lambda: pl.scan_csv(path))
        ctx.sink("counts", count_words(lines), lambda df: df.write_csv("counts.csv"))

    return (
        builder
        .pipeline(pipeline)
        .result(lambda ctx, handle: handle.output("counts").height)
        .success(lambda words: f"{words} distinct words")
    )


if __name__ == "__main__":
    operator = JobOperator()
    task_id = TaskId.create("word-count")
    spec = word_count(operator.provide(EvalContext(task_id))).build()

    run_context = RunContext.for_test()
    JobOperator.mock(run_context).job_test(
        task_id,
        lambda t: t.input("lines", pl.DataFrame({"line": ["a b", "b c", "c"]})).output(
            "counts",
            expect_frame(
                pl.DataFrame({"word": ["a", "b", "c"], "count": [1, 2, 2]}),
                check_dtypes=False,
            ),
        ),
    )
    print(operator.perform(spec, RecordingListener(), run_context))
