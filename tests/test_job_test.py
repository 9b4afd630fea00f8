"""
Tests for the JobTest harness.
"""

import re

import polars as pl
import pytest

from floe.config.options import PipelineOptions
from floe.pipeline import PipelineContext
from floe.testing import JobTest, expect_frame, new_test_id
from floe.testing import job_test as test_data


def run_in_test_context(job_test: JobTest, pipeline) -> None:
    ctx = PipelineContext(PipelineOptions(app_name=job_test.test_id))
    pipeline(ctx)
    ctx.close().wait_until_done()


def add_one(ctx: PipelineContext) -> None:
    frame = ctx.source("in", lambda: pl.DataFrame())
    ctx.sink("out", frame.with_columns(pl.col("n") + 1))


class TestNaming:
    """Tests for JobTest names and test ids."""

    def test_dash_rejected(self):
        """Test that names with dashes are rejected."""
        with pytest.raises(ValueError, match="may not contain '-'"):
            JobTest("my-job")

    def test_empty_name_rejected(self):
        """Test that empty names are rejected."""
        with pytest.raises(ValueError):
            JobTest("")

    def test_test_id(self):
        """Test the format of test ids."""
        job_test = JobTest("my_job")

        assert job_test.name == "my_job"
        assert re.fullmatch(r"JobTest-my_job-[0-9a-f]{8}", job_test.test_id)

    def test_test_ids_are_unique(self):
        """Test that two builders with the same name get different ids."""
        assert JobTest("same").test_id != JobTest("same").test_id
        assert new_test_id("same") != new_test_id("same")

    def test_test_id_marks_options_as_test(self):
        """Test that options named after a test id are test options."""
        assert PipelineOptions(app_name=JobTest("x").test_id).is_test


class TestLifecycle:
    """Tests for set_up and tear_down."""

    def test_successful_run(self):
        """Test a pipeline that matches its expectations."""
        job_test = (
            JobTest("add_one")
            .input("in", pl.DataFrame({"n": [1, 2]}))
            .output("out", expect_frame(pl.DataFrame({"n": [2, 3]})))
        )

        job_test.set_up()
        run_in_test_context(job_test, add_one)
        job_test.tear_down()

        with pytest.raises(KeyError):
            test_data.lookup(job_test.test_id)

    def test_set_up_twice(self):
        """Test that the same test cannot be set up twice."""
        job_test = JobTest("twice")
        job_test.set_up()

        try:
            with pytest.raises(RuntimeError, match="already registered"):
                job_test.set_up()
        finally:
            job_test.tear_down()

    def test_tear_down_without_set_up(self):
        """Test that tear_down requires set_up."""
        with pytest.raises(KeyError, match="was set_up\\(\\) called"):
            JobTest("never").tear_down()

    def test_output_mismatch(self):
        """Test that a failing output assertion fails tear_down."""
        job_test = (
            JobTest("mismatch")
            .input("in", pl.DataFrame({"n": [1]}))
            .output("out", expect_frame(pl.DataFrame({"n": [5]})))
        )
        job_test.set_up()
        run_in_test_context(job_test, add_one)

        with pytest.raises(AssertionError):
            job_test.tear_down()

        with pytest.raises(KeyError):
            test_data.lookup(job_test.test_id)

    def test_missing_output(self):
        """Test that an expected output the pipeline never wrote fails tear_down."""
        job_test = (
            JobTest("missing")
            .input("in", pl.DataFrame({"n": [1]}))
            .output("out", lambda df: None)
            .output("other", lambda df: None)
        )
        job_test.set_up()
        run_in_test_context(job_test, add_one)

        with pytest.raises(AssertionError, match="Unmatched test outputs: other"):
            job_test.tear_down()

    def test_unexpected_output(self):
        """Test that outputs without expectations fail tear_down."""
        job_test = JobTest("unexpected").input("in", pl.DataFrame({"n": [1]}))
        job_test.set_up()
        run_in_test_context(job_test, add_one)

        with pytest.raises(AssertionError, match="without expectations: out"):
            job_test.tear_down()

    def test_unread_input(self):
        """Test that inputs the pipeline never read fail tear_down."""
        job_test = (
            JobTest("unread")
            .input("in", pl.DataFrame({"n": [1]}))
            .input("unused", pl.DataFrame({"n": [1]}))
            .output("out", lambda df: None)
        )
        job_test.set_up()
        run_in_test_context(job_test, add_one)

        with pytest.raises(AssertionError, match="Unmatched test inputs: unused"):
            job_test.tear_down()


class TestExpectFrame:
    """Tests for expect_frame."""

    def test_lazy_expected(self):
        """Test that lazy expectations are collected."""
        check = expect_frame(pl.DataFrame({"n": [1]}).lazy())

        check(pl.DataFrame({"n": [1]}))

    def test_row_order_option(self):
        """Test that options are passed to assert_frame_equal."""
        check = expect_frame(pl.DataFrame({"n": [2, 1]}), check_row_order=False)

        check(pl.DataFrame({"n": [1, 2]}))

    def test_mismatch(self):
        """Test that a different frame fails the assertion."""
        check = expect_frame(pl.DataFrame({"n": [1]}))

        with pytest.raises(AssertionError):
            check(pl.DataFrame({"n": [2]}))
