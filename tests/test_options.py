"""
Tests for PipelineOptions.
"""

import pytest
from pydantic import ValidationError

from floe.config import PipelineOptions


class TestPipelineOptions:
    """Tests for building options in code."""

    def test_defaults(self):
        """Test default option values."""
        options = PipelineOptions()

        assert options.app_name == "floe"
        assert options.runner == "direct"
        assert options.job_name is None
        assert options.labels == {}
        assert not options.is_test

    def test_invalid_runner(self):
        """Test that unknown runners are rejected."""
        with pytest.raises(ValidationError):
            PipelineOptions(runner="spark")

    def test_unknown_field(self):
        """Test that unknown options are rejected."""
        with pytest.raises(ValidationError):
            PipelineOptions(region="us-east-1")


class TestFromArgs:
    """Tests for PipelineOptions.from_args."""

    def test_parse(self):
        """Test parsing --key=value flags."""
        options = PipelineOptions.from_args(
            ["--app_name=JobTest-a-1", "--runner=threaded", "--job-name=nightly"]
        )

        assert options.app_name == "JobTest-a-1"
        assert options.runner == "threaded"
        assert options.job_name == "nightly"
        assert options.is_test

    def test_value_with_equals(self):
        """Test that only the first '=' separates key and value."""
        options = PipelineOptions.from_args(["--app_name=a=b"])

        assert options.app_name == "a=b"

    def test_labels(self):
        """Test parsing labels."""
        options = PipelineOptions.from_args(["--labels=team=data, env=prod"])

        assert options.labels == {"team": "data", "env": "prod"}

    def test_malformed_label(self):
        """Test that labels without a value are rejected."""
        with pytest.raises(ValueError, match="Expected label key=value"):
            PipelineOptions.from_args(["--labels=team"])

    def test_malformed_flag(self):
        """Test that flags without a value are rejected."""
        with pytest.raises(ValueError, match="Expected --key=value"):
            PipelineOptions.from_args(["--runner"])

    def test_unknown_flag(self):
        """Test that unknown flags are rejected."""
        with pytest.raises(ValueError, match="Unknown pipeline option 'region'"):
            PipelineOptions.from_args(["--region=us-east-1"])

    def test_empty(self):
        """Test that no flags yields the defaults."""
        assert PipelineOptions.from_args([]) == PipelineOptions()


class TestFromYaml:
    """Tests for PipelineOptions.from_yaml."""

    def test_load(self, tmp_path):
        """Test loading options from YAML."""
        path = tmp_path / "options.yaml"
        path.write_text(
            "app_name: reports\n"
            "runner: threaded\n"
            "labels:\n"
            "  team: data\n"
        )

        options = PipelineOptions.from_yaml(path)

        assert options.app_name == "reports"
        assert options.runner == "threaded"
        assert options.labels == {"team": "data"}

    def test_empty_file(self, tmp_path):
        """Test that an empty file yields the defaults."""
        path = tmp_path / "options.yaml"
        path.write_text("")

        assert PipelineOptions.from_yaml(path) == PipelineOptions()

    def test_not_a_mapping(self, tmp_path):
        """Test that non-mapping documents are rejected."""
        path = tmp_path / "options.yaml"
        path.write_text("- direct\n- threaded\n")

        with pytest.raises(ValueError, match="must be a mapping"):
            PipelineOptions.from_yaml(path)

    def test_invalid_value(self, tmp_path):
        """Test that invalid values are rejected by validation."""
        path = tmp_path / "options.yaml"
        path.write_text("runner: spark\n")

        with pytest.raises(ValidationError):
            PipelineOptions.from_yaml(path)
