"""
Pipeline options.

Options select the runner that executes a pipeline and name the job.
They can be built in code, parsed from command-line style flags, or
loaded from a YAML file.
"""

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field

TEST_APP_PREFIX = "JobTest-"


class PipelineOptions(BaseModel):
    """
    Options for a pipeline execution.

    Example:
        options = PipelineOptions(
            app_name="daily-report",
            runner="threaded",
            labels={"team": "data-engineering"},
        )

        options = PipelineOptions.from_args(["--runner=threaded"])
        options = PipelineOptions.from_yaml("options.yaml")
    """

    model_config = ConfigDict(extra="forbid")

    app_name: str = Field(default="floe", description="Application name")
    runner: Literal["direct", "threaded"] = Field(
        default="direct", description="Runner that executes the pipeline"
    )
    job_name: str | None = Field(default=None, description="Backend job name")
    labels: dict[str, str] = Field(
        default_factory=dict, description="Labels attached to the job"
    )

    @classmethod
    def from_args(cls, args: list[str]) -> "PipelineOptions":
        """
        Parse options from --key=value flags.

        Keys may be written with underscores or dashes. Labels are given
        as comma separated key=value pairs: --labels=team=data,env=prod

        Raises:
            ValueError: If a flag is malformed or names an unknown option
        """
        values: dict[str, Any] = {}
        for arg in args:
            if not arg.startswith("--") or "=" not in arg:
                raise ValueError(f"Expected --key=value, got '{arg}'")
            key, value = arg[2:].split("=", 1)
            key = key.replace("-", "_")
            if key not in cls.model_fields:
                raise ValueError(f"Unknown pipeline option '{key}'")
            if key == "labels":
                values[key] = _parse_labels(value)
            else:
                values[key] = value
        return cls(**values)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "PipelineOptions":
        """
        Load options from a YAML mapping.

        An empty file yields the default options.

        Raises:
            ValueError: If the document is not a mapping
        """
        with open(path) as f:
            data = yaml.safe_load(f)

        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError(
                f"Pipeline options in '{path}' must be a mapping, "
                f"got {type(data).__name__}"
            )
        return cls(**data)

    @property
    def is_test(self) -> bool:
        """Whether these options belong to a harnessed test run"""
        return self.app_name.startswith(TEST_APP_PREFIX)


def _parse_labels(value: str) -> dict[str, str]:
    labels = {}
    for pair in filter(None, value.split(",")):
        if "=" not in pair:
            raise ValueError(f"Expected label key=value, got '{pair}'")
        key, label = pair.split("=", 1)
        labels[key.strip()] = label.strip()
    return labels
