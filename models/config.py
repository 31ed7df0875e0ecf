"""Simulator configuration model, loaded from YAML.

Every field has a default, so the simulator runs without a config file;
``run_simulator.py`` applies command-line overrides on top of whatever is
loaded here.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class SimulatorConfig(BaseModel):
    """Top-level configuration for one simulator process."""

    users_file: str = Field(
        default=".users.dat",
        min_length=1,
        description="Path of the credential store, relative to the working directory.",
    )
    seed: int | None = Field(
        default=None,
        description="Seed for the market's random generator. None draws from OS entropy.",
    )
    log_level: LogLevel = Field(
        default="WARNING",
        description="Logging verbosity. Logs go to stderr, game text to stdout.",
    )

    @classmethod
    def from_yaml(cls, path: str | Path) -> SimulatorConfig:
        """Load and validate a ``SimulatorConfig`` from a YAML file.

        Raises ``FileNotFoundError`` if the file does not exist and
        ``ValueError`` if the content is not a valid YAML mapping. An empty
        file yields the defaults.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with path.open(encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)

        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ValueError(
                f"Expected a YAML mapping in {path}, got {type(raw).__name__}."
            )

        return cls(**raw)
