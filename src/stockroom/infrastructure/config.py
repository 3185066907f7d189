"""Runtime settings.

Loaded from environment variables; the default data directory sits next to
the project.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

# When installed in editable mode the project root is the repo root.
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

BACKENDS = ("json", "sqlite")

ENV_DATA_DIR = "STOCKROOM_DATA_DIR"
ENV_BACKEND = "STOCKROOM_BACKEND"
ENV_LOG_LEVEL = "STOCKROOM_LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    """Where articles are stored and how loudly we log."""

    data_dir: Path = field(default_factory=lambda: DEFAULT_DATA_DIR)
    backend: str = "json"
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.backend not in BACKENDS:
            raise ValueError(
                f"Unknown storage backend {self.backend!r}; expected one of {', '.join(BACKENDS)}"
            )
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Unknown log level {self.log_level!r}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        data_dir = env.get(ENV_DATA_DIR)
        return cls(
            data_dir=Path(data_dir) if data_dir else DEFAULT_DATA_DIR,
            backend=env.get(ENV_BACKEND, "json").lower(),
            log_level=env.get(ENV_LOG_LEVEL, "WARNING").upper(),
        )
