"""Runtime settings, read once from the environment.

    PRINTSHOP_DATA_DIR               JSON stores directory (default <repo>/data)
    PRINTSHOP_ALLOW_STATUS_OVERRIDE  let admins bypass the transition table
    PRINTSHOP_LOG_LEVEL              DEBUG, INFO, WARNING... (default INFO)
    PRINTSHOP_LOG_JSON               render log lines as JSON
    PRINTSHOP_CURRENCY               currency code stored with prices
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from printshop.domain.model.value_objects import DEFAULT_CURRENCY

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _flag(raw: str | None) -> bool:
    return raw is not None and raw.strip().lower() in _TRUE_VALUES


@dataclass(frozen=True)
class Settings:
    data_dir: Path = DEFAULT_DATA_DIR
    allow_status_override: bool = False
    log_level: str = "INFO"
    log_json: bool = False
    currency: str = DEFAULT_CURRENCY

    @staticmethod
    def from_env(environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ

        log_level = env.get("PRINTSHOP_LOG_LEVEL", "INFO").strip().upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ValueError(f"Unknown log level: {log_level!r}")

        currency = env.get("PRINTSHOP_CURRENCY", DEFAULT_CURRENCY).strip().upper()
        if not currency:
            raise ValueError("PRINTSHOP_CURRENCY cannot be empty")

        data_dir = env.get("PRINTSHOP_DATA_DIR")
        return Settings(
            data_dir=Path(data_dir).expanduser() if data_dir else DEFAULT_DATA_DIR,
            allow_status_override=_flag(env.get("PRINTSHOP_ALLOW_STATUS_OVERRIDE")),
            log_level=log_level,
            log_json=_flag(env.get("PRINTSHOP_LOG_JSON")),
            currency=currency,
        )
