from __future__ import annotations
"""Configuration constants and environment-driven settings.

The allowed array sizes and value range are code constants: changing them is
a code change. Ambient knobs (log level, async yield delay, export directory)
come from `SORTBENCH_*` environment variables.
"""

import logging
import os
from typing import Dict, Tuple

ALLOWED_ARRAY_SIZES: Tuple[int, ...] = (1000, 10000, 50000, 100000)
ARRAY_SIZE_LABELS: Dict[int, str] = {
    1000: "Small (1K)",
    10000: "Medium (10K)",
    50000: "Large (50K)",
    100000: "Very Large (100K)",
}
DEFAULT_ARRAY_SIZE = 10000

VALUE_MIN = 1
VALUE_MAX = 1_000_000

SELECT_ALL = "all"

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw in (None, ""):
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value >= 0 else default


def yield_delay() -> float:
    """Seconds awaited at each async suspension point (`SORTBENCH_YIELD_DELAY`)."""
    return _env_float("SORTBENCH_YIELD_DELAY", 0.0)


def results_dir() -> str:
    return os.environ.get("SORTBENCH_RESULTS_DIR") or "results"


def log_level() -> str:
    return (os.environ.get("SORTBENCH_LOG_LEVEL") or "WARNING").upper()


def configure_logging(level: str | int | None = None) -> None:
    """Install a root handler once; later calls only adjust the level."""
    resolved = level if level is not None else log_level()
    if isinstance(resolved, str):
        resolved = logging.getLevelName(resolved.upper())
        if not isinstance(resolved, int):
            resolved = logging.WARNING
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=resolved, format=_LOG_FORMAT)
    else:
        root.setLevel(resolved)
