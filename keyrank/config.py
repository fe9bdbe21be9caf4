from __future__ import annotations

import os


def _env_int(name: str) -> int | None:
    value = os.getenv(name, "").strip()
    return int(value) if value else None


WINDOW_SIZE: int    = int(os.getenv("KEYRANK_WINDOW_SIZE", "2"))
DAMPING: float      = float(os.getenv("KEYRANK_DAMPING", "0.85"))
TOLERANCE: float    = float(os.getenv("KEYRANK_TOLERANCE", "1e-5"))

# Unset means "iterate until converged".
MAX_ITERATIONS: int | None = _env_int("KEYRANK_MAX_ITERATIONS")

PARALLEL: bool          = os.getenv("KEYRANK_PARALLEL", "0").lower() in {"1", "true", "yes"}
WORKERS: int | None     = _env_int("KEYRANK_WORKERS")

LOG_LEVEL: str = os.getenv("KEYRANK_LOG_LEVEL", "WARNING").upper()
