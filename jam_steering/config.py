"""Configuration constants, session defaults, and .env loading.

WHY: Session parameter defaults (temperature, top-k, guidance, ...) and
slot limits are tuned by hand while jamming. Keeping them as plain
module-level values makes them easy to find and override without
touching the state classes.

HOW: python-dotenv loads the .env file on import. Each default is read
from an environment variable with a built-in fallback. Malformed values
are logged and replaced by the fallback rather than raising, so a typo
in .env never stops the session from starting.

RULES:
- All defaults can be overridden via JAM_* environment variables
- Numeric text on the wire is locale-independent (%-formatting, "." decimal)
- BEATS_PER_BAR is fixed at 4 (the backend only supports 4/4)
"""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Load .env from the project root (where the app is run from)
load_dotenv()


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring malformed %s=%r, using %s", name, raw, default)
        return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring malformed %s=%r, using %s", name, raw, default)
        return default


# ---------------------------------------------------------------------------
# Session parameter defaults
# ---------------------------------------------------------------------------

DEFAULT_LOOP_WEIGHT = _env_float("JAM_DEFAULT_LOOP_WEIGHT", 1.0)  # 0–1
DEFAULT_BARS = _env_int("JAM_DEFAULT_BARS", 4)  # 4 or 8
DEFAULT_TEMPERATURE = _env_float("JAM_DEFAULT_TEMPERATURE", 1.2)  # 0–4
DEFAULT_TOP_K = _env_int("JAM_DEFAULT_TOP_K", 30)  # 0–1024
DEFAULT_GUIDANCE_WEIGHT = _env_float("JAM_DEFAULT_GUIDANCE_WEIGHT", 1.5)  # 0–10

DEFAULT_STYLE_WEIGHT = 1.0
"""Weight given to a freshly added style slot."""

MAX_STYLE_SLOTS = _env_int("JAM_MAX_STYLE_SLOTS", 4)

# ---------------------------------------------------------------------------
# Steering defaults
# ---------------------------------------------------------------------------

DEFAULT_MEAN = _env_float("JAM_DEFAULT_MEAN", 1.0)  # 0–2

# ---------------------------------------------------------------------------
# Wire formatting
# ---------------------------------------------------------------------------

BEATS_PER_BAR = 4
WEIGHT_FORMAT = "%.4f"
LOOP_WEIGHT_FORMAT = "%.3f"
