"""
Configuration constants for the form-coach pipelines.

Loads environment variables (optionally from a ``.env`` file at the project
root) with sensible defaults. Per-criterion tolerances and thresholds are
not configurable; they live beside the analyzers and evaluator tables.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

from ..analysis.models import UserFitnessLevel

# ---------------------------------------------------------------------------
# Project paths
# ---------------------------------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent.parent
_ENV_PATH = PROJECT_ROOT / ".env"
load_dotenv(_ENV_PATH)

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
LOG_LEVEL: str = os.environ.get("FORM_COACH_LOG_LEVEL", "WARNING").upper()
LOG_FORMAT: str = "%(levelname)s | %(name)s | %(message)s"

# ---------------------------------------------------------------------------
# Input boundary
# ---------------------------------------------------------------------------
# Detections at or below this confidence are treated as not detected.
MIN_KEYPOINT_CONFIDENCE: float = float(
    os.environ.get("FORM_COACH_MIN_KEYPOINT_CONFIDENCE", "0.3")
)

# ---------------------------------------------------------------------------
# Coaching
# ---------------------------------------------------------------------------
DEFAULT_USER_LEVEL: UserFitnessLevel = UserFitnessLevel(
    os.environ.get("FORM_COACH_DEFAULT_USER_LEVEL", UserFitnessLevel.BEGINNER.value)
)
