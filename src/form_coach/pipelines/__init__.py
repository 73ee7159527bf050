"""
Session pipelines for form-coach.

Chains pose input conversion, form evaluation and coaching feedback:
    Stage 1: Pose quality summary
    Stage 2: Form evaluation (per-criterion analyzers + scoring)
    Stage 3: Coaching feedback (LangGraph agent)
"""

from .preprocessing import parse_pose_frame, parse_pose_sequence
from .session import (
    FormEvaluationEngine,
    SessionReport,
    analyze_session,
    analyze_session_async,
    evaluate_form_async,
)
from .utils import configure_logging

__all__ = [
    "parse_pose_frame",
    "parse_pose_sequence",
    "FormEvaluationEngine",
    "SessionReport",
    "analyze_session",
    "analyze_session_async",
    "evaluate_form_async",
    "configure_logging",
]
