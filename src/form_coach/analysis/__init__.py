"""
Analysis module for form-coach.

Scores a captured pose sequence against exercise-specific biomechanical
criteria and assembles a FormAnalysisResult.
"""

from .models import (
    ExerciseType,
    FormAnalysisResult,
    FormAnalysisScore,
    FormIssue,
    FormIssueSeverity,
    FormIssueType,
    FormStrength,
    FormStrengthType,
    JointName,
    Keypoint,
    PoseFrame,
    UserFitnessLevel,
)
from .errors import AnalysisIncomplete, FormEvaluationError, NoPoseData, UnsupportedExercise
from .evaluators import evaluate_form, get_exercise_criteria
from .pose_quality import (
    PoseQualityAssessment,
    PoseQualityMetrics,
    assess_sequence_quality,
    validate_pose_quality,
)
from .repetition import count_repetitions
from .scoring import aggregate_scores

__all__ = [
    "ExerciseType",
    "FormAnalysisResult",
    "FormAnalysisScore",
    "FormIssue",
    "FormIssueSeverity",
    "FormIssueType",
    "FormStrength",
    "FormStrengthType",
    "JointName",
    "Keypoint",
    "PoseFrame",
    "UserFitnessLevel",
    "AnalysisIncomplete",
    "FormEvaluationError",
    "NoPoseData",
    "UnsupportedExercise",
    "evaluate_form",
    "get_exercise_criteria",
    "PoseQualityAssessment",
    "PoseQualityMetrics",
    "assess_sequence_quality",
    "validate_pose_quality",
    "count_repetitions",
    "aggregate_scores",
]
