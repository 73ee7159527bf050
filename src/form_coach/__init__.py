"""
form-coach: pose-based exercise form assessment and coaching feedback.

Typical use:
    poses = parse_pose_sequence(raw_frames)
    result = evaluate_form(poses, ExerciseType.SQUAT)
    feedback = generate_feedback(result, UserFitnessLevel.BEGINNER)
"""

from .analysis import (
    AnalysisIncomplete,
    ExerciseType,
    FormAnalysisResult,
    FormEvaluationError,
    FormIssue,
    FormIssueSeverity,
    FormIssueType,
    FormStrength,
    FormStrengthType,
    JointName,
    Keypoint,
    NoPoseData,
    PoseFrame,
    UnsupportedExercise,
    UserFitnessLevel,
    evaluate_form,
)
from .agents import CoachingAgent, FormCorrection, FormFeedback, generate_feedback
from .pipelines import (
    FormEvaluationEngine,
    SessionReport,
    analyze_session,
    analyze_session_async,
    evaluate_form_async,
    parse_pose_sequence,
)

__version__ = "1.0.0"

__all__ = [
    "AnalysisIncomplete",
    "ExerciseType",
    "FormAnalysisResult",
    "FormEvaluationError",
    "FormIssue",
    "FormIssueSeverity",
    "FormIssueType",
    "FormStrength",
    "FormStrengthType",
    "JointName",
    "Keypoint",
    "NoPoseData",
    "PoseFrame",
    "UnsupportedExercise",
    "UserFitnessLevel",
    "evaluate_form",
    "CoachingAgent",
    "FormCorrection",
    "FormFeedback",
    "generate_feedback",
    "FormEvaluationEngine",
    "SessionReport",
    "analyze_session",
    "analyze_session_async",
    "evaluate_form_async",
    "parse_pose_sequence",
]
