"""
Error taxonomy for form evaluation.

Only empty input and unsupported exercises abort an evaluation. Missing
keypoints, short sequences and empty score maps fall back to local default
scores instead of raising.
"""

from .models import ExerciseType


class FormEvaluationError(Exception):
    """Base class for failures of a whole evaluation call."""


class NoPoseData(FormEvaluationError, ValueError):
    """The pose sequence was empty."""

    def __init__(self):
        super().__init__("No pose data available for analysis.")


class UnsupportedExercise(FormEvaluationError, ValueError):
    """No evaluator exists for the requested exercise type."""

    def __init__(self, exercise_type: ExerciseType):
        self.exercise_type = exercise_type
        super().__init__(f"Exercise type {exercise_type.value} is not supported yet.")


class AnalysisIncomplete(FormEvaluationError):
    """Reserved for partial-failure reporting; no evaluator raises it yet."""

    def __init__(self):
        super().__init__("Form analysis could not be completed.")
