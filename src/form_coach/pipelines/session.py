"""
Session pipeline: pose quality → form evaluation → coaching feedback.

Stages:
    Stage 1: Pose quality summary over the whole sequence
    Stage 2: Form evaluation for the chosen exercise
    Stage 3: Coaching feedback for the user's level

The computation is synchronous and never suspends. The ``*_async``
variants run it in a worker thread so an event loop stays responsive;
cancelling the awaiting task does not stop a computation already running.
"""

import asyncio
import logging
import time
from datetime import datetime, timezone
from typing import Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from ..agents.coaching_agent import CoachingAgent
from ..agents.state import FormFeedback
from ..analysis.evaluators import evaluate_form
from ..analysis.models import ExerciseType, FormAnalysisResult, PoseFrame, UserFitnessLevel
from ..analysis.pose_quality import PoseQualityMetrics, assess_sequence_quality
from .config import DEFAULT_USER_LEVEL

logger = logging.getLogger(__name__)


class SessionReport(BaseModel):
    """Everything produced for one analyzed set."""
    model_config = ConfigDict(frozen=True)

    form_analysis: FormAnalysisResult
    feedback: FormFeedback
    pose_quality: PoseQualityMetrics
    analysis_date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def exercise_type(self) -> ExerciseType:
        return self.form_analysis.exercise_type

    @property
    def overall_score(self) -> float:
        return self.form_analysis.overall_score


class FormEvaluationEngine:
    """
    Evaluation and feedback behind one object, so callers can inject or
    replace it as a unit.

    Example usage:
        engine = FormEvaluationEngine()
        result = engine.evaluate_form(poses, ExerciseType.DEADLIFT)
        feedback = engine.generate_feedback(result, UserFitnessLevel.ADVANCED)
    """

    def __init__(self, agent: Optional[CoachingAgent] = None):
        self.agent = agent or CoachingAgent()

    def evaluate_form(
        self, poses: Sequence[PoseFrame], exercise_type: ExerciseType
    ) -> FormAnalysisResult:
        """See :func:`form_coach.analysis.evaluate_form`."""
        return evaluate_form(poses, exercise_type)

    async def evaluate_form_async(
        self, poses: Sequence[PoseFrame], exercise_type: ExerciseType
    ) -> FormAnalysisResult:
        return await asyncio.to_thread(evaluate_form, poses, exercise_type)

    def generate_feedback(
        self, analysis: FormAnalysisResult, user_level: UserFitnessLevel
    ) -> FormFeedback:
        return self.agent.generate_feedback(analysis, user_level)

    def analyze_session(
        self,
        poses: Sequence[PoseFrame],
        exercise_type: ExerciseType,
        user_level: Optional[UserFitnessLevel] = None,
    ) -> SessionReport:
        """Run all three stages for one set.

        Args:
            poses: Time-ordered pose frames for the set.
            exercise_type: Exercise performed.
            user_level: Level to tailor feedback to (default: ``DEFAULT_USER_LEVEL``).

        Returns:
            SessionReport with analysis, feedback and pose quality.

        Raises:
            NoPoseData: If ``poses`` is empty.
            UnsupportedExercise: If the exercise has no evaluator.
        """
        user_level = user_level or DEFAULT_USER_LEVEL
        t0 = time.time()

        # ── STAGE 1: Pose quality ────────────────────────────────────────────
        pose_quality = assess_sequence_quality(poses)
        logger.info(
            "Stage 1 complete: %d frames, pose quality %.2f (%s)",
            len(poses), pose_quality.overall_score, pose_quality.quality_level.value,
        )

        # ── STAGE 2: Form evaluation ─────────────────────────────────────────
        form_analysis = self.evaluate_form(poses, exercise_type)
        logger.info(
            "Stage 2 complete: %s overall=%.2f reps=%d",
            exercise_type.value, form_analysis.overall_score, form_analysis.rep_count,
        )

        # ── STAGE 3: Coaching feedback ───────────────────────────────────────
        feedback = self.generate_feedback(form_analysis, user_level)
        logger.info(
            "Stage 3 complete: %d corrections, priority=%s",
            len(feedback.corrections), feedback.priority.name,
        )

        logger.info("Session analyzed in %.3fs", time.time() - t0)
        return SessionReport(
            form_analysis=form_analysis,
            feedback=feedback,
            pose_quality=pose_quality,
        )

    async def analyze_session_async(
        self,
        poses: Sequence[PoseFrame],
        exercise_type: ExerciseType,
        user_level: Optional[UserFitnessLevel] = None,
    ) -> SessionReport:
        return await asyncio.to_thread(self.analyze_session, poses, exercise_type, user_level)


_default_engine: Optional[FormEvaluationEngine] = None


def _engine() -> FormEvaluationEngine:
    global _default_engine
    if _default_engine is None:
        _default_engine = FormEvaluationEngine()
    return _default_engine


def analyze_session(
    poses: Sequence[PoseFrame],
    exercise_type: ExerciseType,
    user_level: Optional[UserFitnessLevel] = None,
) -> SessionReport:
    """Module-level shortcut for :meth:`FormEvaluationEngine.analyze_session`."""
    return _engine().analyze_session(poses, exercise_type, user_level)


async def analyze_session_async(
    poses: Sequence[PoseFrame],
    exercise_type: ExerciseType,
    user_level: Optional[UserFitnessLevel] = None,
) -> SessionReport:
    return await _engine().analyze_session_async(poses, exercise_type, user_level)


async def evaluate_form_async(
    poses: Sequence[PoseFrame], exercise_type: ExerciseType
) -> FormAnalysisResult:
    """Evaluate in a worker thread; errors propagate to the awaiting caller."""
    return await asyncio.to_thread(evaluate_form, poses, exercise_type)
