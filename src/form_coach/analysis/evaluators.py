"""
Exercise evaluators.

Each supported exercise maps to an ordered table of criteria. A criterion
names the analyzer to run, its weight in the overall score, and how a low
or high score turns into a FormIssue or a FormStrength. Thresholds differ
per criterion and per exercise (spinal alignment is judged more strictly
for the deadlift than for the squat).

Bench press, shoulder press and pull-up are single-criterion evaluations
on shoulder stability.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from .analyzers import (
    Analyzer,
    analyze_bar_path,
    analyze_hip_hinge,
    analyze_knee_tracking,
    analyze_movement_tempo,
    analyze_shoulder_stability,
    analyze_spinal_alignment,
    analyze_squat_depth,
)
from .errors import NoPoseData, UnsupportedExercise
from .models import (
    ExerciseType,
    FormAnalysisResult,
    FormIssue,
    FormIssueSeverity,
    FormIssueType,
    FormStrength,
    FormStrengthType,
    PoseFrame,
)
from .repetition import count_repetitions
from .scoring import aggregate_scores

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IssueRule:
    """Emit ``issue_type`` when the score is below ``threshold``.

    Severity is ``severity``, escalated to HIGH when ``high_below`` is set
    and the score is also below it.
    """
    issue_type: FormIssueType
    threshold: float
    severity: FormIssueSeverity
    description: str
    high_below: Optional[float] = None
    report_frames: bool = True

    def severity_for(self, score: float) -> FormIssueSeverity:
        if self.high_below is not None and score < self.high_below:
            return FormIssueSeverity.HIGH
        return self.severity


@dataclass(frozen=True)
class StrengthRule:
    """Emit ``strength_type`` when the score reaches ``threshold``.

    ``strict`` requires the score to be strictly above the threshold.
    """
    strength_type: FormStrengthType
    threshold: float
    description: str
    strict: bool = False

    def applies(self, score: float) -> bool:
        return score > self.threshold if self.strict else score >= self.threshold


@dataclass(frozen=True)
class Criterion:
    name: str
    analyzer: Analyzer
    weight: float
    issue: Optional[IssueRule] = None
    strength: Optional[StrengthRule] = None


# ============================================================================
# Criterion Tables
# ============================================================================

SQUAT_CRITERIA: tuple[Criterion, ...] = (
    Criterion(
        name="kneeTracking",
        analyzer=analyze_knee_tracking,
        weight=0.3,
        issue=IssueRule(
            FormIssueType.KNEE_VALGUS, 0.7, FormIssueSeverity.MEDIUM,
            "Knees are caving inward during the squat",
            high_below=0.5,
        ),
        strength=StrengthRule(
            FormStrengthType.KNEE_TRACKING, 0.7,
            "Excellent knee tracking throughout the movement",
        ),
    ),
    Criterion(
        name="depth",
        analyzer=analyze_squat_depth,
        weight=0.25,
        issue=IssueRule(
            FormIssueType.INSUFFICIENT_DEPTH, 0.6, FormIssueSeverity.MEDIUM,
            "Not reaching adequate squat depth",
        ),
        strength=StrengthRule(
            FormStrengthType.DEPTH, 0.6,
            "Good squat depth achieved",
        ),
    ),
    Criterion(
        name="spinalAlignment",
        analyzer=analyze_spinal_alignment,
        weight=0.35,
        issue=IssueRule(
            FormIssueType.SPINAL_ROUNDING, 0.7, FormIssueSeverity.MEDIUM,
            "Back rounding detected during the movement",
            high_below=0.5,
        ),
        strength=StrengthRule(
            FormStrengthType.SPINAL_ALIGNMENT, 0.7,
            "Maintained neutral spine throughout the movement",
        ),
    ),
    Criterion(
        name="tempo",
        analyzer=analyze_movement_tempo,
        weight=0.1,
        issue=IssueRule(
            FormIssueType.INCONSISTENT_TEMPO, 0.6, FormIssueSeverity.LOW,
            "Movement tempo is inconsistent",
            report_frames=False,
        ),
    ),
)

DEADLIFT_CRITERIA: tuple[Criterion, ...] = (
    Criterion(
        name="barPath",
        analyzer=analyze_bar_path,
        weight=0.25,
        issue=IssueRule(
            FormIssueType.INEFFICIENT_BAR_PATH, 0.7, FormIssueSeverity.MEDIUM,
            "Bar is drifting away from the body",
        ),
        strength=StrengthRule(
            FormStrengthType.BAR_PATH, 0.7,
            "Bar maintained close to body throughout lift",
        ),
    ),
    Criterion(
        name="hipHinge",
        analyzer=analyze_hip_hinge,
        weight=0.35,
        issue=IssueRule(
            FormIssueType.IMPROPER_HIP_HINGE, 0.6, FormIssueSeverity.HIGH,
            "Hip hinge pattern needs improvement",
        ),
    ),
    Criterion(
        name="spinalAlignment",
        analyzer=analyze_spinal_alignment,
        weight=0.4,
        issue=IssueRule(
            FormIssueType.SPINAL_ROUNDING, 0.8, FormIssueSeverity.HIGH,
            "Spinal rounding detected - high injury risk",
        ),
        strength=StrengthRule(
            FormStrengthType.SPINAL_ALIGNMENT, 0.8,
            "Maintained neutral spine - excellent form",
        ),
    ),
)

BENCH_PRESS_CRITERIA: tuple[Criterion, ...] = (
    Criterion(
        name="shoulderStability",
        analyzer=analyze_shoulder_stability,
        weight=1.0,
        strength=StrengthRule(
            FormStrengthType.SHOULDER_STABILITY, 0.7,
            "Good shoulder stability maintained",
            strict=True,
        ),
    ),
)

SHOULDER_STABILITY_ONLY: tuple[Criterion, ...] = (
    Criterion(
        name="shoulderStability",
        analyzer=analyze_shoulder_stability,
        weight=1.0,
    ),
)

EXERCISE_CRITERIA: dict[ExerciseType, tuple[Criterion, ...]] = {
    ExerciseType.SQUAT: SQUAT_CRITERIA,
    ExerciseType.DEADLIFT: DEADLIFT_CRITERIA,
    ExerciseType.BENCH_PRESS: BENCH_PRESS_CRITERIA,
    ExerciseType.SHOULDER_PRESS: SHOULDER_STABILITY_ONLY,
    ExerciseType.PULL_UP: SHOULDER_STABILITY_ONLY,
}


def get_exercise_criteria(exercise_type: ExerciseType) -> tuple[Criterion, ...]:
    """Criterion table for an exercise.

    Raises:
        UnsupportedExercise: If no table exists (e.g. ``ExerciseType.UNKNOWN``).
    """
    try:
        return EXERCISE_CRITERIA[exercise_type]
    except KeyError:
        raise UnsupportedExercise(exercise_type) from None


# ============================================================================
# Evaluation
# ============================================================================

def evaluate_criteria(
    exercise_type: ExerciseType,
    criteria: Sequence[Criterion],
    poses: Sequence[PoseFrame],
) -> FormAnalysisResult:
    """Run a criterion table over the poses and assemble the result."""
    issues: list[FormIssue] = []
    strengths: list[FormStrength] = []
    scores: dict[str, float] = {}

    for criterion in criteria:
        analysis = criterion.analyzer(poses)
        scores[criterion.name] = analysis.score
        logger.debug(
            "%s / %s: score=%.3f flagged=%d",
            exercise_type.value, criterion.name, analysis.score,
            len(analysis.problematic_frames),
        )

        rule = criterion.issue
        if rule is not None and analysis.score < rule.threshold:
            issues.append(FormIssue(
                type=rule.issue_type,
                severity=rule.severity_for(analysis.score),
                description=rule.description,
                affected_frames=analysis.problematic_frames if rule.report_frames else [],
            ))
        elif criterion.strength is not None and criterion.strength.applies(analysis.score):
            strengths.append(FormStrength(
                type=criterion.strength.strength_type,
                description=criterion.strength.description,
            ))

    weights = {criterion.name: criterion.weight for criterion in criteria}
    overall_score = aggregate_scores(scores, weights)

    return FormAnalysisResult(
        exercise_type=exercise_type,
        overall_score=overall_score,
        issues=issues,
        strengths=strengths,
        detailed_scores=scores,
        rep_count=count_repetitions(poses),
    )


def evaluate_form(poses: Sequence[PoseFrame], exercise_type: ExerciseType) -> FormAnalysisResult:
    """
    Assess a complete pose sequence for one exercise.

    Args:
        poses: Time-ordered pose frames for one set. Not modified.
        exercise_type: Exercise performed in the set.

    Returns:
        FormAnalysisResult with per-criterion scores, issues, strengths,
        overall score and rep count.

    Raises:
        NoPoseData: If ``poses`` is empty.
        UnsupportedExercise: If the exercise has no evaluator.
    """
    if not poses:
        raise NoPoseData()

    criteria = get_exercise_criteria(exercise_type)
    result = evaluate_criteria(exercise_type, criteria, poses)
    logger.info(
        "Evaluated %s over %d frames: overall=%.2f issues=%d strengths=%d reps=%d",
        exercise_type.value, len(poses), result.overall_score,
        len(result.issues), len(result.strengths), result.rep_count,
    )
    return result
