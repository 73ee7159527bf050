"""
Pose detection quality checks.

Rates how usable a frame (or a whole sequence) is for a given exercise,
based on which required joints were detected and how confident the
detector was. These checks inform the caller; they never change scores.
"""

import logging
from enum import Enum
from typing import Sequence

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from .models import ExerciseType, JointName, PoseFrame

logger = logging.getLogger(__name__)

COMPLETENESS_WEIGHT: float = 0.4
CONFIDENCE_WEIGHT: float = 0.4
STABILITY_WEIGHT: float = 0.2

ACCEPTABLE_OVERALL_QUALITY: float = 0.6
ACCEPTABLE_COMPLETENESS: float = 0.7

_LOWER_BODY = (
    JointName.LEFT_HIP, JointName.RIGHT_HIP,
    JointName.LEFT_KNEE, JointName.RIGHT_KNEE,
    JointName.LEFT_ANKLE, JointName.RIGHT_ANKLE,
)
_SHOULDERS = (JointName.LEFT_SHOULDER, JointName.RIGHT_SHOULDER)
_ARMS = (
    JointName.LEFT_ELBOW, JointName.RIGHT_ELBOW,
    JointName.LEFT_WRIST, JointName.RIGHT_WRIST,
)
_HIPS = (JointName.LEFT_HIP, JointName.RIGHT_HIP)
_WRISTS = (JointName.LEFT_WRIST, JointName.RIGHT_WRIST)

REQUIRED_JOINTS: dict[ExerciseType, tuple[JointName, ...]] = {
    ExerciseType.SQUAT: _LOWER_BODY + _SHOULDERS + (JointName.NECK,),
    ExerciseType.DEADLIFT: _LOWER_BODY + _SHOULDERS + _WRISTS + (JointName.NECK,),
    ExerciseType.BENCH_PRESS: _SHOULDERS + _ARMS + (JointName.NECK,),
    ExerciseType.SHOULDER_PRESS: _SHOULDERS + _ARMS + (JointName.NECK,) + _HIPS,
    ExerciseType.PULL_UP: _SHOULDERS + _ARMS + (JointName.NECK,) + _HIPS,
    ExerciseType.UNKNOWN: tuple(JointName),
}


class QualityLevel(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"


def quality_level_for(score: float) -> QualityLevel:
    if score >= 0.8:
        return QualityLevel.EXCELLENT
    if score >= 0.6:
        return QualityLevel.GOOD
    if score >= 0.4:
        return QualityLevel.FAIR
    return QualityLevel.POOR


class PoseQualityAssessment(BaseModel):
    """Quality of a single frame for a given exercise."""
    model_config = ConfigDict(frozen=True)

    overall_quality: float
    confidence_score: float
    completeness_score: float
    stability_score: float
    missing_joints: list[JointName] = Field(default_factory=list)
    is_acceptable: bool

    @property
    def quality_level(self) -> QualityLevel:
        return quality_level_for(self.overall_quality)


class PoseQualityMetrics(BaseModel):
    """Quality summary over a whole pose sequence."""
    model_config = ConfigDict(frozen=True)

    average_confidence: float = 0.0
    completeness_score: float = 0.0
    consistency_score: float = 0.0
    overall_score: float = 0.0

    @property
    def quality_level(self) -> QualityLevel:
        return quality_level_for(self.overall_score)


def required_joints(exercise_type: ExerciseType) -> tuple[JointName, ...]:
    """Joints the evaluator for ``exercise_type`` relies on."""
    return REQUIRED_JOINTS[exercise_type]


def _confidence(value) -> float:
    return 1.0 if value is None else float(value)


def validate_pose_quality(pose: PoseFrame, exercise_type: ExerciseType) -> PoseQualityAssessment:
    """Rate one frame's detection quality against the exercise's required joints.

    Args:
        pose: Frame to rate.
        exercise_type: Exercise whose required joints are checked.

    Returns:
        PoseQualityAssessment; ``is_acceptable`` needs overall >= 0.6 and
        completeness >= 0.7.
    """
    required = required_joints(exercise_type)
    present = [
        name for name in required
        if name in pose.keypoints and pose.keypoints[name].is_valid
    ]
    missing = [name for name in required if name not in present]
    completeness = len(present) / len(required)

    confidences = [_confidence(kp.confidence) for kp in pose.valid_joints]
    if confidences:
        confidence_score = float(np.mean(confidences))
        stability_score = max(0.0, 1.0 - float(np.std(confidences)))
    else:
        confidence_score = 0.0
        stability_score = 1.0

    overall = (
        completeness * COMPLETENESS_WEIGHT
        + confidence_score * CONFIDENCE_WEIGHT
        + stability_score * STABILITY_WEIGHT
    )

    return PoseQualityAssessment(
        overall_quality=overall,
        confidence_score=confidence_score,
        completeness_score=completeness,
        stability_score=stability_score,
        missing_joints=missing,
        is_acceptable=overall >= ACCEPTABLE_OVERALL_QUALITY and completeness >= ACCEPTABLE_COMPLETENESS,
    )


def _frame_confidence(pose: PoseFrame) -> float:
    if pose.confidence is not None:
        return pose.confidence
    valid = pose.valid_joints
    if not valid:
        return 0.0
    return float(np.mean([_confidence(kp.confidence) for kp in valid]))


def assess_sequence_quality(poses: Sequence[PoseFrame]) -> PoseQualityMetrics:
    """Summarize detection quality across a whole pose sequence.

    Returns:
        PoseQualityMetrics; all fields are 0.0 for an empty sequence.
    """
    if not poses:
        return PoseQualityMetrics()

    frame_confidences = np.array([_frame_confidence(pose) for pose in poses])
    average_confidence = float(frame_confidences.mean())

    joint_counts = [len(pose.valid_joints) for pose in poses]
    max_joints = max(joint_counts)
    completeness = sum(joint_counts) / (len(poses) * max_joints) if max_joints else 0.0

    consistency = max(0.0, 1.0 - float(frame_confidences.std()))

    overall = (
        average_confidence * CONFIDENCE_WEIGHT
        + completeness * COMPLETENESS_WEIGHT
        + consistency * STABILITY_WEIGHT
    )
    if overall < ACCEPTABLE_OVERALL_QUALITY:
        logger.warning("Low pose quality across %d frames (overall=%.2f)", len(poses), overall)

    return PoseQualityMetrics(
        average_confidence=average_confidence,
        completeness_score=completeness,
        consistency_score=consistency,
        overall_score=overall,
    )
