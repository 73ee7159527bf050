"""
Value objects for pose-based form analysis.

Pydantic models for the pose input (keypoints and frames) and for the
analysis output (per-criterion scores, issues, strengths and the assembled
result). All models are frozen: they are built once per evaluation call
and consumed read-only.
"""

from datetime import datetime, timezone
from enum import Enum, IntEnum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .geometry import Point

# Joints at or below this confidence do not contribute to the center of mass.
VALID_JOINT_CONFIDENCE: float = 0.5


# ============================================================================
# Enumerations
# ============================================================================

class ExerciseType(str, Enum):
    SQUAT = "squat"
    DEADLIFT = "deadlift"
    BENCH_PRESS = "benchPress"
    SHOULDER_PRESS = "shoulderPress"
    PULL_UP = "pullUp"
    UNKNOWN = "unknown"

    @property
    def display_name(self) -> str:
        return _EXERCISE_DISPLAY_NAMES[self]


_EXERCISE_DISPLAY_NAMES: dict[ExerciseType, str] = {
    ExerciseType.SQUAT: "Squat",
    ExerciseType.DEADLIFT: "Deadlift",
    ExerciseType.BENCH_PRESS: "Bench Press",
    ExerciseType.SHOULDER_PRESS: "Shoulder Press",
    ExerciseType.PULL_UP: "Pull Up",
    ExerciseType.UNKNOWN: "Unknown",
}


class JointName(str, Enum):
    HEAD = "head"
    NECK = "neck"
    LEFT_SHOULDER = "leftShoulder"
    RIGHT_SHOULDER = "rightShoulder"
    LEFT_ELBOW = "leftElbow"
    RIGHT_ELBOW = "rightElbow"
    LEFT_WRIST = "leftWrist"
    RIGHT_WRIST = "rightWrist"
    LEFT_HIP = "leftHip"
    RIGHT_HIP = "rightHip"
    LEFT_KNEE = "leftKnee"
    RIGHT_KNEE = "rightKnee"
    LEFT_ANKLE = "leftAnkle"
    RIGHT_ANKLE = "rightAnkle"


class FormIssueType(str, Enum):
    KNEE_VALGUS = "kneeValgus"
    SPINAL_ROUNDING = "spinalRounding"
    INSUFFICIENT_DEPTH = "insufficientDepth"
    INEFFICIENT_BAR_PATH = "inefficientBarPath"
    IMPROPER_HIP_HINGE = "improperHipHinge"
    INCONSISTENT_TEMPO = "inconsistentTempo"


class FormStrengthType(str, Enum):
    KNEE_TRACKING = "kneeTracking"
    SPINAL_ALIGNMENT = "spinalAlignment"
    DEPTH = "depth"
    BAR_PATH = "barPath"
    SHOULDER_STABILITY = "shoulderStability"


class FormIssueSeverity(IntEnum):
    LOW = 1
    MEDIUM = 2
    HIGH = 3


class UserFitnessLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


# ============================================================================
# Pose Input
# ============================================================================

class Keypoint(BaseModel):
    """A single detected joint position (analysis frame: y grows upward)."""
    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    confidence: Optional[float] = Field(
        default=None, ge=0.0, le=1.0,
        description="Detector confidence; None when the tracker gives none"
    )

    @property
    def position(self) -> Point:
        return Point(self.x, self.y)

    @property
    def is_valid(self) -> bool:
        """True when the joint is trusted enough for whole-body estimates."""
        return self.confidence is None or self.confidence > VALID_JOINT_CONFIDENCE


class PoseFrame(BaseModel):
    """
    All keypoints detected at one sampled instant.

    Joints that were not detected are simply absent from ``keypoints``;
    the accessors below return None for them.
    """
    model_config = ConfigDict(frozen=True)

    keypoints: dict[JointName, Keypoint] = Field(default_factory=dict)
    frame_index: int = Field(default=0, ge=0, description="Position in the capture")
    timestamp: Optional[float] = Field(
        default=None, description="Seconds since the start of the capture"
    )
    confidence: Optional[float] = Field(
        default=None, ge=0.0, le=1.0,
        description="Overall detection confidence for the frame"
    )

    def joint(self, name: JointName) -> Optional[Keypoint]:
        return self.keypoints.get(name)

    @property
    def head(self) -> Optional[Keypoint]:
        return self.joint(JointName.HEAD)

    @property
    def neck(self) -> Optional[Keypoint]:
        return self.joint(JointName.NECK)

    @property
    def left_shoulder(self) -> Optional[Keypoint]:
        return self.joint(JointName.LEFT_SHOULDER)

    @property
    def right_shoulder(self) -> Optional[Keypoint]:
        return self.joint(JointName.RIGHT_SHOULDER)

    @property
    def left_elbow(self) -> Optional[Keypoint]:
        return self.joint(JointName.LEFT_ELBOW)

    @property
    def right_elbow(self) -> Optional[Keypoint]:
        return self.joint(JointName.RIGHT_ELBOW)

    @property
    def left_wrist(self) -> Optional[Keypoint]:
        return self.joint(JointName.LEFT_WRIST)

    @property
    def right_wrist(self) -> Optional[Keypoint]:
        return self.joint(JointName.RIGHT_WRIST)

    @property
    def left_hip(self) -> Optional[Keypoint]:
        return self.joint(JointName.LEFT_HIP)

    @property
    def right_hip(self) -> Optional[Keypoint]:
        return self.joint(JointName.RIGHT_HIP)

    @property
    def left_knee(self) -> Optional[Keypoint]:
        return self.joint(JointName.LEFT_KNEE)

    @property
    def right_knee(self) -> Optional[Keypoint]:
        return self.joint(JointName.RIGHT_KNEE)

    @property
    def left_ankle(self) -> Optional[Keypoint]:
        return self.joint(JointName.LEFT_ANKLE)

    @property
    def right_ankle(self) -> Optional[Keypoint]:
        return self.joint(JointName.RIGHT_ANKLE)

    @property
    def all_joints(self) -> list[Keypoint]:
        """Detected keypoints in vocabulary order."""
        return [self.keypoints[name] for name in JointName if name in self.keypoints]

    @property
    def valid_joints(self) -> list[Keypoint]:
        return [kp for kp in self.all_joints if kp.is_valid]

    @property
    def center_of_mass(self) -> Optional[Point]:
        """Mean position of the valid joints, or None if there are none."""
        valid = self.valid_joints
        if not valid:
            return None
        total_x = sum(kp.x for kp in valid)
        total_y = sum(kp.y for kp in valid)
        return Point(total_x / len(valid), total_y / len(valid))


# ============================================================================
# Analysis Output
# ============================================================================

class FormAnalysisScore(BaseModel):
    """Outcome of one analyzer over a pose sequence."""
    model_config = ConfigDict(frozen=True)

    score: float = Field(ge=0.0, le=1.0)
    problematic_frames: list[int] = Field(
        default_factory=list,
        description="Indices of frames whose sub-score fell below the flag threshold"
    )


class FormIssue(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: FormIssueType
    severity: FormIssueSeverity
    description: str
    affected_frames: list[int] = Field(default_factory=list)


class FormStrength(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: FormStrengthType
    description: str


class FormAnalysisResult(BaseModel):
    """Complete assessment of one set for one exercise."""
    model_config = ConfigDict(frozen=True)

    exercise_type: ExerciseType
    overall_score: float = Field(ge=0.0, le=1.0)
    issues: list[FormIssue] = Field(default_factory=list)
    strengths: list[FormStrength] = Field(default_factory=list)
    detailed_scores: dict[str, float] = Field(
        default_factory=dict, description="Criterion name -> score (0-1)"
    )
    rep_count: int = Field(ge=0)
    analysis_date: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
