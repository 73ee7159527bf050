"""
Per-criterion form analyzers.

Each analyzer takes the full pose sequence and returns a FormAnalysisScore:
a score in [0, 1] and the indices of frames that violate the criterion.

Shared rules:
- Frames missing any joint an analyzer needs are skipped. They count neither
  towards the score nor as problematic.
- Per-frame sub-scores come from ``clamped_score(deviation, tolerance)``.
- With no eligible frames the score is 0.0, unless the analyzer documents
  its own neutral fallback.

Tolerances and flag thresholds are per-criterion constants and differ on
purpose between analyzers.
"""

import logging
from typing import Callable, Sequence

import numpy as np

from .geometry import angle_from_vertical, clamped_score, distance, midpoint
from .models import FormAnalysisScore, PoseFrame

logger = logging.getLogger(__name__)

Analyzer = Callable[[Sequence[PoseFrame]], FormAnalysisScore]

# ---------------------------------------------------------------------------
# Knee tracking
# ---------------------------------------------------------------------------
KNEE_OFFSET_TOLERANCE_PX: float = 50.0
KNEE_FLAG_THRESHOLD: float = 0.6

# ---------------------------------------------------------------------------
# Squat depth (hip height / knee height)
# ---------------------------------------------------------------------------
DEPTH_SHALLOW_RATIO: float = 1.05
DEPTH_BORDERLINE_RATIO: float = 0.98
DEPTH_SHALLOW_SCORE: float = 0.5
DEPTH_BORDERLINE_SCORE: float = 0.7

# ---------------------------------------------------------------------------
# Spinal alignment
# ---------------------------------------------------------------------------
SPINE_ANGLE_TOLERANCE_RAD: float = 0.5
SPINE_FLAG_THRESHOLD: float = 0.6

# ---------------------------------------------------------------------------
# Movement tempo
# ---------------------------------------------------------------------------
TEMPO_MIN_FRAMES: int = 4
TEMPO_VELOCITY_STD_SCALE: float = 10.0
TEMPO_NEUTRAL_SCORE: float = 0.5

# ---------------------------------------------------------------------------
# Deadlift bar path (wrist midpoint as bar proxy)
# ---------------------------------------------------------------------------
BAR_DRIFT_TOLERANCE_PX: float = 30.0
BAR_PATH_FLAG_THRESHOLD: float = 0.6

# ---------------------------------------------------------------------------
# Hip hinge
# ---------------------------------------------------------------------------
HIP_HINGE_HIGH_SCORE: float = 0.8
HIP_HINGE_LOW_SCORE: float = 0.5

# ---------------------------------------------------------------------------
# Shoulder stability
# ---------------------------------------------------------------------------
SHOULDER_WIDTH_DEVIATION_FACTOR: float = 2.0
SHOULDER_NEUTRAL_SCORE: float = 0.5


def _mean_score(scores: list[float], criterion: str) -> float:
    if not scores:
        logger.warning("No eligible frames for '%s'; scoring 0.0", criterion)
        return 0.0
    return sum(scores) / len(scores)


def analyze_knee_tracking(poses: Sequence[PoseFrame]) -> FormAnalysisScore:
    """Knees should stay roughly over the ankles (horizontal offset per side)."""
    problematic_frames: list[int] = []
    scores: list[float] = []

    for index, pose in enumerate(poses):
        lk, rk = pose.left_knee, pose.right_knee
        la, ra = pose.left_ankle, pose.right_ankle
        if lk is None or rk is None or la is None or ra is None:
            continue

        left = clamped_score(abs(lk.x - la.x), KNEE_OFFSET_TOLERANCE_PX)
        right = clamped_score(abs(rk.x - ra.x), KNEE_OFFSET_TOLERANCE_PX)
        frame_score = (left + right) / 2.0
        scores.append(frame_score)

        if frame_score < KNEE_FLAG_THRESHOLD:
            problematic_frames.append(index)

    return FormAnalysisScore(
        score=_mean_score(scores, "kneeTracking"),
        problematic_frames=problematic_frames,
    )


def analyze_squat_depth(poses: Sequence[PoseFrame]) -> FormAnalysisScore:
    """
    Score the shallowest bottom position seen.

    The score is a running minimum, so the worst observed depth governs.
    A ratio above DEPTH_SHALLOW_RATIO (hips clearly above knees) caps the
    score at 0.5 and flags the frame; above DEPTH_BORDERLINE_RATIO caps it
    at 0.7 without flagging.
    """
    problematic_frames: list[int] = []
    min_depth_score = 1.0
    eligible = 0

    for index, pose in enumerate(poses):
        lh, rh = pose.left_hip, pose.right_hip
        lk, rk = pose.left_knee, pose.right_knee
        if lh is None or rh is None or lk is None or rk is None:
            continue

        hip_height = (lh.y + rh.y) / 2
        knee_height = (lk.y + rk.y) / 2
        if knee_height == 0:
            continue
        eligible += 1

        depth_ratio = hip_height / knee_height
        if depth_ratio > DEPTH_SHALLOW_RATIO:
            problematic_frames.append(index)
            min_depth_score = min(min_depth_score, DEPTH_SHALLOW_SCORE)
        elif depth_ratio > DEPTH_BORDERLINE_RATIO:
            min_depth_score = min(min_depth_score, DEPTH_BORDERLINE_SCORE)

    if eligible == 0:
        logger.warning("No eligible frames for 'depth'; scoring 0.0")
        min_depth_score = 0.0

    return FormAnalysisScore(score=min_depth_score, problematic_frames=problematic_frames)


def analyze_spinal_alignment(poses: Sequence[PoseFrame]) -> FormAnalysisScore:
    """Torso (shoulder midpoint over hip midpoint) should stay near vertical."""
    problematic_frames: list[int] = []
    scores: list[float] = []

    for index, pose in enumerate(poses):
        ls, rs = pose.left_shoulder, pose.right_shoulder
        lh, rh = pose.left_hip, pose.right_hip
        # The neck only gates eligibility; it is not part of the measurement.
        if pose.neck is None or ls is None or rs is None or lh is None or rh is None:
            continue

        shoulder_center = midpoint(ls.position, rs.position)
        hip_center = midpoint(lh.position, rh.position)
        deviation = abs(angle_from_vertical(shoulder_center, hip_center))
        score = clamped_score(deviation, SPINE_ANGLE_TOLERANCE_RAD)
        scores.append(score)

        if score < SPINE_FLAG_THRESHOLD:
            problematic_frames.append(index)

    return FormAnalysisScore(
        score=_mean_score(scores, "spinalAlignment"),
        problematic_frames=problematic_frames,
    )


def analyze_movement_tempo(poses: Sequence[PoseFrame]) -> FormAnalysisScore:
    """
    Consistency of center-of-mass speed between consecutive frames.

    Needs at least TEMPO_MIN_FRAMES frames and one usable velocity; otherwise
    returns the neutral 0.5. Never flags individual frames.
    """
    if len(poses) < TEMPO_MIN_FRAMES:
        return FormAnalysisScore(score=TEMPO_NEUTRAL_SCORE)

    velocities: list[float] = []
    for previous, current in zip(poses, poses[1:]):
        prev_com, curr_com = previous.center_of_mass, current.center_of_mass
        if prev_com is None or curr_com is None:
            continue
        velocities.append(distance(curr_com, prev_com))

    if not velocities:
        return FormAnalysisScore(score=TEMPO_NEUTRAL_SCORE)

    velocity_std = float(np.std(velocities))
    consistency = max(0.0, 1.0 - velocity_std / TEMPO_VELOCITY_STD_SCALE)
    return FormAnalysisScore(score=consistency)


def analyze_bar_path(poses: Sequence[PoseFrame]) -> FormAnalysisScore:
    """The bar (wrist midpoint) should stay over the vertical line through the ankles."""
    problematic_frames: list[int] = []
    scores: list[float] = []

    for index, pose in enumerate(poses):
        lw, rw = pose.left_wrist, pose.right_wrist
        la, ra = pose.left_ankle, pose.right_ankle
        if lw is None or rw is None or la is None or ra is None:
            continue

        wrist_center = midpoint(lw.position, rw.position)
        ankle_center = midpoint(la.position, ra.position)
        score = clamped_score(abs(wrist_center.x - ankle_center.x), BAR_DRIFT_TOLERANCE_PX)
        scores.append(score)

        if score < BAR_PATH_FLAG_THRESHOLD:
            problematic_frames.append(index)

    return FormAnalysisScore(
        score=_mean_score(scores, "barPath"),
        problematic_frames=problematic_frames,
    )


def analyze_hip_hinge(poses: Sequence[PoseFrame]) -> FormAnalysisScore:
    """0.8 for frames with the hip midpoint above the knee midpoint, else 0.5."""
    scores: list[float] = []

    for pose in poses:
        lh, rh = pose.left_hip, pose.right_hip
        lk, rk = pose.left_knee, pose.right_knee
        if lh is None or rh is None or lk is None or rk is None:
            continue

        hip_center = midpoint(lh.position, rh.position)
        knee_center = midpoint(lk.position, rk.position)
        if hip_center.y > knee_center.y:
            scores.append(HIP_HINGE_HIGH_SCORE)
        else:
            scores.append(HIP_HINGE_LOW_SCORE)

    return FormAnalysisScore(score=_mean_score(scores, "hipHinge"))


def analyze_shoulder_stability(poses: Sequence[PoseFrame]) -> FormAnalysisScore:
    """
    Shoulder width should stay close to the width seen in the first frame.

    Returns the neutral 0.5 when the first frame lacks either shoulder or
    has zero shoulder width. Never flags individual frames.
    """
    if not poses:
        return FormAnalysisScore(score=SHOULDER_NEUTRAL_SCORE)

    first = poses[0]
    if first.left_shoulder is None or first.right_shoulder is None:
        return FormAnalysisScore(score=SHOULDER_NEUTRAL_SCORE)

    reference_width = abs(first.left_shoulder.x - first.right_shoulder.x)
    if reference_width == 0:
        return FormAnalysisScore(score=SHOULDER_NEUTRAL_SCORE)

    scores: list[float] = []
    for pose in poses:
        ls, rs = pose.left_shoulder, pose.right_shoulder
        if ls is None or rs is None:
            continue
        width = abs(ls.x - rs.x)
        relative_deviation = abs(width - reference_width) / reference_width
        scores.append(max(0.0, 1.0 - relative_deviation * SHOULDER_WIDTH_DEVIATION_FACTOR))

    return FormAnalysisScore(score=_mean_score(scores, "shoulderStability"))
