"""
Pose input conversion.

Receives per-frame keypoints from the capture/tracking side and produces
PoseFrame objects ready for analysis.

Each raw frame maps a joint name to one of:
    [x, y]
    [x, y, confidence]
    {"x": ..., "y": ..., "confidence": ...}   (confidence optional)
A joint may be omitted or set to None when it was not detected.
"""

import logging
from typing import Any, Mapping, Optional, Sequence

from ..analysis.models import JointName, Keypoint, PoseFrame
from .config import MIN_KEYPOINT_CONFIDENCE

logger = logging.getLogger(__name__)

_JOINT_NAMES = {joint.value: joint for joint in JointName}


def _to_float(value: Any, joint: str, field: str) -> float:
    if isinstance(value, bool):
        raise ValueError(f"Joint '{joint}': {field} must be a number, got {value!r}.")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(
            f"Joint '{joint}': {field} must be a number, got {value!r}."
        ) from None


def _parse_keypoint(joint: str, raw: Any) -> Keypoint:
    """Validate one raw joint entry and convert it to a Keypoint.

    Raises:
        ValueError: If the entry is not a 2/3-element sequence or a mapping
            with numeric x/y.
    """
    if isinstance(raw, Mapping):
        if "x" not in raw or "y" not in raw:
            raise ValueError(f"Joint '{joint}': mapping needs 'x' and 'y' keys.")
        x, y, confidence = raw["x"], raw["y"], raw.get("confidence")
    elif isinstance(raw, Sequence) and not isinstance(raw, str):
        if len(raw) not in (2, 3):
            raise ValueError(
                f"Joint '{joint}': expected [x, y] or [x, y, confidence], "
                f"got {len(raw)} values."
            )
        x, y = raw[0], raw[1]
        confidence = raw[2] if len(raw) == 3 else None
    else:
        raise ValueError(f"Joint '{joint}': unsupported keypoint format {type(raw).__name__}.")

    return Keypoint(
        x=_to_float(x, joint, "x"),
        y=_to_float(y, joint, "y"),
        confidence=None if confidence is None else _to_float(confidence, joint, "confidence"),
    )


def parse_pose_frame(
    raw_frame: Mapping[str, Any],
    frame_index: int = 0,
    min_confidence: float = MIN_KEYPOINT_CONFIDENCE,
    image_height: Optional[float] = None,
    timestamp: Optional[float] = None,
) -> PoseFrame:
    """Convert one raw frame to a PoseFrame.

    Args:
        raw_frame: Joint name -> raw keypoint (or None if undetected).
        frame_index: Position of the frame in the capture.
        min_confidence: Keypoints with confidence at or below this value are
            dropped as undetected.
        image_height: When given, input y is image-style (growing downward)
            and is flipped to the analysis frame as ``image_height - y``.
        timestamp: Seconds since the start of the capture.

    Returns:
        PoseFrame with the accepted keypoints.

    Raises:
        ValueError: On unknown joint names or malformed keypoints.
    """
    keypoints: dict[JointName, Keypoint] = {}
    for name, raw in raw_frame.items():
        joint = _JOINT_NAMES.get(name)
        if joint is None:
            raise ValueError(
                f"Unknown joint '{name}'. Expected one of: {', '.join(_JOINT_NAMES)}."
            )
        if raw is None:
            continue

        keypoint = _parse_keypoint(name, raw)
        if keypoint.confidence is not None and keypoint.confidence <= min_confidence:
            continue
        if image_height is not None:
            keypoint = keypoint.model_copy(update={"y": image_height - keypoint.y})
        keypoints[joint] = keypoint

    return PoseFrame(keypoints=keypoints, frame_index=frame_index, timestamp=timestamp)


def parse_pose_sequence(
    raw_frames: Sequence[Mapping[str, Any]],
    min_confidence: float = MIN_KEYPOINT_CONFIDENCE,
    image_height: Optional[float] = None,
    fps: Optional[float] = None,
) -> list[PoseFrame]:
    """Convert a raw capture into PoseFrames, indexed by position.

    Args:
        raw_frames: One mapping per frame (see module docstring).
        min_confidence: Drop keypoints with confidence at or below this.
        image_height: Flip image-style y coordinates when given.
        fps: Capture rate; when given, each frame gets ``timestamp = index / fps``.

    Returns:
        List of PoseFrame, same length and order as ``raw_frames``.

    Raises:
        ValueError: On unknown joint names or malformed keypoints.
    """
    if fps is not None and fps <= 0:
        raise ValueError(f"fps must be positive, got {fps}.")

    frames = [
        parse_pose_frame(
            raw,
            frame_index=index,
            min_confidence=min_confidence,
            image_height=image_height,
            timestamp=index / fps if fps else None,
        )
        for index, raw in enumerate(raw_frames)
    ]

    dropped = sum(len(raw) for raw in raw_frames) - sum(len(f.keypoints) for f in frames)
    if dropped:
        logger.info("Dropped %d undetected or low-confidence keypoints", dropped)
    logger.info("Parsed %d pose frames", len(frames))
    return frames
