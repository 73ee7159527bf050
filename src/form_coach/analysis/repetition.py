"""
Repetition counting from vertical center-of-mass motion.

A rep is one up-and-down cycle of the center of mass. Counting is done on
strict local extrema of the y trace, and the count is the smaller of the
number of peaks and valleys.

Plateaus (two equal neighbouring samples at a turning point) produce no
extremum and are therefore undercounted. This is a known simplification of
the counter, kept as-is.
"""

import logging
from typing import Sequence

import numpy as np

from .models import PoseFrame

logger = logging.getLogger(__name__)

# Fewer usable samples than this and the trace is not analyzed.
MIN_TRACE_LENGTH: int = 11


def center_of_mass_trace(poses: Sequence[PoseFrame]) -> list[float]:
    """Vertical center-of-mass coordinate per frame, skipping frames without one."""
    trace = []
    for pose in poses:
        com = pose.center_of_mass
        if com is not None:
            trace.append(com.y)
    return trace


def count_extrema(values: Sequence[float]) -> tuple[int, int]:
    """
    Count strict interior local maxima and minima.

    Returns:
        Tuple of (n_peaks, n_valleys). Both end samples are never counted.
    """
    v = np.asarray(values, dtype=np.float64)
    if v.size < 3:
        return 0, 0
    inner, before, after = v[1:-1], v[:-2], v[2:]
    peaks = int(np.count_nonzero((inner > before) & (inner > after)))
    valleys = int(np.count_nonzero((inner < before) & (inner < after)))
    return peaks, valleys


def count_repetitions(poses: Sequence[PoseFrame]) -> int:
    """Estimate reps as ``min(#peaks, #valleys)`` of the center-of-mass trace."""
    trace = center_of_mass_trace(poses)
    if len(trace) < MIN_TRACE_LENGTH:
        logger.debug(
            "Only %d usable center-of-mass samples (need %d); rep count is 0",
            len(trace), MIN_TRACE_LENGTH,
        )
        return 0

    peaks, valleys = count_extrema(trace)
    logger.debug("Rep trace: %d peaks, %d valleys", peaks, valleys)
    return min(peaks, valleys)
