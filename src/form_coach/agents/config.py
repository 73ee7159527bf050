"""
Configuration for feedback generation.

Score bands and limits used when turning an analysis result into coaching
feedback.
"""

# Overall-score bands for the summary sentence (0-1 scale)
SCORE_THRESHOLDS = {
    "excellent": 0.8,
    "good": 0.6,
}

# Maximum number of corrective instructions returned per feedback
MAX_CORRECTIONS = 3
