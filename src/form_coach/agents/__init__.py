"""
Agents module for form-coach.

This module turns analysis results into coaching feedback: issue
prioritization, corrective instructions and the feedback graph.
"""

from .coaching_agent import CoachingAgent, generate_feedback
from .prioritizer import prioritize_issues
from .state import FeedbackState, FormCorrection, FormFeedback
from .instructions import get_corrective_instruction

__all__ = [
    "CoachingAgent",
    "generate_feedback",
    "prioritize_issues",
    "FeedbackState",
    "FormCorrection",
    "FormFeedback",
    "get_corrective_instruction",
]
