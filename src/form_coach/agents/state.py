"""
State definitions for the Coaching Agent using LangGraph.

This module defines the Pydantic models for the feedback output and for the
state that flows through the agent graph.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..analysis.models import (
    ExerciseType,
    FormAnalysisResult,
    FormIssue,
    FormIssueSeverity,
    FormIssueType,
    FormStrength,
    UserFitnessLevel,
)


# ============================================================================
# Output Models
# ============================================================================

class FormCorrection(BaseModel):
    """One corrective instruction tied to an issue."""
    model_config = ConfigDict(frozen=True)

    issue: FormIssueType
    instruction: str
    priority: FormIssueSeverity


class FormFeedback(BaseModel):
    """Coaching feedback derived from one analysis result."""
    model_config = ConfigDict(frozen=True)

    overall_score: float = Field(ge=0.0, le=1.0)
    main_feedback: str = Field(description="Short natural-language summary")
    corrections: list[FormCorrection] = Field(
        default_factory=list, description="At most three, most important first"
    )
    strengths: list[FormStrength] = Field(default_factory=list)
    exercise_type: ExerciseType
    user_level: UserFitnessLevel
    priority: FormIssueSeverity = Field(
        description="Severity of the top issue, LOW when there are none"
    )


# ============================================================================
# State Model (flows through LangGraph)
# ============================================================================

class FeedbackState(BaseModel):
    """
    State that flows through the LangGraph coaching agent.

    Each node reads what earlier nodes produced and adds its own piece;
    ``final_response`` holds the assembled FormFeedback.
    """
    # Input data
    analysis: FormAnalysisResult
    user_level: UserFitnessLevel

    # Issues sorted by severity and level relevance
    prioritized_issues: list[FormIssue] = Field(default_factory=list)

    # Summary sentence(s)
    main_feedback: str = ""

    # Corrective instructions for the top issues
    corrections: list[FormCorrection] = Field(default_factory=list)

    # Final output
    final_response: Optional[FormFeedback] = None
