"""
Coaching Agent for form-coach - LangGraph Implementation.

This agent uses LangGraph to run a stateful, fully rule-based workflow that:
1. Prioritizes the identified issues for the user's level
2. Composes the summary message
3. Builds corrective instructions for the top issues
4. Formats the final FormFeedback

Every node is deterministic, so the same result and level always produce
the same feedback.
"""

import logging

from langgraph.graph import END, START, StateGraph

from ..analysis.models import FormAnalysisResult, FormIssueSeverity, UserFitnessLevel
from .config import MAX_CORRECTIONS, SCORE_THRESHOLDS
from .instructions import (
    ENCOURAGEMENT_TEMPLATE,
    SCORE_BAND_MESSAGES,
    get_corrective_instruction,
)
from .prioritizer import prioritize_issues
from .state import FeedbackState, FormCorrection, FormFeedback

logger = logging.getLogger(__name__)


# ============================================================================
# Graph Nodes
# ============================================================================

def prioritize_issues_node(state: FeedbackState) -> dict:
    """
    Node 1: Order issues by severity, then by relevance to the user's level.
    """
    prioritized = prioritize_issues(state.analysis.issues, state.user_level)
    return {"prioritized_issues": prioritized}


def compose_message_node(state: FeedbackState) -> dict:
    """
    Node 2: Build the summary from the first strength, the score band and the
    main issue.
    """
    analysis = state.analysis
    message = ""

    if analysis.strengths:
        first = analysis.strengths[0]
        message += ENCOURAGEMENT_TEMPLATE.format(strength=first.description.lower())

    if analysis.overall_score >= SCORE_THRESHOLDS["excellent"]:
        message += SCORE_BAND_MESSAGES["excellent"]
    elif analysis.overall_score >= SCORE_THRESHOLDS["good"]:
        message += SCORE_BAND_MESSAGES["good"]
    else:
        message += SCORE_BAND_MESSAGES["needs_work"]

    if state.prioritized_issues:
        message += state.prioritized_issues[0].description + ". "

    return {"main_feedback": message.strip()}


def build_corrections_node(state: FeedbackState) -> dict:
    """
    Node 3: One corrective instruction for each of the top issues.
    """
    corrections = [
        FormCorrection(
            issue=issue.type,
            instruction=get_corrective_instruction(issue.type, state.user_level),
            priority=issue.severity,
        )
        for issue in state.prioritized_issues[:MAX_CORRECTIONS]
    ]
    return {"corrections": corrections}


def format_response_node(state: FeedbackState) -> dict:
    """
    Node 4: Assemble the final FormFeedback.
    """
    analysis = state.analysis
    main_issue = state.prioritized_issues[0] if state.prioritized_issues else None

    response = FormFeedback(
        overall_score=analysis.overall_score,
        main_feedback=state.main_feedback,
        corrections=state.corrections,
        strengths=analysis.strengths,
        exercise_type=analysis.exercise_type,
        user_level=state.user_level,
        priority=main_issue.severity if main_issue else FormIssueSeverity.LOW,
    )
    return {"final_response": response}


# ============================================================================
# Build the Graph
# ============================================================================

def build_coaching_graph():
    """Build and compile the feedback graph."""
    graph = StateGraph(FeedbackState)

    graph.add_node("prioritize_issues", prioritize_issues_node)
    graph.add_node("compose_message", compose_message_node)
    graph.add_node("build_corrections", build_corrections_node)
    graph.add_node("format_response", format_response_node)

    # START → prioritize_issues → compose_message → build_corrections → format_response → END
    graph.add_edge(START, "prioritize_issues")
    graph.add_edge("prioritize_issues", "compose_message")
    graph.add_edge("compose_message", "build_corrections")
    graph.add_edge("build_corrections", "format_response")
    graph.add_edge("format_response", END)

    return graph.compile()


# ============================================================================
# Main Agent Class
# ============================================================================

class CoachingAgent:
    """
    LangGraph-based coaching agent turning an analysis result into feedback.

    Example usage:
        agent = CoachingAgent()
        result = evaluate_form(poses, ExerciseType.SQUAT)
        feedback = agent.generate_feedback(result, UserFitnessLevel.BEGINNER)
        print(feedback.main_feedback)
    """

    def __init__(self):
        """Initialize the coaching agent with compiled graph."""
        self.graph = build_coaching_graph()

    def generate_feedback(
        self,
        analysis: FormAnalysisResult,
        user_level: UserFitnessLevel,
    ) -> FormFeedback:
        """
        Generate feedback for one analysis result.

        Args:
            analysis: Result of ``evaluate_form``.
            user_level: Experience level the feedback is tailored to.

        Returns:
            FormFeedback with summary, up to three corrections, strengths
            and the priority of the main issue.
        """
        initial_state = FeedbackState(analysis=analysis, user_level=user_level)
        result = self.graph.invoke(initial_state)

        feedback = result["final_response"]
        logger.debug(
            "Feedback for %s (%s): priority=%s corrections=%d",
            analysis.exercise_type.value, user_level.value,
            feedback.priority.name, len(feedback.corrections),
        )
        return feedback


_default_agent = None


def generate_feedback(analysis: FormAnalysisResult, user_level: UserFitnessLevel) -> FormFeedback:
    """Generate feedback with a shared, lazily built CoachingAgent."""
    global _default_agent
    if _default_agent is None:
        _default_agent = CoachingAgent()
    return _default_agent.generate_feedback(analysis, user_level)
