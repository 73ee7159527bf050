"""Tests for the coaching agent.

Covers:
  - Issue prioritization (severity, level relevance, stability)
  - Corrective instructions per level
  - Feedback message composition and corrections
  - Graph wiring and the module-level shortcut
"""

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from form_coach.agents import (
    CoachingAgent,
    FormFeedback,
    generate_feedback,
    get_corrective_instruction,
    prioritize_issues,
)
from form_coach.agents.coaching_agent import build_coaching_graph
from form_coach.agents.instructions import GENERAL_INSTRUCTIONS, LEVEL_SPECIFIC_INSTRUCTIONS
from form_coach.agents.state import FeedbackState
from form_coach.analysis import (
    ExerciseType,
    FormAnalysisResult,
    FormIssue,
    FormIssueSeverity,
    FormIssueType,
    FormStrength,
    FormStrengthType,
    UserFitnessLevel,
)


# ============================================================================
# Fixtures
# ============================================================================

def _make_issue(issue_type: FormIssueType, severity: FormIssueSeverity,
                description: str = None) -> FormIssue:
    return FormIssue(
        type=issue_type,
        severity=severity,
        description=description or f"{issue_type.value} detected",
    )


def _make_result(score: float, issues=(), strengths=(),
                 exercise: ExerciseType = ExerciseType.SQUAT) -> FormAnalysisResult:
    return FormAnalysisResult(
        exercise_type=exercise,
        overall_score=score,
        issues=list(issues),
        strengths=list(strengths),
        detailed_scores={},
        rep_count=0,
    )


@pytest.fixture(scope="module")
def agent():
    return CoachingAgent()


# ============================================================================
# Test: Prioritization
# ============================================================================

class TestPrioritizeIssues:

    def test_severity_first(self):
        low = _make_issue(FormIssueType.INCONSISTENT_TEMPO, FormIssueSeverity.LOW)
        high = _make_issue(FormIssueType.INEFFICIENT_BAR_PATH, FormIssueSeverity.HIGH)
        medium = _make_issue(FormIssueType.KNEE_VALGUS, FormIssueSeverity.MEDIUM)
        ordered = prioritize_issues([low, high, medium], UserFitnessLevel.BEGINNER)
        assert ordered == [high, medium, low]

    def test_beginner_sees_safety_first(self):
        depth = _make_issue(FormIssueType.INSUFFICIENT_DEPTH, FormIssueSeverity.MEDIUM)
        knees = _make_issue(FormIssueType.KNEE_VALGUS, FormIssueSeverity.MEDIUM)
        ordered = prioritize_issues([depth, knees], UserFitnessLevel.BEGINNER)
        assert ordered == [knees, depth]

    @pytest.mark.parametrize("level", [UserFitnessLevel.INTERMEDIATE, UserFitnessLevel.ADVANCED])
    def test_experienced_users_see_efficiency_first(self, level):
        knees = _make_issue(FormIssueType.KNEE_VALGUS, FormIssueSeverity.MEDIUM)
        depth = _make_issue(FormIssueType.INSUFFICIENT_DEPTH, FormIssueSeverity.MEDIUM)
        ordered = prioritize_issues([knees, depth], level)
        assert ordered == [depth, knees]

    def test_relevance_never_beats_severity(self):
        spine = _make_issue(FormIssueType.SPINAL_ROUNDING, FormIssueSeverity.HIGH)
        tempo = _make_issue(FormIssueType.INCONSISTENT_TEMPO, FormIssueSeverity.LOW)
        ordered = prioritize_issues([tempo, spine], UserFitnessLevel.ADVANCED)
        assert ordered == [spine, tempo]

    def test_ties_keep_input_order(self):
        first = _make_issue(FormIssueType.KNEE_VALGUS, FormIssueSeverity.HIGH, "first")
        second = _make_issue(FormIssueType.SPINAL_ROUNDING, FormIssueSeverity.HIGH, "second")
        assert prioritize_issues([first, second], UserFitnessLevel.BEGINNER) == [first, second]
        assert prioritize_issues([second, first], UserFitnessLevel.BEGINNER) == [second, first]

    def test_input_not_modified(self):
        issues = [
            _make_issue(FormIssueType.INCONSISTENT_TEMPO, FormIssueSeverity.LOW),
            _make_issue(FormIssueType.SPINAL_ROUNDING, FormIssueSeverity.HIGH),
        ]
        snapshot = list(issues)
        prioritize_issues(issues, UserFitnessLevel.BEGINNER)
        assert issues == snapshot


# ============================================================================
# Test: Corrective Instructions
# ============================================================================

class TestCorrectiveInstructions:

    @pytest.mark.parametrize("issue_type", list(LEVEL_SPECIFIC_INSTRUCTIONS))
    def test_level_specific_issues_differ_by_level(self, issue_type):
        texts = {get_corrective_instruction(issue_type, level) for level in UserFitnessLevel}
        assert len(texts) == 3

    @pytest.mark.parametrize("issue_type", list(GENERAL_INSTRUCTIONS))
    def test_general_issues_same_for_all_levels(self, issue_type):
        texts = {get_corrective_instruction(issue_type, level) for level in UserFitnessLevel}
        assert texts == {GENERAL_INSTRUCTIONS[issue_type]}

    def test_every_issue_type_has_text(self):
        for issue_type in FormIssueType:
            for level in UserFitnessLevel:
                assert get_corrective_instruction(issue_type, level)

    def test_beginner_knee_cue(self):
        text = get_corrective_instruction(FormIssueType.KNEE_VALGUS, UserFitnessLevel.BEGINNER)
        assert text == "Focus on pushing your knees out in the direction of your toes."


# ============================================================================
# Test: Feedback Generation
# ============================================================================

class TestFeedbackMessage:

    def test_excellent_with_strength_and_no_issues(self, agent):
        result = _make_result(0.9, strengths=[FormStrength(
            type=FormStrengthType.DEPTH, description="Good squat depth achieved",
        )])
        feedback = agent.generate_feedback(result, UserFitnessLevel.BEGINNER)

        assert feedback.main_feedback == (
            "Great job with your good squat depth achieved! "
            "Your form looks excellent overall."
        )
        assert feedback.corrections == []
        assert feedback.priority is FormIssueSeverity.LOW

    @pytest.mark.parametrize("score, band", [
        (0.8, "Your form looks excellent overall."),
        (0.7, "Good form with room for improvement."),
        (0.6, "Good form with room for improvement."),
        (0.59, "Let's work on improving your form for better results and safety."),
    ])
    def test_score_bands(self, agent, score, band):
        feedback = agent.generate_feedback(_make_result(score), UserFitnessLevel.BEGINNER)
        assert feedback.main_feedback == band

    def test_main_issue_appended(self, agent):
        spine = _make_issue(
            FormIssueType.SPINAL_ROUNDING, FormIssueSeverity.HIGH,
            "Back rounding detected during the movement",
        )
        feedback = agent.generate_feedback(_make_result(0.4, issues=[spine]), UserFitnessLevel.BEGINNER)
        assert feedback.main_feedback == (
            "Let's work on improving your form for better results and safety. "
            "Back rounding detected during the movement."
        )

    def test_main_issue_follows_prioritization(self, agent):
        depth = _make_issue(FormIssueType.INSUFFICIENT_DEPTH, FormIssueSeverity.MEDIUM, "Depth")
        knees = _make_issue(FormIssueType.KNEE_VALGUS, FormIssueSeverity.MEDIUM, "Knees")
        result = _make_result(0.65, issues=[depth, knees])

        beginner = agent.generate_feedback(result, UserFitnessLevel.BEGINNER)
        advanced = agent.generate_feedback(result, UserFitnessLevel.ADVANCED)
        assert beginner.main_feedback.endswith("Knees.")
        assert advanced.main_feedback.endswith("Depth.")


class TestFeedbackCorrections:

    def test_at_most_three_corrections_in_priority_order(self, agent):
        issues = [
            _make_issue(FormIssueType.INCONSISTENT_TEMPO, FormIssueSeverity.LOW),
            _make_issue(FormIssueType.INSUFFICIENT_DEPTH, FormIssueSeverity.MEDIUM),
            _make_issue(FormIssueType.SPINAL_ROUNDING, FormIssueSeverity.HIGH),
            _make_issue(FormIssueType.KNEE_VALGUS, FormIssueSeverity.MEDIUM),
        ]
        feedback = agent.generate_feedback(_make_result(0.3, issues=issues), UserFitnessLevel.BEGINNER)

        assert [c.issue for c in feedback.corrections] == [
            FormIssueType.SPINAL_ROUNDING,
            FormIssueType.KNEE_VALGUS,
            FormIssueType.INSUFFICIENT_DEPTH,
        ]
        assert [c.priority for c in feedback.corrections] == [
            FormIssueSeverity.HIGH,
            FormIssueSeverity.MEDIUM,
            FormIssueSeverity.MEDIUM,
        ]
        assert feedback.priority is FormIssueSeverity.HIGH

    @pytest.mark.parametrize("level", list(UserFitnessLevel))
    def test_instructions_match_level(self, agent, level):
        knees = _make_issue(FormIssueType.KNEE_VALGUS, FormIssueSeverity.HIGH)
        feedback = agent.generate_feedback(_make_result(0.5, issues=[knees]), level)
        assert feedback.corrections[0].instruction == get_corrective_instruction(
            FormIssueType.KNEE_VALGUS, level
        )
        assert feedback.user_level is level

    def test_passthrough_fields(self, agent):
        strengths = [
            FormStrength(type=FormStrengthType.BAR_PATH, description="Bar close"),
            FormStrength(type=FormStrengthType.SPINAL_ALIGNMENT, description="Neutral spine"),
        ]
        result = _make_result(0.93, strengths=strengths, exercise=ExerciseType.DEADLIFT)
        feedback = agent.generate_feedback(result, UserFitnessLevel.INTERMEDIATE)

        assert isinstance(feedback, FormFeedback)
        assert feedback.exercise_type is ExerciseType.DEADLIFT
        assert feedback.overall_score == 0.93
        assert feedback.strengths == strengths
        # Only the first strength is mentioned
        assert feedback.main_feedback.startswith("Great job with your bar close! ")


# ============================================================================
# Test: Graph and Shortcut
# ============================================================================

class TestCoachingGraph:

    def test_graph_produces_final_response(self):
        graph = build_coaching_graph()
        state = FeedbackState(analysis=_make_result(0.75), user_level=UserFitnessLevel.BEGINNER)
        result = graph.invoke(state)
        assert isinstance(result["final_response"], FormFeedback)
        assert result["main_feedback"] == "Good form with room for improvement."

    def test_feedback_is_deterministic(self, agent):
        issues = [_make_issue(FormIssueType.IMPROPER_HIP_HINGE, FormIssueSeverity.HIGH)]
        result = _make_result(0.55, issues=issues, exercise=ExerciseType.DEADLIFT)
        first = agent.generate_feedback(result, UserFitnessLevel.ADVANCED)
        second = generate_feedback(result, UserFitnessLevel.ADVANCED)
        assert first == second


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
