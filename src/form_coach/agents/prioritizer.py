"""
Issue prioritization.

Issues are ordered by severity, most severe first. Among issues of equal
severity, beginners see safety issues first and intermediate/advanced users
see efficiency issues first. The sort is stable, so issues that tie on both
keys keep their incoming order.
"""

from typing import Iterable

from ..analysis.models import FormIssue, FormIssueType, UserFitnessLevel

SAFETY_ISSUES: frozenset[FormIssueType] = frozenset({
    FormIssueType.SPINAL_ROUNDING,
    FormIssueType.KNEE_VALGUS,
    FormIssueType.IMPROPER_HIP_HINGE,
})

EFFICIENCY_ISSUES: frozenset[FormIssueType] = frozenset({
    FormIssueType.INEFFICIENT_BAR_PATH,
    FormIssueType.INCONSISTENT_TEMPO,
    FormIssueType.INSUFFICIENT_DEPTH,
})


def relevant_issues(user_level: UserFitnessLevel) -> frozenset[FormIssueType]:
    if user_level is UserFitnessLevel.BEGINNER:
        return SAFETY_ISSUES
    return EFFICIENCY_ISSUES


def prioritize_issues(issues: Iterable[FormIssue], user_level: UserFitnessLevel) -> list[FormIssue]:
    """Return ``issues`` ordered by severity, then by relevance to ``user_level``."""
    relevant = relevant_issues(user_level)
    return sorted(
        issues,
        key=lambda issue: (-issue.severity, issue.type not in relevant),
    )
