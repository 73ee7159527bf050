"""
Coaching text for the feedback generator.

Summary sentences and corrective instructions. Knee valgus and spinal
rounding get level-specific cues; the other issues share one instruction
across all levels.
"""

from ..analysis.models import FormIssueType, UserFitnessLevel


ENCOURAGEMENT_TEMPLATE = "Great job with your {strength}! "

SCORE_BAND_MESSAGES = {
    "excellent": "Your form looks excellent overall. ",
    "good": "Good form with room for improvement. ",
    "needs_work": "Let's work on improving your form for better results and safety. ",
}

LEVEL_SPECIFIC_INSTRUCTIONS: dict[FormIssueType, dict[UserFitnessLevel, str]] = {
    FormIssueType.KNEE_VALGUS: {
        UserFitnessLevel.BEGINNER:
            "Focus on pushing your knees out in the direction of your toes.",
        UserFitnessLevel.INTERMEDIATE:
            "Engage your glutes and think about spreading the floor with your feet.",
        UserFitnessLevel.ADVANCED:
            "Consider hip mobility work and ensure proper glute activation before lifting.",
    },
    FormIssueType.SPINAL_ROUNDING: {
        UserFitnessLevel.BEGINNER:
            "Keep your chest up and shoulders back throughout the movement.",
        UserFitnessLevel.INTERMEDIATE:
            "Engage your core and maintain a neutral spine position.",
        UserFitnessLevel.ADVANCED:
            "Focus on thoracic extension and lat engagement to maintain spinal integrity.",
    },
}

GENERAL_INSTRUCTIONS: dict[FormIssueType, str] = {
    FormIssueType.INSUFFICIENT_DEPTH:
        "Try to lower until your hip crease is just below your knee level.",
    FormIssueType.INEFFICIENT_BAR_PATH:
        "Keep the bar close to your body throughout the entire movement.",
    FormIssueType.IMPROPER_HIP_HINGE:
        "Initiate the movement by pushing your hips back, not bending your knees first.",
    FormIssueType.INCONSISTENT_TEMPO:
        "Maintain a controlled, steady pace throughout each repetition.",
}


def get_corrective_instruction(issue_type: FormIssueType, user_level: UserFitnessLevel) -> str:
    """Instruction text for an issue, tailored to the user's level where available."""
    by_level = LEVEL_SPECIFIC_INSTRUCTIONS.get(issue_type)
    if by_level is not None:
        return by_level[user_level]
    return GENERAL_INSTRUCTIONS[issue_type]
