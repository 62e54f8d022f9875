"""Criterion-specific prompts for LLM evaluators."""

from typing import Dict, Mapping

from ...domain.tournament.value_objects.criterion import Criterion

_RESPONSE_RULES = "Provide a score between 5-10, confidence level (0.7-0.95), and reasoning."

SYSTEM_PROMPTS: Dict[Criterion, str] = {
    Criterion.CREATIVITY: (
        "You are LLM 1, an expert in evaluating creativity and originality in AI models. "
        "Your task is to assess how innovative and unique a model is based on its attributes. "
        "You should focus on the novelty and artistic value of the model's approach. "
        + _RESPONSE_RULES
    ),
    Criterion.TECHNICAL: (
        "You are LLM 2, an expert in evaluating technical accuracy and stability in AI models. "
        "Your task is to assess the structural integrity and reliability of a model based on "
        "its attributes. You should focus on potential stability issues or technical strengths. "
        + _RESPONSE_RULES
    ),
    Criterion.PERFORMANCE: (
        "You are LLM 3, an expert in evaluating performance and functionality in AI models. "
        "Your task is to assess how effectively a model would perform in real-world scenarios. "
        "You should focus on practical utility and functional effectiveness. "
        + _RESPONSE_RULES
    ),
}

CRITERION_FOCUS: Dict[Criterion, str] = {
    Criterion.CREATIVITY: (
        "Please evaluate this model's CREATIVITY and ORIGINALITY.\n"
        "Focus on how innovative and unique this model appears based on the strategy and "
        "endurance attributes."
    ),
    Criterion.TECHNICAL: (
        "Please evaluate this model's TECHNICAL ACCURACY and STABILITY.\n"
        "Focus on how reliable and structurally sound this model appears based on the defense "
        "and agility attributes."
    ),
    Criterion.PERFORMANCE: (
        "Please evaluate this model's PERFORMANCE and FUNCTIONALITY.\n"
        "Focus on how effectively this model would perform in simulated scenarios based on the "
        "offense and agility attributes."
    ),
}

RESPONSE_FORMAT_INSTRUCTIONS = (
    "Please provide your evaluation as a JSON object with the following fields:\n"
    "- score: A numerical score between 5 and 10, where 10 is excellent\n"
    "- confidence: Your confidence in this evaluation as a decimal between 0.7 and 0.95\n"
    "- reasoning: A brief explanation of your evaluation"
)


def system_prompt(criterion: Criterion) -> str:
    return SYSTEM_PROMPTS[Criterion(criterion)]


def user_prompt(
    contender_id: str, contender_name: str, attributes: Mapping[str, float], criterion: Criterion
) -> str:
    """Describe the contender and ask for a JSON evaluation of one criterion."""
    attribute_lines = "\n".join(
        f"- {name.replace('_', ' ')}: {value:g}/100" for name, value in attributes.items()
    )
    return (
        "I need you to evaluate a model with the following attributes:\n\n"
        f"Model ID: {contender_id}\n"
        f"Model Name: {contender_name}\n\n"
        "Attributes (scored out of 100):\n"
        f"{attribute_lines}\n\n"
        f"{CRITERION_FOCUS[Criterion(criterion)]}\n\n"
        f"{RESPONSE_FORMAT_INSTRUCTIONS}"
    )
