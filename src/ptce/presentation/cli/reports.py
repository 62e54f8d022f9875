"""Plain-text reports on contenders and pipeline runs."""

import json
from typing import Any, Dict

import yaml

from ...domain.tournament.entities.contender import Contender
from ...domain.tournament.value_objects.match_result import DetailedMatchResult

# Display names used in summaries
ATTRIBUTE_LABELS = {
    "offense": "attack",
    "defense": "defense",
    "agility": "agility",
    "strategy": "strategy",
    "endurance": "endurance",
}


def attribute_summary(contender: Contender) -> str:
    """One sentence naming the contender's two strongest attributes."""
    strengths = [ATTRIBUTE_LABELS[name] for name in contender.attributes.strongest(2)]
    return f"{contender.name} demonstrates particular strength in {' and '.join(strengths)}."


def process_report(first: Contender, second: Contender, result: DetailedMatchResult) -> str:
    """Human readable walk through one run's scores."""
    initial = result.initial_evaluations
    final_scores = result.consensus.final_scores()

    lines = [
        "=== PTCE Process Log ===",
        "",
        "Comparing Models:",
        f"1. {first.name} (ID: {first.id})",
        f"2. {second.name} (ID: {second.id})",
        "",
        f"Initial LLM Evaluations ({result.evaluation_mode}):",
    ]
    for index, contender in enumerate((first, second), start=1):
        scores = ", ".join(f"{score:g}" for score in initial.scores_for(contender.id))
        lines.append(f"Model {index} ({contender.name}): {scores}")

    lines += ["", "Discussion:", result.discussion.reasoning, "", "Final Consensus Scores:"]
    for index, contender in enumerate((first, second), start=1):
        lines.append(f"Model {index} ({contender.name}): {final_scores[contender.id]:.2f}")

    lines += ["", "Predictive Outcomes:"]
    for index, contender in enumerate((first, second), start=1):
        lines.append(
            f"Model {index} ({contender.name}): {result.predictive_outcomes[contender.id]:.4f}"
        )

    lines += ["", "Blended Scores:"]
    for index, contender in enumerate((first, second), start=1):
        lines.append(f"Model {index} ({contender.name}): {result.scores[contender.id]:.2f}")

    lines += [
        "",
        f"Winner: {result.winner.name} (ID: {result.winner.id})",
        f"Confidence: {result.confidence:.2f}",
    ]
    return "\n".join(lines) + "\n"


def format_output(data: Dict[str, Any], format_type: str) -> str:
    """Serialize a result dictionary as json or yaml."""
    if format_type == "json":
        return json.dumps(data, indent=2, default=str)
    elif format_type == "yaml":
        return yaml.safe_dump(data, default_flow_style=False, indent=2, sort_keys=False)
    else:
        raise ValueError(f"Unsupported format: {format_type}")
