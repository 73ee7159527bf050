"""
Weighted aggregation of per-criterion scores.
"""

from typing import Mapping


def aggregate_scores(scores: Mapping[str, float], weights: Mapping[str, float]) -> float:
    """Weighted mean of the criteria present in ``scores``.

    Weights whose criterion has no score are left out of the denominator,
    so the result is renormalized over the criteria that were actually
    measured.

    Args:
        scores: Criterion name -> score (0-1).
        weights: Criterion name -> weight. Iteration order fixes summation order.

    Returns:
        Weighted mean, or 0.0 when no weighted criterion has a score.
    """
    weighted_sum = 0.0
    total_weight = 0.0

    for criterion, weight in weights.items():
        score = scores.get(criterion)
        if score is None:
            continue
        weighted_sum += score * weight
        total_weight += weight

    return weighted_sum / total_weight if total_weight > 0 else 0.0
