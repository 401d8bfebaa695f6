"""Display-ready summaries of reputation results."""

from __future__ import annotations

import math

from aumai_reputation.models import ReputationResult, ReputationSummary, TrustCategory


def categorize_score(score: float) -> TrustCategory:
    """Return the :class:`TrustCategory` for a 0-100 *score*."""
    return TrustCategory.from_score(score)


def summarize_reputation(result: ReputationResult) -> ReputationSummary:
    """Map *result* to rounded percentages and a category.

    The category is taken from the unrounded score, so 79.96 is "Trusted"
    even though it displays as 80.0.
    """
    opinion = result.opinion
    return ReputationSummary(
        score=_round_half_up(result.score, 1),
        category=categorize_score(result.score),
        confidence=_percent(1.0 - opinion.uncertainty),
        belief=_percent(opinion.belief),
        disbelief=_percent(opinion.disbelief),
        uncertainty=_percent(opinion.uncertainty),
        direct_count=result.direct_count,
        transitive_count=result.transitive_count,
        total_evidence=result.direct_count + result.transitive_count,
    )


def _percent(fraction: float) -> int:
    return int(_round_half_up(fraction * 100.0))


def _round_half_up(value: float, digits: int = 0) -> float:
    """Round halves away from zero for non-negative values (not banker's rounding)."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


__all__ = ["categorize_score", "summarize_reputation"]
