"""Evidence-Based Subjective Logic (EBSL) operators for aumai-reputation.

Opinions are ``(belief, disbelief, uncertainty, base_rate)`` tuples backed by
positive/negative evidence counts ``(p, n)`` through the mapping

    (b, d, u) = (p, n, c) / (p + n + c)

where ``c`` is a soft threshold on the amount of evidence (default 2).

Operators:

- cumulative fusion (⊕) adds the evidence of two independent sources;
- scalar multiplication scales the evidence behind an opinion;
- discounting propagates an opinion through an intermediary.  The EBSL (⊙)
  and generic (⊡) operators are both ``g(x) · y`` and differ only in the
  weight ``g``; the legacy (⊗) operator is the traditional subjective-logic
  discount, which is not distributive over fusion and is never the default.

References: Škorić, de Hoogh, Zannone, "Flow-based reputation with
uncertainty: evidence-based subjective logic" (2016); Jøsang, "Subjective
Logic" (2016).
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterable, Sequence

from aumai_reputation.models import DiscountMethod, Evidence, Opinion

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

#: Soft threshold on the amount of evidence (Theorem 1, Škorić et al.).
EVIDENCE_CONSTANT_C: float = 2.0

#: Default EBSL discount threshold; must exceed any positive evidence value.
DEFAULT_THETA: float = 100.0

#: Evidence assigned to one trust level when converting it to an opinion.
DEFAULT_EVIDENCE_AMOUNT: float = 10.0

_TRUST_LEVEL_MIN: float = 0.0
_TRUST_LEVEL_MAX: float = 100.0

# ---------------------------------------------------------------------------
# Evidence <-> opinion
# ---------------------------------------------------------------------------


def evidence_to_opinion(p: float, n: float, c: float = EVIDENCE_CONSTANT_C) -> Opinion:
    """Map evidence ``(p, n)`` to an opinion with a neutral base rate.

    ``(b, d, u) = (p, n, c) / (p + n + c)``, so the components sum to 1 by
    construction.
    """
    total = p + n + c
    return _opinion(p / total, n / total, c / total, 0.5)


def opinion_to_evidence(opinion: Opinion, c: float = EVIDENCE_CONSTANT_C) -> Evidence:
    """Inverse of :func:`evidence_to_opinion`: ``p = c·b/u``, ``n = c·d/u``.

    A dogmatic opinion (``u == 0``) has no finite evidence and maps to
    :meth:`Evidence.infinite`.
    """
    if opinion.uncertainty == 0.0:
        return Evidence.infinite()
    return Evidence(
        p=c * opinion.belief / opinion.uncertainty,
        n=c * opinion.disbelief / opinion.uncertainty,
    )


def trust_level_to_opinion(
    trust_level: float, evidence_amount: float = DEFAULT_EVIDENCE_AMOUNT
) -> Opinion:
    """Convert a 0-100 trust level into an opinion.

    The level is clamped to [0, 100] and split into
    ``p = t · evidence_amount`` and ``n = (1 - t) · evidence_amount``.
    """
    clamped = _clamp(float(trust_level), _TRUST_LEVEL_MIN, _TRUST_LEVEL_MAX)
    if clamped != trust_level:
        logger.debug("Clamped trust level %s to %s", trust_level, clamped)
    t = clamped / _TRUST_LEVEL_MAX
    return evidence_to_opinion(t * evidence_amount, (1.0 - t) * evidence_amount)


# ---------------------------------------------------------------------------
# Fusion and scalar multiplication
# ---------------------------------------------------------------------------


def fuse_opinions(first: Opinion, second: Opinion) -> Opinion:
    """Cumulative fusion (⊕) of two independent opinions.

    Equivalent to adding the evidence behind both opinions.  When both inputs
    are dogmatic the denominator vanishes; the neutral opinion is returned
    instead of dividing by zero.
    """
    b1, d1, u1, a1 = _components(first)
    b2, d2, u2, a2 = _components(second)

    denominator = u1 + u2 - u1 * u2
    if denominator == 0.0:
        logger.debug("Fusion of two dogmatic opinions; returning neutral opinion")
        return Opinion.neutral()

    return _opinion(
        (b1 * u2 + b2 * u1) / denominator,
        (d1 * u2 + d2 * u1) / denominator,
        (u1 * u2) / denominator,
        (a1 * u2 + a2 * u1) / (u1 + u2),
    )


def fuse_all(opinions: Iterable[Opinion], initial: Opinion | None = None) -> Opinion:
    """Left-fold :func:`fuse_opinions` over *opinions*.

    Starts from *initial* when given, otherwise from the first opinion.  An
    empty input yields *initial* or the neutral opinion.
    """
    result = initial
    for opinion in opinions:
        result = opinion if result is None else fuse_opinions(result, opinion)
    return result if result is not None else Opinion.neutral()


def scalar_multiply(alpha: float, opinion: Opinion) -> Opinion:
    """Scale the evidence behind *opinion* by *alpha* (Definition 11).

    ``α · x = (αb, αd, u) / (α(b + d) + u)``.  ``0 · x`` is full uncertainty
    with the base rate kept; ``∞ · x`` is the dogmatic limit.

    Raises:
        ValueError: If *alpha* is negative or NaN.
    """
    if math.isnan(alpha) or alpha < 0:
        raise ValueError(f"Scalar multiplier must be non-negative, got {alpha!r}")

    belief, disbelief, uncertainty, base_rate = _components(opinion)

    if alpha == 0:
        return Opinion.neutral(base_rate)

    if math.isinf(alpha):
        committed = belief + disbelief
        if committed == 0.0:
            return opinion
        return _opinion(belief / committed, disbelief / committed, 0.0, base_rate)

    denominator = alpha * (belief + disbelief) + uncertainty
    return _opinion(
        alpha * belief / denominator,
        alpha * disbelief / denominator,
        uncertainty / denominator,
        base_rate,
    )


# ---------------------------------------------------------------------------
# Discounting
# ---------------------------------------------------------------------------


def discount_weight(
    discounting: Opinion,
    method: DiscountMethod = DiscountMethod.generic,
    theta: float = DEFAULT_THETA,
) -> float:
    """Return the scalar ``g(x)`` used by the scalar-discount operators.

    - ``ebsl``: ``g(x) = p(x) / theta`` (positive evidence over threshold)
    - ``generic``: ``g(x) = belief(x)`` clamped to [0, 1]

    Raises:
        ValueError: For ``legacy``, which is not a scalar discount.
    """
    if method is DiscountMethod.ebsl:
        return opinion_to_evidence(discounting).p / theta
    if method is DiscountMethod.generic:
        return _clamp(discounting.belief)
    raise ValueError(f"{method.value!r} discounting has no scalar weight")


def ebsl_discount(x: Opinion, y: Opinion, theta: float = DEFAULT_THETA) -> Opinion:
    """EBSL discount (⊙): ``x ⊙ y = (p(x) / theta) · y``.

    *theta* must exceed the largest positive evidence value in the system;
    this is the caller's responsibility and is not checked here.
    """
    return scalar_multiply(discount_weight(x, DiscountMethod.ebsl, theta), y)


def generic_discount(
    x: Opinion,
    y: Opinion,
    weight: Callable[[Opinion], float] | None = None,
) -> Opinion:
    """Generic discount (⊡): ``x ⊡ y = g(x) · y``.

    *weight* computes ``g``; it defaults to the belief of *x*.  The weight is
    clamped to [0, 1] either way, so e.g. ``weight=Opinion.expectation`` is a
    valid choice.
    """
    if weight is None:
        g = discount_weight(x, DiscountMethod.generic)
    else:
        g = _clamp(weight(x))
    return scalar_multiply(g, y)


def legacy_discount(x: Opinion, y: Opinion) -> Opinion:
    """Traditional subjective-logic discount (⊗), for compatibility only.

    Does not distribute over fusion, so it can double-count evidence in
    graphs with shared sub-paths.
    """
    xb, xd, xu, _ = _components(x)
    yb, yd, yu, ya = _components(y)
    return _opinion(xb * yb, xb * yd, xd + xu + xb * yu, ya)


def discount(
    x: Opinion,
    y: Opinion,
    method: DiscountMethod = DiscountMethod.generic,
    theta: float = DEFAULT_THETA,
) -> Opinion:
    """Discount *y* through *x* with the operator selected by *method*."""
    if method is DiscountMethod.legacy:
        return legacy_discount(x, y)
    return scalar_multiply(discount_weight(x, method, theta), y)


def transitive_opinion(
    hop_opinions: Sequence[Opinion],
    method: DiscountMethod = DiscountMethod.generic,
    theta: float = DEFAULT_THETA,
) -> Opinion:
    """Combine the opinions along a trust path into one transitive opinion.

    For a path A -> B -> C the hops are ``[A's opinion of B, B's opinion of
    C]`` and the result is ``A ⊙ (B ⊙ C)``: the last hop is discounted by
    each earlier hop in turn, so hops closer to the observer discount the
    accumulated result last.
    """
    if not hop_opinions:
        return Opinion.neutral()

    result = hop_opinions[-1]
    for discounting in reversed(hop_opinions[:-1]):
        result = discount(discounting, result, method, theta)
    return result


# ---------------------------------------------------------------------------
# Expectation
# ---------------------------------------------------------------------------


def opinion_to_expectation(opinion: Opinion) -> float:
    """Probability expectation ``belief + uncertainty · base_rate`` in [0, 1]."""
    return _clamp(opinion.expectation())


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    """Clamp *value* to [*low*, *high*]."""
    return max(low, min(high, value))


def _components(opinion: Opinion) -> tuple[float, float, float, float]:
    return opinion.belief, opinion.disbelief, opinion.uncertainty, opinion.base_rate


def _opinion(belief: float, disbelief: float, uncertainty: float, base_rate: float) -> Opinion:
    """Build an opinion, absorbing floating-point drift just outside [0, 1]."""
    return Opinion(
        belief=_clamp(belief),
        disbelief=_clamp(disbelief),
        uncertainty=_clamp(uncertainty),
        base_rate=_clamp(base_rate),
    )


__all__ = [
    "DEFAULT_EVIDENCE_AMOUNT",
    "DEFAULT_THETA",
    "EVIDENCE_CONSTANT_C",
    "discount",
    "discount_weight",
    "ebsl_discount",
    "evidence_to_opinion",
    "fuse_all",
    "fuse_opinions",
    "generic_discount",
    "legacy_discount",
    "opinion_to_evidence",
    "opinion_to_expectation",
    "scalar_multiply",
    "transitive_opinion",
    "trust_level_to_opinion",
]
