"""Pydantic models for aumai-reputation."""

from __future__ import annotations

import enum
import math
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

# Tolerance for the belief + disbelief + uncertainty = 1 invariant.
OPINION_SUM_TOLERANCE: float = 1e-9

# Shared config for models that cross the attestation-store boundary, where
# field names arrive in camelCase (trustLevel, isActive, maxPathDepth...).
_WIRE_CONFIG: dict[str, Any] = {
    "frozen": True,
    "alias_generator": to_camel,
    "populate_by_name": True,
}


class DiscountMethod(str, enum.Enum):
    """Discount operator used to propagate trust along a path.

    ``ebsl`` and ``generic`` share the scalar-multiplication discount and
    differ only in how the weight is extracted from the discounting opinion.
    ``legacy`` is the traditional subjective-logic operator, kept for
    compatibility only.
    """

    ebsl = "ebsl"
    generic = "generic"
    legacy = "legacy"

    @classmethod
    def _missing_(cls, value: object) -> DiscountMethod | None:
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered == "traditional":
                return cls.legacy
            for member in cls:
                if member.value == lowered:
                    return member
        return None


class TrustCategory(str, enum.Enum):
    """Display category derived from a reputation score."""

    highly_trusted = "Highly Trusted"
    trusted = "Trusted"
    neutral = "Neutral"
    low_trust = "Low Trust"
    untrusted = "Untrusted"

    @classmethod
    def from_score(cls, score: float) -> TrustCategory:
        """Return the category of a 0-100 score.

        Highly Trusted (>=80), Trusted (>=60), Neutral (>=40),
        Low Trust (>=20), Untrusted (<20).
        """
        if score >= 80:
            return cls.highly_trusted
        if score >= 60:
            return cls.trusted
        if score >= 40:
            return cls.neutral
        if score >= 20:
            return cls.low_trust
        return cls.untrusted


# ---------------------------------------------------------------------------
# Opinion algebra values
# ---------------------------------------------------------------------------


class Opinion(BaseModel):
    """A subjective-logic opinion ``(belief, disbelief, uncertainty, base_rate)``.

    All components lie in [0, 1] and belief + disbelief + uncertainty must
    equal 1 within :data:`OPINION_SUM_TOLERANCE`.  ``base_rate`` is the prior
    used when collapsing the opinion to a scalar expectation.
    """

    model_config = {"frozen": True, "populate_by_name": True}

    belief: float = Field(..., ge=0.0, le=1.0)
    disbelief: float = Field(..., ge=0.0, le=1.0)
    uncertainty: float = Field(..., ge=0.0, le=1.0)
    base_rate: float = Field(default=0.5, ge=0.0, le=1.0, alias="baseRate")

    @model_validator(mode="after")
    def components_sum_to_one(self) -> Opinion:
        """Reject opinions whose belief, disbelief and uncertainty don't sum to 1."""
        total = self.belief + self.disbelief + self.uncertainty
        if abs(total - 1.0) > OPINION_SUM_TOLERANCE:
            raise ValueError(
                f"Opinion components must sum to 1.0, but sum is {total:.12f}."
            )
        return self

    @classmethod
    def neutral(cls, base_rate: float = 0.5) -> Opinion:
        """Return the fully uncertain opinion ``(0, 0, 1, base_rate)``."""
        return cls(belief=0.0, disbelief=0.0, uncertainty=1.0, base_rate=base_rate)

    @property
    def is_dogmatic(self) -> bool:
        """True when the opinion carries no uncertainty."""
        return self.uncertainty == 0.0

    def expectation(self) -> float:
        """Return ``belief + uncertainty * base_rate``."""
        return self.belief + self.uncertainty * self.base_rate

    def __repr__(self) -> str:
        return (
            f"Opinion(b={self.belief:.4f}, d={self.disbelief:.4f}, "
            f"u={self.uncertainty:.4f}, a={self.base_rate:.4f})"
        )


class Evidence(BaseModel):
    """Positive / negative observation counts underlying an opinion.

    Dogmatic opinions have no finite evidence representation; they map to the
    ``(inf, inf)`` sentinel returned by :meth:`infinite`.
    """

    model_config = {"frozen": True}

    p: float = Field(..., ge=0.0, description="Positive evidence")
    n: float = Field(..., ge=0.0, description="Negative evidence")

    @classmethod
    def infinite(cls) -> Evidence:
        """Return the sentinel used for fully dogmatic opinions."""
        return cls(p=math.inf, n=math.inf)

    @property
    def is_finite(self) -> bool:
        return math.isfinite(self.p) and math.isfinite(self.n)

    @property
    def total(self) -> float:
        return self.p + self.n


# ---------------------------------------------------------------------------
# Attestations and the trust graph
# ---------------------------------------------------------------------------


class Attestation(BaseModel):
    """A trust statement by ``attester`` about ``subject``.

    Records come from the external attestation store and are read-only here.
    Revocation is a soft delete: the record stays, with ``is_active`` False.
    ``trust_level`` is not range-checked; values outside [0, 100] are clamped
    by the algebra where they are consumed.
    """

    model_config = _WIRE_CONFIG

    attester: str
    subject: str
    trust_level: int = Field(..., description="Trust level, nominally 0-100")
    comment: str = Field(default="")
    signature: str | None = Field(
        default=None, description="Opaque signature, verified externally"
    )
    timestamp: int = Field(default=0, ge=0, description="Unix timestamp (seconds)")
    is_active: bool = Field(default=True)


class AttestationGraph(BaseModel):
    """Immutable adjacency view: lower-cased attester -> attestations given.

    Built fresh from a snapshot on every computation; see
    :func:`aumai_reputation.graph.build_attestation_graph`.
    """

    model_config = {"frozen": True}

    edges: dict[str, tuple[Attestation, ...]] = Field(default_factory=dict)

    @field_validator("edges")
    @classmethod
    def keys_are_lower_case(
        cls, edges: dict[str, tuple[Attestation, ...]]
    ) -> dict[str, tuple[Attestation, ...]]:
        return {key.lower(): value for key, value in edges.items()}

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Iterable[Any]]) -> AttestationGraph:
        """Wrap a plain ``attester -> [attestation, ...]`` mapping.

        Entries may be :class:`Attestation` instances or dicts; a dict without
        an ``attester`` field takes the mapping key.
        """
        edges: dict[str, tuple[Attestation, ...]] = {}
        for attester, records in mapping.items():
            converted: list[Attestation] = []
            for record in records:
                if isinstance(record, Attestation):
                    converted.append(record)
                else:
                    converted.append(
                        Attestation.model_validate({"attester": attester, **record})
                    )
            edges[attester.lower()] = tuple(converted)
        return cls(edges=edges)

    @property
    def attesters(self) -> list[str]:
        return list(self.edges)

    def attestations_from(self, attester: str) -> tuple[Attestation, ...]:
        """Return the attestations given by *attester* (case-insensitive)."""
        return self.edges.get(attester.lower(), ())

    def find_active(self, attester: str, subject: str) -> Attestation | None:
        """Return the first active attestation from *attester* to *subject*."""
        wanted = subject.lower()
        for attestation in self.attestations_from(attester):
            if attestation.subject.lower() == wanted and attestation.is_active:
                return attestation
        return None

    def __contains__(self, attester: object) -> bool:
        return isinstance(attester, str) and attester.lower() in self.edges

    def __len__(self) -> int:
        return len(self.edges)


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class ReputationOptions(BaseModel):
    """Tuning knobs for :class:`~aumai_reputation.core.ReputationCalculator`.

    The two evidence amounts are deliberately different: direct attestations
    are fused with 1.0 unit of evidence each, while every hop of a transitive
    path is converted with 10 units.

    Example::

        options = ReputationOptions(
            max_path_depth=4,
            discount_method=DiscountMethod.ebsl,
            theta=200,
        )
    """

    model_config = _WIRE_CONFIG

    max_path_depth: int = Field(default=3)
    max_paths: int = Field(default=10)
    discount_method: DiscountMethod = Field(default=DiscountMethod.generic)
    theta: float = Field(
        default=100.0,
        gt=0.0,
        description="EBSL discount threshold; must exceed any positive evidence",
    )
    min_trust_level: int = Field(default=50)
    direct_evidence_amount: float = Field(default=1.0, gt=0.0)
    transitive_evidence_amount: float = Field(default=10.0, gt=0.0)

    @field_validator("max_path_depth", "max_paths")
    @classmethod
    def negative_bounds_mean_zero(cls, value: int) -> int:
        """Treat negative search bounds as zero instead of rejecting them."""
        return max(0, value)


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


class PathDetail(BaseModel):
    """One valid transitive trust path and the opinion it contributes."""

    model_config = {"frozen": True}

    path: list[str]
    opinion: Opinion
    expectation: float = Field(..., ge=0.0, le=1.0)


class ReputationResult(BaseModel):
    """Outcome of a reputation computation for one target."""

    model_config = {"frozen": True}

    score: float = Field(..., ge=0.0, le=100.0, description="Expectation x 100")
    opinion: Opinion
    direct_count: int = Field(default=0, ge=0)
    transitive_count: int = Field(default=0, ge=0)
    paths: list[PathDetail] = Field(default_factory=list)
    method: str = Field(
        default="direct-only",
        description="'direct-only' or the discount method used for paths",
    )

    def category(self) -> TrustCategory:
        """Return the display category of the unrounded score."""
        return TrustCategory.from_score(self.score)

    def __repr__(self) -> str:
        return (
            f"ReputationResult(score={self.score:.2f}, "
            f"method={self.method!r}, direct={self.direct_count}, "
            f"transitive={self.transitive_count})"
        )


class ReputationSummary(BaseModel):
    """Rounded, display-ready view of a :class:`ReputationResult`."""

    model_config = {"frozen": True}

    score: float = Field(..., ge=0.0, le=100.0)
    category: TrustCategory
    confidence: int = Field(..., ge=0, le=100)
    belief: int = Field(..., ge=0, le=100)
    disbelief: int = Field(..., ge=0, le=100)
    uncertainty: int = Field(..., ge=0, le=100)
    direct_count: int = Field(default=0, ge=0)
    transitive_count: int = Field(default=0, ge=0)
    total_evidence: int = Field(default=0, ge=0)


__all__ = [
    "OPINION_SUM_TOLERANCE",
    "Attestation",
    "AttestationGraph",
    "DiscountMethod",
    "Evidence",
    "Opinion",
    "PathDetail",
    "ReputationOptions",
    "ReputationResult",
    "ReputationSummary",
    "TrustCategory",
]
