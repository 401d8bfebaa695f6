"""Reputation calculation for aumai-reputation."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from aumai_reputation.algebra import (
    fuse_all,
    opinion_to_expectation,
    transitive_opinion,
    trust_level_to_opinion,
)
from aumai_reputation.graph import build_attestation_graph, find_trust_paths
from aumai_reputation.models import (
    Attestation,
    AttestationGraph,
    Opinion,
    PathDetail,
    ReputationOptions,
    ReputationResult,
)
from aumai_reputation.snapshot import AttestationSource

logger = logging.getLogger(__name__)

#: ``ReputationResult.method`` when no observer was given.
DIRECT_ONLY_METHOD: str = "direct-only"


class ReputationCalculator:
    """Compute EBSL reputation from direct and transitive attestations.

    Direct attestations about the target are fused (⊕) into a direct opinion.
    When an observer is given, the calculator also searches for a trust path
    from the observer to the target, discounts the opinions along that path
    and fuses the result into the direct opinion.  The score is the
    expectation of the final opinion on a 0-100 scale.

    Every call recomputes from the supplied attestations; the calculator holds
    nothing but its options and is safe to share between threads.

    Example::

        graph = build_attestation_graph(snapshot.fetch_all())
        calculator = ReputationCalculator(ReputationOptions(max_path_depth=4))
        result = calculator.calculate(
            "0xcarol",
            direct_attestations=[a for a in received if a.is_active],
            graph=graph,
            observer="0xalice",
        )
        print(result.score, result.category().value)
    """

    def __init__(self, options: ReputationOptions | None = None) -> None:
        self._options = options or ReputationOptions()

    @property
    def options(self) -> ReputationOptions:
        return self._options

    # ------------------------------------------------------------------
    # Components
    # ------------------------------------------------------------------

    def direct_opinion(self, attestations: Sequence[Attestation]) -> Opinion:
        """Fuse the trust levels of *attestations* into one opinion.

        No attestations means full uncertainty with a neutral base rate.
        """
        amount = self._options.direct_evidence_amount
        return fuse_all(
            trust_level_to_opinion(attestation.trust_level, amount)
            for attestation in attestations
        )

    def path_opinion(self, path: Sequence[str], graph: AttestationGraph) -> Opinion | None:
        """Return the transitive opinion carried by *path*, or ``None``.

        Every hop needs an active attestation with a trust level of at least
        ``min_trust_level``; a path with a missing or weak hop contributes
        nothing.
        """
        if len(path) < 2:
            return None

        hop_opinions: list[Opinion] = []
        for attester, subject in zip(path, path[1:]):
            attestation = graph.find_active(attester, subject)
            if attestation is None:
                logger.debug("Discarding path %s: no active %s -> %s", path, attester, subject)
                return None
            if attestation.trust_level < self._options.min_trust_level:
                logger.debug(
                    "Discarding path %s: %s -> %s trust %d below %d",
                    path,
                    attester,
                    subject,
                    attestation.trust_level,
                    self._options.min_trust_level,
                )
                return None
            hop_opinions.append(
                trust_level_to_opinion(
                    attestation.trust_level, self._options.transitive_evidence_amount
                )
            )

        return transitive_opinion(
            hop_opinions, self._options.discount_method, self._options.theta
        )

    # ------------------------------------------------------------------
    # Full calculation
    # ------------------------------------------------------------------

    def calculate(
        self,
        target: str,
        direct_attestations: Sequence[Attestation],
        graph: AttestationGraph | Mapping[str, Iterable[Any]],
        observer: str | None = None,
    ) -> ReputationResult:
        """Compute the reputation of *target*.

        Args:
            target: Participant being scored.
            direct_attestations: Active attestations whose subject is
                *target*, already filtered by the caller.
            graph: Attestation graph, or a plain ``attester -> records``
                mapping which is wrapped in an :class:`AttestationGraph`.
            observer: Participant whose point of view personalizes the score.
                Without an observer only direct evidence is used.

        Returns:
            A :class:`ReputationResult`.  Absence of evidence is not an
            error: it yields the neutral opinion and a score of 50.
        """
        attestation_graph = _as_graph(graph)
        direct = self.direct_opinion(direct_attestations)

        if not observer:
            return ReputationResult(
                score=_to_score(direct),
                opinion=direct,
                direct_count=len(direct_attestations),
                transitive_count=0,
                paths=[],
                method=DIRECT_ONLY_METHOD,
            )

        paths = find_trust_paths(
            observer,
            target,
            attestation_graph,
            max_depth=self._options.max_path_depth,
            max_paths=self._options.max_paths,
        )

        details: list[PathDetail] = []
        for path in paths:
            opinion = self.path_opinion(path, attestation_graph)
            if opinion is None:
                continue
            details.append(
                PathDetail(
                    path=list(path),
                    opinion=opinion,
                    expectation=opinion_to_expectation(opinion),
                )
            )

        final = fuse_all((detail.opinion for detail in details), initial=direct)
        result = ReputationResult(
            score=_to_score(final),
            opinion=final,
            direct_count=len(direct_attestations),
            transitive_count=len(details),
            paths=details,
            method=self._options.discount_method.value,
        )
        logger.debug(
            "Reputation of %s for observer %s: %r (%d path(s) searched)",
            target,
            observer,
            result,
            len(paths),
        )
        return result

    def calculate_from_source(
        self,
        source: AttestationSource,
        target: str,
        observer: str | None = None,
    ) -> ReputationResult:
        """Fetch a snapshot from *source* and compute the reputation of *target*.

        The graph is built from the full snapshot; the direct attestations are
        the active records received by *target*.
        """
        graph = build_attestation_graph(source.fetch_all())
        direct = [a for a in source.fetch_received(target) if a.is_active]
        return self.calculate(target, direct, graph, observer)


# ---------------------------------------------------------------------------
# Module-level conveniences
# ---------------------------------------------------------------------------


def calculate_reputation(
    target: str,
    direct_attestations: Sequence[Attestation],
    graph: AttestationGraph | Mapping[str, Iterable[Any]],
    observer: str | None = None,
    options: ReputationOptions | None = None,
) -> ReputationResult:
    """Functional form of :meth:`ReputationCalculator.calculate`."""
    return ReputationCalculator(options).calculate(
        target, direct_attestations, graph, observer
    )


def reputation_from_source(
    source: AttestationSource,
    target: str,
    observer: str | None = None,
    options: ReputationOptions | None = None,
) -> ReputationResult:
    """Functional form of :meth:`ReputationCalculator.calculate_from_source`."""
    return ReputationCalculator(options).calculate_from_source(source, target, observer)


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


def _as_graph(graph: AttestationGraph | Mapping[str, Iterable[Any]]) -> AttestationGraph:
    if isinstance(graph, AttestationGraph):
        return graph
    return AttestationGraph.from_mapping(graph)


def _to_score(opinion: Opinion) -> float:
    """Scale the expectation of *opinion* to [0, 100]."""
    return opinion_to_expectation(opinion) * 100.0


__all__ = [
    "DIRECT_ONLY_METHOD",
    "ReputationCalculator",
    "calculate_reputation",
    "reputation_from_source",
]
