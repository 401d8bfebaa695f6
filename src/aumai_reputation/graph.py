"""Attestation graph construction and bounded trust-path search."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable

from aumai_reputation.models import Attestation, AttestationGraph

logger = logging.getLogger(__name__)

#: Default maximum number of participants on a trust path.
DEFAULT_MAX_DEPTH: int = 3


def build_attestation_graph(attestations: Iterable[Attestation]) -> AttestationGraph:
    """Build the adjacency mapping of currently active attestations.

    Records are grouped by lower-cased attester, keeping input order.  Revoked
    (``is_active=False``) records are dropped; an attester whose records are
    all revoked still appears with an empty tuple.  Repeated
    ``(attester, subject)`` pairs are kept as-is; use :func:`latest_per_pair`
    first when only the current record per pair should count.
    """
    grouped: dict[str, list[Attestation]] = {}
    for attestation in attestations:
        bucket = grouped.setdefault(attestation.attester.lower(), [])
        if attestation.is_active:
            bucket.append(attestation)
    return AttestationGraph(
        edges={attester: tuple(records) for attester, records in grouped.items()}
    )


def latest_per_pair(attestations: Iterable[Attestation]) -> list[Attestation]:
    """Keep the most recent record for each ``(attester, subject)`` pair.

    Pairs compare case-insensitively.  The greatest ``timestamp`` wins and a
    later record wins a tie.  Output follows the order in which each pair was
    first seen.
    """
    latest: dict[tuple[str, str], Attestation] = {}
    for attestation in attestations:
        key = (attestation.attester.lower(), attestation.subject.lower())
        current = latest.get(key)
        if current is None or attestation.timestamp >= current.timestamp:
            latest[key] = attestation
    return list(latest.values())


def find_trust_paths(
    source: str,
    target: str,
    graph: AttestationGraph,
    max_depth: int = DEFAULT_MAX_DEPTH,
    max_paths: int | None = None,
) -> list[list[str]]:
    """Breadth-first search for trust paths from *source* to *target*.

    Each participant is enqueued at most once (the visited set is seeded
    with *source*), so the search yields the shortest path to every reachable
    node and therefore at most one path to *target*.  This is not simple-path
    enumeration.

    A path whose node count has reached *max_depth* is not expanded further,
    and a path ending at *target* is recorded without being expanded.
    Identifiers compare case-insensitively; returned paths keep the spelling
    used in the attestations.

    Args:
        source: Participant the search starts from (the observer).
        target: Participant whose trust is being evaluated.
        graph: Attestation graph to traverse.
        max_depth: Maximum number of participants per path.  Negative values
            are treated as zero.
        max_paths: Optional cap on the number of returned paths.  Negative
            values are treated as zero.

    Returns:
        List of paths, each ``[source, ..., target]``.
    """
    max_depth = max(0, max_depth)
    limit = None if max_paths is None else max(0, max_paths)

    paths: list[list[str]] = []
    if limit == 0:
        return paths

    wanted = target.lower()
    visited = {source.lower()}
    queue: deque[list[str]] = deque([[source]])

    while queue:
        path = queue.popleft()
        current = path[-1]

        if current.lower() == wanted:
            paths.append(path)
            if limit is not None and len(paths) >= limit:
                break
            continue

        if len(path) >= max_depth:
            continue

        for attestation in graph.attestations_from(current):
            neighbour = attestation.subject.lower()
            if neighbour not in visited:
                visited.add(neighbour)
                queue.append([*path, attestation.subject])

    logger.debug(
        "Trust path search %s -> %s (max_depth=%d) found %d path(s)",
        source,
        target,
        max_depth,
        len(paths),
    )
    return paths


__all__ = [
    "DEFAULT_MAX_DEPTH",
    "build_attestation_graph",
    "find_trust_paths",
    "latest_per_pair",
]
