"""Shared pytest fixtures for aumai-reputation tests."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from aumai_reputation.graph import build_attestation_graph
from aumai_reputation.models import Attestation, AttestationGraph, Opinion
from aumai_reputation.snapshot import AttestationSnapshot

AttestationFactory = Callable[..., Attestation]


def make_attestation(
    attester: str,
    subject: str,
    trust_level: int,
    *,
    is_active: bool = True,
    timestamp: int = 0,
    comment: str = "",
) -> Attestation:
    """Build an attestation with sensible defaults for tests."""
    return Attestation(
        attester=attester,
        subject=subject,
        trust_level=trust_level,
        is_active=is_active,
        timestamp=timestamp,
        comment=comment,
    )


# ---------------------------------------------------------------------------
# Attestation fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def attestation_factory() -> AttestationFactory:
    """The :func:`make_attestation` helper as a fixture."""
    return make_attestation


@pytest.fixture()
def neutral_opinion() -> Opinion:
    """Full uncertainty with a neutral base rate."""
    return Opinion.neutral()


@pytest.fixture()
def chain_attestations() -> list[Attestation]:
    """alice -> bob (90), bob -> carol (80)."""
    return [
        make_attestation("alice", "bob", 90),
        make_attestation("bob", "carol", 80),
    ]


@pytest.fixture()
def chain_graph(chain_attestations: list[Attestation]) -> AttestationGraph:
    return build_attestation_graph(chain_attestations)


@pytest.fixture()
def diamond_graph() -> AttestationGraph:
    """0xAAA reaches 0xDDD through both 0xBBB and 0xCCC."""
    return build_attestation_graph(
        [
            make_attestation("0xAAA", "0xBBB", 80),
            make_attestation("0xAAA", "0xCCC", 70),
            make_attestation("0xBBB", "0xDDD", 90),
            make_attestation("0xCCC", "0xDDD", 85),
        ]
    )


@pytest.fixture()
def long_chain_graph() -> AttestationGraph:
    """a -> b -> c -> d: the only route from a to d has three hops."""
    return build_attestation_graph(
        [
            make_attestation("a", "b", 90),
            make_attestation("b", "c", 90),
            make_attestation("c", "d", 90),
        ]
    )


@pytest.fixture()
def snapshot() -> AttestationSnapshot:
    """A store snapshot with history: one update and one revocation."""
    return AttestationSnapshot(
        [
            make_attestation("alice", "bob", 60, timestamp=100),
            make_attestation("alice", "bob", 90, timestamp=200),
            make_attestation("bob", "carol", 80, timestamp=150),
            make_attestation("dave", "carol", 95, timestamp=120),
            make_attestation("erin", "carol", 10, timestamp=130, is_active=False),
        ]
    )
