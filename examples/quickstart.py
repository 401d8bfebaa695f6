"""Quickstart examples for aumai-reputation.

This script walks through the main use cases of aumai-reputation: scoring a
target from direct attestations, personalizing the score with an observer's
trust path, comparing discount operators, and seeing what a revocation does.

Run directly to verify your installation:

    python examples/quickstart.py

All examples use fictional participants and require no external services.
"""

from __future__ import annotations

import json

from aumai_reputation import (
    Attestation,
    AttestationSnapshot,
    DiscountMethod,
    ReputationCalculator,
    ReputationOptions,
    build_attestation_graph,
    calculate_reputation,
    fuse_opinions,
    summarize_reputation,
    trust_level_to_opinion,
)


def _attest(attester: str, subject: str, level: int, **extra: object) -> Attestation:
    return Attestation(attester=attester, subject=subject, trust_level=level, **extra)


# ---------------------------------------------------------------------------
# Demo 1: Direct reputation
# ---------------------------------------------------------------------------


def demo_direct_reputation() -> None:
    """Fuse three independent attestations about the same participant."""
    print("\n" + "=" * 60)
    print("Demo 1: Direct reputation")
    print("=" * 60)

    received = [_attest(a, "0xD", level) for a, level in (("0xA", 90), ("0xB", 85), ("0xC", 95))]

    # Each direct attestation carries 1.0 unit of evidence by default.
    result = calculate_reputation("0xD", received, {})
    summary = summarize_reputation(result)
    print(f"\nDefault evidence : score={summary.score:.1f}  ({summary.category.value})")
    print(f"  {result.opinion!r}")

    # More evidence per attestation means less uncertainty.
    options = ReputationOptions(direct_evidence_amount=10.0)
    result = calculate_reputation("0xD", received, {}, options=options)
    summary = summarize_reputation(result)
    print(f"10x evidence     : score={summary.score:.1f}  ({summary.category.value})")
    print(f"  {result.opinion!r}")


# ---------------------------------------------------------------------------
# Demo 2: Observer-relative reputation
# ---------------------------------------------------------------------------


def demo_transitive_reputation() -> None:
    """Score carol from alice's point of view through alice -> bob -> carol."""
    print("\n" + "=" * 60)
    print("Demo 2: Transitive reputation (alice -> bob -> carol)")
    print("=" * 60)

    graph = build_attestation_graph(
        [_attest("alice", "bob", 90), _attest("bob", "carol", 80)]
    )
    result = ReputationCalculator().calculate("carol", [], graph, observer="alice")

    for detail in result.paths:
        print(f"\nPath        : {' -> '.join(detail.path)}")
        print(f"Expectation : {detail.expectation:.4f}")
    print(f"Score       : {result.score:.2f}  ({result.category().value})")

    hop_a = trust_level_to_opinion(90).expectation()
    hop_b = trust_level_to_opinion(80).expectation()
    print(f"Hop expectations were {hop_a:.4f} and {hop_b:.4f}; the path is weaker than both.")


# ---------------------------------------------------------------------------
# Demo 3: Discount operators
# ---------------------------------------------------------------------------


def demo_discount_methods() -> None:
    """Compare ebsl, generic and legacy discounting on the same chain."""
    print("\n" + "=" * 60)
    print("Demo 3: Discount method comparison")
    print("=" * 60)

    graph = build_attestation_graph(
        [_attest("alice", "bob", 90), _attest("bob", "carol", 80)]
    )
    print(f"\n{'method':>10}  {'score':>8}  {'uncertainty':>12}")
    print("-" * 34)
    for method in DiscountMethod:
        options = ReputationOptions(discount_method=method)
        result = calculate_reputation("carol", [], graph, "alice", options)
        print(f"{method.value:>10}  {result.score:>8.2f}  {result.opinion.uncertainty:>12.4f}")


# ---------------------------------------------------------------------------
# Demo 4: Revocation and snapshots
# ---------------------------------------------------------------------------


def demo_revocation() -> None:
    """A revoked attestation has the same effect as one never issued."""
    print("\n" + "=" * 60)
    print("Demo 4: Revocation")
    print("=" * 60)

    snapshot = AttestationSnapshot(
        [
            _attest("0xA", "0xD", 90, timestamp=1),
            _attest("0xB", "0xD", 60, timestamp=2),
            _attest("0xC", "0xD", 5, timestamp=3),
            _attest("0xC", "0xD", 5, timestamp=4, is_active=False),
        ]
    )
    calculator = ReputationCalculator()
    everything = calculator.calculate_from_source(snapshot, "0xD")
    latest = calculator.calculate_from_source(snapshot.latest(), "0xD")

    print(f"\nAll records        : score={everything.score:.2f}  direct={everything.direct_count}")
    print(f"Latest per pair    : score={latest.score:.2f}  direct={latest.direct_count}")

    print("\nSummary JSON:")
    print(json.dumps(summarize_reputation(latest).model_dump(mode="json"), indent=2))


# ---------------------------------------------------------------------------
# Demo 5: Fusion is evidence addition
# ---------------------------------------------------------------------------


def demo_fusion() -> None:
    """Fusing opinions adds up the evidence behind them."""
    print("\n" + "=" * 60)
    print("Demo 5: Cumulative fusion")
    print("=" * 60)

    first = trust_level_to_opinion(70)
    second = trust_level_to_opinion(70)
    print(f"\nOne source  : {first!r}")
    print(f"Two sources : {fuse_opinions(first, second)!r}")
    print(f"Equivalent  : {trust_level_to_opinion(70, evidence_amount=20)!r}")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main() -> None:
    """Run all quickstart demos in sequence."""
    print("aumai-reputation quickstart examples")
    print("=" * 60)

    demo_direct_reputation()
    demo_transitive_reputation()
    demo_discount_methods()
    demo_revocation()
    demo_fusion()

    print("\n" + "=" * 60)
    print("All demos complete.")


if __name__ == "__main__":
    main()
