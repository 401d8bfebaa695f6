"""AumAI Reputation — evidence-based subjective logic over a web of attestations.

Public API::

    from aumai_reputation import (
        # models
        Attestation,
        AttestationGraph,
        DiscountMethod,
        Evidence,
        Opinion,
        PathDetail,
        ReputationOptions,
        ReputationResult,
        ReputationSummary,
        TrustCategory,
        # algebra
        evidence_to_opinion,
        fuse_opinions,
        scalar_multiply,
        transitive_opinion,
        # graph
        build_attestation_graph,
        find_trust_paths,
        # core
        ReputationCalculator,
        calculate_reputation,
        # summary
        summarize_reputation,
        # sources
        AttestationSnapshot,
        AttestationSource,
    )
"""

from aumai_reputation.algebra import (
    discount,
    ebsl_discount,
    evidence_to_opinion,
    fuse_all,
    fuse_opinions,
    generic_discount,
    legacy_discount,
    opinion_to_evidence,
    opinion_to_expectation,
    scalar_multiply,
    transitive_opinion,
    trust_level_to_opinion,
)
from aumai_reputation.core import (
    ReputationCalculator,
    calculate_reputation,
    reputation_from_source,
)
from aumai_reputation.graph import (
    build_attestation_graph,
    find_trust_paths,
    latest_per_pair,
)
from aumai_reputation.models import (
    Attestation,
    AttestationGraph,
    DiscountMethod,
    Evidence,
    Opinion,
    PathDetail,
    ReputationOptions,
    ReputationResult,
    ReputationSummary,
    TrustCategory,
)
from aumai_reputation.snapshot import AttestationSnapshot, AttestationSource
from aumai_reputation.summary import categorize_score, summarize_reputation

__version__ = "0.1.0"

__all__ = [
    # package metadata
    "__version__",
    # models
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
    # algebra
    "discount",
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
    # graph
    "build_attestation_graph",
    "find_trust_paths",
    "latest_per_pair",
    # core
    "ReputationCalculator",
    "calculate_reputation",
    "reputation_from_source",
    # summary
    "categorize_score",
    "summarize_reputation",
    # sources
    "AttestationSnapshot",
    "AttestationSource",
]
