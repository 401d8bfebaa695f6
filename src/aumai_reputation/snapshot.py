"""Attestation sources: the read side of an external attestation store.

The reputation engine never talks to a ledger or database itself.  It reads
through :class:`AttestationSource`, and :class:`AttestationSnapshot` is the
in-memory implementation used by the CLI and the tests.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from aumai_reputation.graph import latest_per_pair
from aumai_reputation.models import Attestation


@runtime_checkable
class AttestationSource(Protocol):
    """Read operations the reputation engine depends on.

    Reads only need to be consistent within one computation.  All three
    return inactive (revoked) records too; filtering is up to the caller.
    """

    def fetch_all(self) -> Sequence[Attestation]:
        """Return every attestation in the store."""
        ...

    def fetch_given(self, attester: str) -> Sequence[Attestation]:
        """Return the attestations issued by *attester*."""
        ...

    def fetch_received(self, subject: str) -> Sequence[Attestation]:
        """Return the attestations whose subject is *subject*."""
        ...


class AttestationSnapshot:
    """Immutable, in-memory :class:`AttestationSource`.

    Example::

        snapshot = AttestationSnapshot.from_json_file("attestations.json")
        received = snapshot.latest().fetch_received("0xcarol")
    """

    def __init__(self, attestations: Iterable[Attestation] = ()) -> None:
        self._attestations: tuple[Attestation, ...] = tuple(attestations)

    # ------------------------------------------------------------------
    # Factory helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_records(cls, records: Iterable[dict[str, Any]]) -> AttestationSnapshot:
        """Validate raw records (snake_case or camelCase keys) into a snapshot.

        Raises:
            pydantic.ValidationError: If a record is malformed.
        """
        return cls(Attestation.model_validate(record) for record in records)

    @classmethod
    def from_json_file(cls, path: str | Path) -> AttestationSnapshot:
        """Load a snapshot from a JSON file.

        The file holds either a list of attestation records or an object with
        an ``attestations`` list.

        Raises:
            ValueError: If the JSON document has neither shape.
            pydantic.ValidationError: If a record is malformed.
        """
        data: Any = json.loads(Path(path).read_text(encoding="utf-8"))
        if isinstance(data, dict):
            data = data.get("attestations")
        if not isinstance(data, list):
            raise ValueError(
                f"{path}: expected a list of attestations or an object with an "
                "'attestations' list"
            )
        return cls.from_records(data)

    # ------------------------------------------------------------------
    # AttestationSource
    # ------------------------------------------------------------------

    def fetch_all(self) -> Sequence[Attestation]:
        return self._attestations

    def fetch_given(self, attester: str) -> Sequence[Attestation]:
        wanted = attester.lower()
        return tuple(a for a in self._attestations if a.attester.lower() == wanted)

    def fetch_received(self, subject: str) -> Sequence[Attestation]:
        wanted = subject.lower()
        return tuple(a for a in self._attestations if a.subject.lower() == wanted)

    # ------------------------------------------------------------------
    # Derived snapshots
    # ------------------------------------------------------------------

    def latest(self) -> AttestationSnapshot:
        """Return a snapshot with only the latest record per attester/subject pair."""
        return AttestationSnapshot(latest_per_pair(self._attestations))

    def __len__(self) -> int:
        return len(self._attestations)

    def __repr__(self) -> str:
        return f"AttestationSnapshot({len(self._attestations)} attestation(s))"


__all__ = ["AttestationSnapshot", "AttestationSource"]
