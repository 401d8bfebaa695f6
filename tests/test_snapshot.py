"""Tests for aumai_reputation.snapshot."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from aumai_reputation.snapshot import AttestationSnapshot, AttestationSource

_RECORDS = [
    {"attester": "0xAAA", "subject": "0xBBB", "trustLevel": 80, "timestamp": 10},
    {"attester": "0xBBB", "subject": "0xCCC", "trust_level": 65, "isActive": False},
]


class TestFactories:
    def test_from_records_accepts_both_key_styles(self) -> None:
        snapshot = AttestationSnapshot.from_records(_RECORDS)
        first, second = snapshot.fetch_all()
        assert first.trust_level == 80
        assert second.trust_level == 65
        assert second.is_active is False

    def test_from_records_rejects_malformed(self) -> None:
        with pytest.raises(ValidationError):
            AttestationSnapshot.from_records([{"attester": "a", "subject": "b"}])

    def test_from_json_file_list(self, tmp_path: Path) -> None:
        path = tmp_path / "attestations.json"
        path.write_text(json.dumps(_RECORDS), encoding="utf-8")
        assert len(AttestationSnapshot.from_json_file(path)) == 2

    def test_from_json_file_object(self, tmp_path: Path) -> None:
        path = tmp_path / "attestations.json"
        path.write_text(json.dumps({"attestations": _RECORDS}), encoding="utf-8")
        assert len(AttestationSnapshot.from_json_file(str(path))) == 2

    @pytest.mark.parametrize("payload", [{"records": []}, 42, "nope"])
    def test_from_json_file_bad_shape(self, tmp_path: Path, payload: object) -> None:
        path = tmp_path / "attestations.json"
        path.write_text(json.dumps(payload), encoding="utf-8")
        with pytest.raises(ValueError, match="expected a list"):
            AttestationSnapshot.from_json_file(path)


class TestQueries:
    """Fetches compare identifiers case-insensitively and include revoked records."""

    def test_is_an_attestation_source(self, snapshot: AttestationSnapshot) -> None:
        assert isinstance(snapshot, AttestationSource)

    def test_fetch_all(self, snapshot: AttestationSnapshot) -> None:
        assert len(snapshot.fetch_all()) == 5

    def test_fetch_given(self, snapshot: AttestationSnapshot) -> None:
        given = snapshot.fetch_given("ALICE")
        assert [a.trust_level for a in given] == [60, 90]

    def test_fetch_received_includes_inactive(self, snapshot: AttestationSnapshot) -> None:
        received = snapshot.fetch_received("Carol")
        assert {a.attester for a in received} == {"bob", "dave", "erin"}
        assert any(not a.is_active for a in received)

    def test_fetch_unknown(self, snapshot: AttestationSnapshot) -> None:
        assert snapshot.fetch_given("nobody") == ()

    def test_empty_snapshot(self) -> None:
        assert len(AttestationSnapshot()) == 0


class TestLatest:
    def test_collapses_history(self, snapshot: AttestationSnapshot) -> None:
        latest = snapshot.latest()
        assert len(latest) == 4
        assert [a.trust_level for a in latest.fetch_given("alice")] == [90]

    def test_returns_new_snapshot(self, snapshot: AttestationSnapshot) -> None:
        latest = snapshot.latest()
        assert latest is not snapshot
        assert len(snapshot) == 5

    def test_repr(self, snapshot: AttestationSnapshot) -> None:
        assert repr(snapshot) == "AttestationSnapshot(5 attestation(s))"
