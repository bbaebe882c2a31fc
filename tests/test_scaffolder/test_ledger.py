"""Tests for the Generation Ledger."""

from __future__ import annotations

from pathlib import Path

import pytest

from modscaffold.scaffolder.ledger import GenerationLedger, LedgerEntry


pytestmark = pytest.mark.unit


class TestLedgerEntry:
    def test_success_entry(self, tmp_path: Path):
        entry = LedgerEntry(kind="model", outcome="success", path=tmp_path / "Post.php")
        assert entry.succeeded is True
        assert entry.reason == ""

    def test_skipped_counts_as_success(self):
        assert LedgerEntry(kind="model", outcome="skipped").succeeded is True

    def test_failure_entry(self):
        entry = LedgerEntry(kind="model", outcome="failure", reason="boom", error="write_failure")
        assert entry.succeeded is False

    def test_serialises_succeeded(self):
        data = LedgerEntry(kind="model", outcome="failure").model_dump()
        assert data["succeeded"] is False

    def test_frozen(self):
        entry = LedgerEntry(kind="model", outcome="success")
        with pytest.raises(Exception):
            entry.kind = "cast"  # type: ignore[misc]


class TestGenerationLedger:
    def test_empty(self):
        ledger = GenerationLedger()
        assert len(ledger) == 0
        assert ledger.was_successful() is True
        assert ledger.summary() == {"total": 0, "written": 0, "skipped": 0, "failed": 0}

    def test_insertion_order_and_counts(self, tmp_path: Path):
        ledger = GenerationLedger()
        ledger.log_success("model", tmp_path / "Post.php")
        ledger.log_failure("widget", "No path configured", error="unknown_kind")
        ledger.log_success("cast", str(tmp_path / "JsonCast.php"), skipped=True)

        assert [e.kind for e in ledger] == ["model", "widget", "cast"]
        assert [e.outcome for e in ledger.entries] == ["success", "failure", "skipped"]
        assert [e.kind for e in ledger.successes()] == ["model", "cast"]
        assert [e.kind for e in ledger.skipped()] == ["cast"]
        assert [e.kind for e in ledger.failures()] == ["widget"]
        assert ledger.entries[2].path == tmp_path / "JsonCast.php"
        assert ledger.summary() == {"total": 3, "written": 1, "skipped": 1, "failed": 1}

    def test_was_successful(self, tmp_path: Path):
        ledger = GenerationLedger()
        ledger.log_success("model", tmp_path / "Post.php", skipped=True)
        assert ledger.was_successful() is True
        ledger.log_failure("model", "boom")
        assert ledger.was_successful() is False

    def test_entries_is_a_snapshot(self, tmp_path: Path):
        ledger = GenerationLedger()
        snapshot = ledger.entries
        ledger.log_success("model", tmp_path / "Post.php")
        assert snapshot == ()
        assert len(ledger.entries) == 1

    def test_log_returns_entry(self):
        ledger = GenerationLedger()
        entry = ledger.log_failure("model", "boom", error="invalid_name")
        assert entry is ledger.entries[0]
        assert entry.error == "invalid_name"
