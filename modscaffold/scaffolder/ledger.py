"""Generation Ledger.

Pydantic v2 models recording the outcome of every artifact a run attempted.
The ledger is append-only: entries are never mutated or removed, and are
read back in insertion order when the caller reports the final outcome.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


Outcome = Literal["success", "skipped", "failure"]


# ---------------------------------------------------------------------------
# Entry
# ---------------------------------------------------------------------------


class LedgerEntry(BaseModel):
    """One generation attempt."""

    model_config = ConfigDict(frozen=True)

    kind: str = Field(..., description="Component kind or artifact type, e.g. 'model' or 'route_web'")
    outcome: Outcome
    path: Optional[Path] = Field(default=None, description="Written (or skipped) file on success")
    reason: str = Field(default="", description="Failure message")
    error: str = Field(default="", description="Machine-readable error code on failure")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @computed_field  # type: ignore[misc]
    @property
    def succeeded(self) -> bool:
        """True for written and skipped artifacts alike."""
        return self.outcome != "failure"


# ---------------------------------------------------------------------------
# Ledger
# ---------------------------------------------------------------------------


class GenerationLedger:
    """Append-only log of per-artifact outcomes for one invocation."""

    def __init__(self) -> None:
        self._entries: list[LedgerEntry] = []

    def log_success(self, kind: str, path: str | Path, skipped: bool = False) -> LedgerEntry:
        entry = LedgerEntry(kind=kind, outcome="skipped" if skipped else "success", path=Path(path))
        self._entries.append(entry)
        return entry

    def log_failure(self, kind: str, reason: str, error: str = "") -> LedgerEntry:
        entry = LedgerEntry(kind=kind, outcome="failure", reason=reason, error=error)
        self._entries.append(entry)
        return entry

    @property
    def entries(self) -> tuple[LedgerEntry, ...]:
        return tuple(self._entries)

    def successes(self) -> list[LedgerEntry]:
        """Written and skipped entries, in insertion order."""
        return [e for e in self._entries if e.succeeded]

    def skipped(self) -> list[LedgerEntry]:
        return [e for e in self._entries if e.outcome == "skipped"]

    def failures(self) -> list[LedgerEntry]:
        return [e for e in self._entries if not e.succeeded]

    def was_successful(self) -> bool:
        """True iff no failure has been recorded."""
        return not self.failures()

    def summary(self) -> dict[str, int]:
        """Counts per outcome plus the total number of attempts."""
        return {
            "total": len(self._entries),
            "written": sum(1 for e in self._entries if e.outcome == "success"),
            "skipped": len(self.skipped()),
            "failed": len(self.failures()),
        }

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)
