"""Append-only audit trail of workflow steps.

Entries are kept in the order steps were first initiated. An entry may have
its ``status``/``details`` revised, but entries are never removed or
reordered.

Lookup by step name has two modes:

* ``first_match`` -- ``update_status`` rewrites the first entry carrying the
  step name, whatever review cycle appended it.
* ``cycle`` -- callers pass the review cycle and only the entry appended in
  that cycle is rewritten. Repeated step names ("Human Review",
  "Regenerate Draft") then always resolve to the live entry.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, Field

log = logging.getLogger(__name__)

AuditMatchMode = Literal["cycle", "first_match"]


class AuditStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    ERROR = "error"
    HUMAN_INPUT = "human_input"


class AuditLogEntry(BaseModel):
    """Lifecycle record for one workflow step."""

    step: str
    status: AuditStatus
    details: str = ""
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    cycle: int = 0


class AuditLog(BaseModel):
    """Ordered audit entries plus the lookup mode used to revise them."""

    entries: list[AuditLogEntry] = Field(default_factory=list)
    match_mode: AuditMatchMode = "cycle"

    def __len__(self) -> int:
        return len(self.entries)

    def append(
        self,
        step: str,
        details: str,
        status: AuditStatus = AuditStatus.IN_PROGRESS,
        *,
        cycle: int = 0,
    ) -> AuditLogEntry:
        """Add a new entry at the end of the log."""
        entry = AuditLogEntry(step=step, status=status, details=details, cycle=cycle)
        self.entries.append(entry)
        return entry

    def find(self, step: str, cycle: Optional[int] = None) -> Optional[AuditLogEntry]:
        """Return the first entry named ``step`` (restricted to ``cycle`` when given)."""
        for entry in self.entries:
            if entry.step != step:
                continue
            if cycle is None or entry.cycle == cycle:
                return entry
        return None

    def update_status(
        self,
        step: str,
        status: AuditStatus,
        details: Optional[str] = None,
        *,
        cycle: Optional[int] = None,
    ) -> bool:
        """Rewrite status (and details, when non-empty) of the matching entry.

        A miss is not an error: nothing changes and ``False`` is returned.
        """
        entry = self.find(step, cycle)
        if entry is None:
            log.debug("Audit update for unknown step %r (cycle=%s) ignored", step, cycle)
            return False
        entry.status = status
        if details:
            entry.details = details
        return True

    def cycle_for(self, cycle: int) -> Optional[int]:
        """Cycle argument for ``update_status`` under the configured match mode."""
        return cycle if self.match_mode == "cycle" else None

    def steps(self) -> list[str]:
        return [e.step for e in self.entries]

    def in_progress(self) -> list[AuditLogEntry]:
        return [e for e in self.entries if e.status == AuditStatus.IN_PROGRESS]

    def has_started(self, step: str) -> bool:
        return self.find(step) is not None
