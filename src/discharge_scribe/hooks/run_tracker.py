"""Per-run analytics tracker using ContextVars.

Opt-in and zero overhead when no run is active.

Usage::

    analytics = start_run(patient_id="P001")
    with track_stage("synthesize") as stage:
        stage.success_count = 1
    analytics = end_run()
    print(analytics.total_duration_ms)
"""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Generator, Optional

import structlog
from pydantic import BaseModel, Field


class StageMetrics(BaseModel):
    """Timing for one workflow step."""

    stage: str
    started_at: Optional[datetime] = None
    ended_at: Optional[datetime] = None
    duration_ms: float = 0.0
    success_count: int = 0
    error_count: int = 0


class RunAnalytics(BaseModel):
    """Aggregated timings and errors for one workflow run."""

    run_id: str
    patient_id: str = ""
    started_at: datetime
    ended_at: Optional[datetime] = None
    status: str = "running"
    stages: list[StageMetrics] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    total_duration_ms: float = 0.0

    def finalize(self, status: Optional[str] = None) -> None:
        self.ended_at = datetime.now(timezone.utc)
        self.total_duration_ms = (self.ended_at - self.started_at).total_seconds() * 1000
        if status is not None:
            self.status = status
        elif self.status == "running":
            self.status = "failed" if self.errors else "completed"


_current_run: ContextVar[Optional[RunAnalytics]] = ContextVar("scribe_current_run", default=None)


def get_current_run() -> Optional[RunAnalytics]:
    """Get the active RunAnalytics, or None if no run is active."""
    return _current_run.get()


def start_run(patient_id: str = "", run_id: Optional[str] = None) -> RunAnalytics:
    """Create and activate a new RunAnalytics for the current context."""
    analytics = RunAnalytics(
        run_id=run_id or uuid.uuid4().hex[:12],
        patient_id=patient_id,
        started_at=datetime.now(timezone.utc),
    )
    _current_run.set(analytics)
    structlog.contextvars.bind_contextvars(run_id=analytics.run_id)
    return analytics


def end_run(status: Optional[str] = None) -> Optional[RunAnalytics]:
    """Finalize the current run and return its analytics. Returns None if no run is active."""
    analytics = _current_run.get()
    if analytics is None:
        return None

    analytics.finalize(status)
    _current_run.set(None)
    structlog.contextvars.unbind_contextvars("run_id")
    return analytics


@contextmanager
def track_stage(name: str) -> Generator[StageMetrics, None, None]:
    """Context manager that records a StageMetrics entry on the current run.

    No-op if no run is active.
    """
    analytics = _current_run.get()

    stage = StageMetrics(stage=name, started_at=datetime.now(timezone.utc))
    structlog.contextvars.bind_contextvars(stage=name)

    try:
        yield stage
    finally:
        stage.ended_at = datetime.now(timezone.utc)
        if stage.started_at:
            stage.duration_ms = (stage.ended_at - stage.started_at).total_seconds() * 1000

        if analytics is not None:
            analytics.stages.append(stage)

        structlog.contextvars.unbind_contextvars("stage")
