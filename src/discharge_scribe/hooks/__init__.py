"""Workflow hooks: audit logging, structured logging setup, run tracker."""

from __future__ import annotations

from discharge_scribe.hooks.audit_hook import AuditTrailHook, IWorkflowHook
from discharge_scribe.hooks.logging_config import setup_logging
from discharge_scribe.hooks.run_tracker import (
    RunAnalytics,
    StageMetrics,
    end_run,
    get_current_run,
    start_run,
    track_stage,
)

__all__ = [
    "AuditTrailHook",
    "IWorkflowHook",
    "RunAnalytics",
    "StageMetrics",
    "end_run",
    "get_current_run",
    "setup_logging",
    "start_run",
    "track_stage",
]
