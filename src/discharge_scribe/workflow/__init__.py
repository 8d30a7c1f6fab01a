"""Workflow core: audit log, state, step selection, reducer and orchestrator."""

from __future__ import annotations

from discharge_scribe.workflow.audit import AuditLog, AuditLogEntry, AuditMatchMode, AuditStatus
from discharge_scribe.workflow.events import (
    Approved,
    EditsRequested,
    GenerateRequested,
    PatientSelected,
    Reset,
    StepFailed,
    StepStarted,
    StepSucceeded,
    WorkflowEvent,
)
from discharge_scribe.workflow.factory import create_orchestrator
from discharge_scribe.workflow.orchestrator import WorkflowOrchestrator
from discharge_scribe.workflow.reducer import apply_event
from discharge_scribe.workflow.state import ALL_WORKFLOW_STEPS, AgentStatus, WorkflowState
from discharge_scribe.workflow.steps import StepKind, next_step

__all__ = [
    "ALL_WORKFLOW_STEPS",
    "AgentStatus",
    "Approved",
    "AuditLog",
    "AuditLogEntry",
    "AuditMatchMode",
    "AuditStatus",
    "EditsRequested",
    "GenerateRequested",
    "PatientSelected",
    "Reset",
    "StepFailed",
    "StepKind",
    "StepStarted",
    "StepSucceeded",
    "WorkflowEvent",
    "WorkflowOrchestrator",
    "WorkflowState",
    "apply_event",
    "create_orchestrator",
    "next_step",
]
