"""discharge-scribe: supervised discharge-summary generation with human review.

Typical use::

    from discharge_scribe import AppSettings, create_orchestrator

    orchestrator = create_orchestrator(AppSettings())
    orchestrator.select_patient("P001")
    state = await orchestrator.generate()      # pauses for review
    state = await orchestrator.approve()       # finalizes
"""

from __future__ import annotations

from discharge_scribe.core.config import AppSettings
from discharge_scribe.models import Demographics, LabResult, MedicationChange, Patient
from discharge_scribe.workflow import (
    ALL_WORKFLOW_STEPS,
    AgentStatus,
    AuditLog,
    AuditLogEntry,
    AuditStatus,
    WorkflowOrchestrator,
    WorkflowState,
    create_orchestrator,
)

__version__ = "0.1.0"

__all__ = [
    "ALL_WORKFLOW_STEPS",
    "AgentStatus",
    "AppSettings",
    "AuditLog",
    "AuditLogEntry",
    "AuditStatus",
    "Demographics",
    "LabResult",
    "MedicationChange",
    "Patient",
    "WorkflowOrchestrator",
    "WorkflowState",
    "create_orchestrator",
]
