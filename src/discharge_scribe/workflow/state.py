"""Workflow state aggregate and step vocabulary."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from discharge_scribe.models import Patient
from discharge_scribe.workflow.audit import AuditLog, AuditMatchMode

# ── Audit step names ─────────────────────────────────────────────────

START_WORKFLOW = "Start Workflow"
RETRIEVE_PATIENT_DATA = "Retrieve Patient Data"
SYNTHESIZE_NOTES = "Synthesize Clinical Notes"
GENERATE_DRAFT = "Generate Draft Summary"
REGENERATE_DRAFT = "Regenerate Draft"
HUMAN_REVIEW = "Human Review"
FINALIZE_SUMMARY = "Finalize Summary"
WORKFLOW_COMPLETE = "Workflow Complete"

ALL_WORKFLOW_STEPS: tuple[str, ...] = (
    START_WORKFLOW,
    RETRIEVE_PATIENT_DATA,
    SYNTHESIZE_NOTES,
    GENERATE_DRAFT,
    HUMAN_REVIEW,
    FINALIZE_SUMMARY,
    WORKFLOW_COMPLETE,
)


class AgentStatus(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    AWAITING_APPROVAL = "awaiting_approval"
    EDITING = "editing"
    FINISHED = "finished"
    ERROR = "error"


class WorkflowState(BaseModel):
    """Snapshot of one patient's discharge-summary run.

    Instances are treated as immutable values: the reducer returns a new
    snapshot for every event.
    """

    patient_id: Optional[str] = None
    patient_data: Optional[Patient] = None
    synthesized_notes: str = ""
    draft_summary: str = ""
    final_summary: str = ""
    audit_log: AuditLog = Field(default_factory=AuditLog)
    status: AgentStatus = AgentStatus.IDLE
    error: Optional[str] = None
    edit_request: str = ""
    review_cycle: int = 0
    active_step: Optional[str] = None  # audit step currently in flight

    @classmethod
    def initial(
        cls,
        patient_id: Optional[str] = None,
        *,
        match_mode: AuditMatchMode = "cycle",
    ) -> WorkflowState:
        """Fresh idle state, optionally pre-selected for ``patient_id``."""
        return cls(patient_id=patient_id, audit_log=AuditLog(match_mode=match_mode))

    @property
    def is_terminal(self) -> bool:
        return self.status in (AgentStatus.FINISHED, AgentStatus.ERROR)
