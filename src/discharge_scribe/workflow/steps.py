"""Step selection: which step, if any, runs next for a given snapshot."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from discharge_scribe.workflow.state import AgentStatus, WorkflowState


class StepKind(str, Enum):
    RETRIEVE = "retrieve"
    SYNTHESIZE = "synthesize"
    DRAFT = "draft"
    FINALIZE = "finalize"


def next_step(state: WorkflowState) -> Optional[StepKind]:
    """Return the first step whose precondition holds, in priority order.

    Pure function of the snapshot. ``None`` means nothing is eligible: a step
    is already in flight, the run is terminal, or a human decision is pending.
    """
    if state.active_step is not None:
        return None

    running = state.status == AgentStatus.RUNNING

    if running and len(state.audit_log) == 0 and state.patient_id:
        return StepKind.RETRIEVE
    if running and state.patient_data is not None and not state.synthesized_notes:
        return StepKind.SYNTHESIZE
    if (running and state.synthesized_notes and not state.draft_summary) or (
        state.status == AgentStatus.EDITING
    ):
        return StepKind.DRAFT
    if running and state.draft_summary and not state.final_summary:
        return StepKind.FINALIZE
    return None
