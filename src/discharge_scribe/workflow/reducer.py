"""Pure state transitions: ``apply_event(state, event) -> new state``.

The input snapshot is never mutated; each event yields a deep copy with the
event applied. Audit bookkeeping for every step lives here so that the
orchestrator only decides *when* events happen.
"""

from __future__ import annotations

from typing import Optional

from discharge_scribe.exceptions import InvalidTransitionError
from discharge_scribe.models import Patient
from discharge_scribe.workflow.audit import AuditStatus
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
from discharge_scribe.workflow.state import (
    FINALIZE_SUMMARY,
    GENERATE_DRAFT,
    HUMAN_REVIEW,
    REGENERATE_DRAFT,
    RETRIEVE_PATIENT_DATA,
    START_WORKFLOW,
    SYNTHESIZE_NOTES,
    WORKFLOW_COMPLETE,
    AgentStatus,
    WorkflowState,
)

_START_DETAILS = {
    RETRIEVE_PATIENT_DATA: "Fetching patient record from database.",
    SYNTHESIZE_NOTES: "Synthesizing patient data into clinical notes.",
    GENERATE_DRAFT: "Creating draft discharge summary.",
    REGENERATE_DRAFT: "Applying requested edits and regenerating summary.",
    FINALIZE_SUMMARY: "Finalizing the document.",
}

_DRAFT_STEPS = (GENERATE_DRAFT, REGENERATE_DRAFT)

# Statuses in which a step is executing and a new run must not be started.
_BUSY = (AgentStatus.RUNNING, AgentStatus.EDITING)


def apply_event(state: WorkflowState, event: WorkflowEvent) -> WorkflowState:
    """Return the snapshot that results from applying ``event`` to ``state``."""
    match_mode = state.audit_log.match_mode

    if isinstance(event, Reset):
        return WorkflowState.initial(match_mode=match_mode)

    if isinstance(event, PatientSelected):
        return WorkflowState.initial(event.patient_id, match_mode=match_mode)

    if isinstance(event, GenerateRequested):
        if not state.patient_id:
            return state
        if state.status in _BUSY:
            raise InvalidTransitionError(f"Cannot start a new run while status is {state.status.value}.")
        new = WorkflowState.initial(state.patient_id, match_mode=match_mode)
        new.status = AgentStatus.RUNNING
        return new

    new = state.model_copy(deep=True)

    if isinstance(event, StepStarted):
        _start_step(new, event.step)
    elif isinstance(event, StepSucceeded):
        _complete_step(new, event.step, event.payload)
    elif isinstance(event, StepFailed):
        _fail_step(new, event.step, event.message)
    elif isinstance(event, Approved):
        _require_review(new, "approve")
        _update(new, HUMAN_REVIEW, AuditStatus.COMPLETED, "Clinician approved the draft summary.")
        new.status = AgentStatus.RUNNING
    elif isinstance(event, EditsRequested):
        _require_review(new, "request edits")
        if not event.text.strip():
            raise InvalidTransitionError("Edit request must not be empty.")
        _update(
            new,
            HUMAN_REVIEW,
            AuditStatus.COMPLETED,
            f'Clinician requested edits: "{event.text}"',
        )
        new.status = AgentStatus.EDITING
        new.edit_request = event.text
        new.review_cycle += 1
    else:
        raise TypeError(f"Unknown workflow event: {event!r}")

    return new


def _update(
    state: WorkflowState,
    step: str,
    status: AuditStatus,
    details: Optional[str] = None,
) -> None:
    audit = state.audit_log
    audit.update_status(step, status, details, cycle=audit.cycle_for(state.review_cycle))


def _append(state: WorkflowState, step: str, details: str, status: AuditStatus) -> None:
    state.audit_log.append(step, details, status, cycle=state.review_cycle)


def _require_review(state: WorkflowState, action: str) -> None:
    if state.status != AgentStatus.AWAITING_APPROVAL:
        raise InvalidTransitionError(
            f"Cannot {action} while status is {state.status.value}; no draft is awaiting review."
        )


def _start_step(state: WorkflowState, step: str) -> None:
    if step == START_WORKFLOW:
        details = f"Initiating summary generation for patient: {state.patient_id}"
    elif step == RETRIEVE_PATIENT_DATA:
        # Start Workflow hands over to retrieval; only one step is in flight.
        _update(state, START_WORKFLOW, AuditStatus.COMPLETED)
        details = _START_DETAILS[step]
    elif step == REGENERATE_DRAFT:
        state.status = AgentStatus.RUNNING
        details = _START_DETAILS[step]
    else:
        details = _START_DETAILS[step]
    _append(state, step, details, AuditStatus.IN_PROGRESS)
    state.active_step = step


def _complete_step(state: WorkflowState, step: str, payload: object) -> None:
    state.active_step = None
    if step == RETRIEVE_PATIENT_DATA:
        if not isinstance(payload, Patient):
            raise TypeError("Retrieval must complete with a Patient payload.")
        _update(state, START_WORKFLOW, AuditStatus.COMPLETED)
        _update(
            state,
            RETRIEVE_PATIENT_DATA,
            AuditStatus.COMPLETED,
            f"Successfully fetched data for {payload.display_name}.",
        )
        state.patient_data = payload
    elif step == SYNTHESIZE_NOTES:
        _update(state, SYNTHESIZE_NOTES, AuditStatus.COMPLETED, "Synthesis complete.")
        state.synthesized_notes = str(payload or "")
    elif step in _DRAFT_STEPS:
        _update(state, step, AuditStatus.COMPLETED, "Draft generated. Awaiting human review.")
        _append(state, HUMAN_REVIEW, "Waiting for clinician approval.", AuditStatus.HUMAN_INPUT)
        state.draft_summary = str(payload or "")
        state.status = AgentStatus.AWAITING_APPROVAL
        state.edit_request = ""
    elif step == FINALIZE_SUMMARY:
        _update(state, FINALIZE_SUMMARY, AuditStatus.COMPLETED, "Discharge summary is complete.")
        _append(state, WORKFLOW_COMPLETE, "Process finished successfully.", AuditStatus.COMPLETED)
        state.final_summary = state.draft_summary
        state.status = AgentStatus.FINISHED
    else:
        raise ValueError(f"Unknown workflow step: {step!r}")


def _fail_step(state: WorkflowState, step: str, message: str) -> None:
    state.active_step = None
    _update(state, step, AuditStatus.ERROR, message)
    state.status = AgentStatus.ERROR
    state.error = message
