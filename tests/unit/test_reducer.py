"""Tests for apply_event: one event in, one new snapshot out."""

from __future__ import annotations

import pytest

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
)
from discharge_scribe.workflow.reducer import apply_event
from discharge_scribe.workflow.state import AgentStatus, WorkflowState


def _apply(state: WorkflowState, *events) -> WorkflowState:
    for event in events:
        state = apply_event(state, event)
    return state


def _awaiting_review(patient: Patient, match_mode: str = "cycle") -> WorkflowState:
    state = WorkflowState.initial("P1", match_mode=match_mode)
    return _apply(
        state,
        GenerateRequested(),
        StepStarted(step="Start Workflow"),
        StepStarted(step="Retrieve Patient Data"),
        StepSucceeded(step="Retrieve Patient Data", payload=patient),
        StepStarted(step="Synthesize Clinical Notes"),
        StepSucceeded(step="Synthesize Clinical Notes", payload="notes"),
        StepStarted(step="Generate Draft Summary"),
        StepSucceeded(step="Generate Draft Summary", payload="D1"),
    )


class TestSelectionAndReset:
    def test_patient_selected_replaces_state(self, patient: Patient) -> None:
        state = _awaiting_review(patient)
        new = apply_event(state, PatientSelected(patient_id="P2"))

        assert new == WorkflowState.initial("P2")

    def test_reset_returns_initial_state(self, patient: Patient) -> None:
        state = _awaiting_review(patient)
        assert apply_event(state, Reset()) == WorkflowState.initial()

    def test_reset_keeps_audit_match_mode(self, patient: Patient) -> None:
        state = _awaiting_review(patient, match_mode="first_match")
        assert apply_event(state, Reset()).audit_log.match_mode == "first_match"

    def test_generate_without_patient_is_noop(self) -> None:
        state = WorkflowState.initial()
        assert apply_event(state, GenerateRequested()) is state

    def test_generate_clears_previous_run_but_keeps_patient(self, patient: Patient) -> None:
        state = _awaiting_review(patient)
        new = apply_event(state, GenerateRequested())

        assert new.patient_id == "P1"
        assert new.status == AgentStatus.RUNNING
        assert len(new.audit_log) == 0
        assert new.draft_summary == ""
        assert new.patient_data is None

    def test_generate_while_running_is_rejected(self) -> None:
        state = apply_event(WorkflowState.initial("P1"), GenerateRequested())
        with pytest.raises(InvalidTransitionError):
            apply_event(state, GenerateRequested())


class TestStepLifecycle:
    def test_inputs_are_never_mutated(self, patient: Patient) -> None:
        state = apply_event(WorkflowState.initial("P1"), GenerateRequested())
        before = state.model_copy(deep=True)

        apply_event(state, StepStarted(step="Start Workflow"))

        assert state == before

    def test_start_workflow_details_name_the_patient(self) -> None:
        state = _apply(WorkflowState.initial("P1"), GenerateRequested(), StepStarted(step="Start Workflow"))

        entry = state.audit_log.entries[0]
        assert entry.step == "Start Workflow"
        assert entry.status == AuditStatus.IN_PROGRESS
        assert "P1" in entry.details
        assert state.active_step == "Start Workflow"

    def test_retrieval_start_completes_start_workflow(self) -> None:
        state = _apply(
            WorkflowState.initial("P1"),
            GenerateRequested(),
            StepStarted(step="Start Workflow"),
            StepStarted(step="Retrieve Patient Data"),
        )

        assert [e.status for e in state.audit_log.entries] == [
            AuditStatus.COMPLETED,
            AuditStatus.IN_PROGRESS,
        ]

    def test_retrieval_success_stores_patient(self, patient: Patient) -> None:
        state = _apply(
            WorkflowState.initial("P1"),
            GenerateRequested(),
            StepStarted(step="Start Workflow"),
            StepStarted(step="Retrieve Patient Data"),
            StepSucceeded(step="Retrieve Patient Data", payload=patient),
        )

        entry = state.audit_log.find("Retrieve Patient Data")
        assert entry is not None
        assert entry.status == AuditStatus.COMPLETED
        assert entry.details == "Successfully fetched data for Ada Lovelace."
        assert state.patient_data == patient
        assert state.active_step is None

    def test_retrieval_requires_patient_payload(self) -> None:
        state = _apply(
            WorkflowState.initial("P1"),
            GenerateRequested(),
            StepStarted(step="Start Workflow"),
            StepStarted(step="Retrieve Patient Data"),
        )
        with pytest.raises(TypeError):
            apply_event(state, StepSucceeded(step="Retrieve Patient Data", payload="not a patient"))

    def test_failure_marks_entry_and_status(self) -> None:
        state = _apply(
            WorkflowState.initial("X"),
            GenerateRequested(),
            StepStarted(step="Start Workflow"),
            StepStarted(step="Retrieve Patient Data"),
            StepFailed(step="Retrieve Patient Data", message="Patient ID X not found."),
        )

        entry = state.audit_log.find("Retrieve Patient Data")
        assert entry is not None
        assert entry.status == AuditStatus.ERROR
        assert entry.details == "Patient ID X not found."
        assert state.status == AgentStatus.ERROR
        assert state.error == "Patient ID X not found."
        assert state.active_step is None

    def test_draft_success_opens_review(self, patient: Patient) -> None:
        state = _awaiting_review(patient)

        assert state.status == AgentStatus.AWAITING_APPROVAL
        assert state.draft_summary == "D1"
        assert state.audit_log.steps()[-1] == "Human Review"
        assert state.audit_log.entries[-1].status == AuditStatus.HUMAN_INPUT

    def test_finalize_copies_draft(self, patient: Patient) -> None:
        state = _apply(
            _awaiting_review(patient),
            Approved(),
            StepStarted(step="Finalize Summary"),
            StepSucceeded(step="Finalize Summary"),
        )

        assert state.status == AgentStatus.FINISHED
        assert state.final_summary == "D1"
        last = state.audit_log.entries[-1]
        assert (last.step, last.status) == ("Workflow Complete", AuditStatus.COMPLETED)

    def test_unknown_step_is_rejected(self) -> None:
        state = apply_event(WorkflowState.initial("P1"), GenerateRequested())
        with pytest.raises(ValueError, match="Unknown workflow step"):
            apply_event(state, StepSucceeded(step="Teleport"))


class TestHumanReview:
    def test_approve_completes_review_and_resumes(self, patient: Patient) -> None:
        state = apply_event(_awaiting_review(patient), Approved())

        review = state.audit_log.find("Human Review")
        assert review is not None
        assert review.status == AuditStatus.COMPLETED
        assert review.details == "Clinician approved the draft summary."
        assert state.status == AgentStatus.RUNNING

    def test_request_edits_records_text_and_opens_new_cycle(self, patient: Patient) -> None:
        state = apply_event(_awaiting_review(patient), EditsRequested(text="add allergy info"))

        review = state.audit_log.find("Human Review")
        assert review is not None
        assert review.status == AuditStatus.COMPLETED
        assert review.details == 'Clinician requested edits: "add allergy info"'
        assert state.status == AgentStatus.EDITING
        assert state.edit_request == "add allergy info"
        assert state.review_cycle == 1

    def test_regenerate_start_resumes_running(self, patient: Patient) -> None:
        state = _apply(
            _awaiting_review(patient),
            EditsRequested(text="shorter"),
            StepStarted(step="Regenerate Draft"),
        )

        assert state.status == AgentStatus.RUNNING
        assert state.audit_log.entries[-1].step == "Regenerate Draft"
        assert state.audit_log.entries[-1].cycle == 1

    @pytest.mark.parametrize("event", [Approved(), EditsRequested(text="x")])
    def test_review_actions_require_awaiting_approval(self, event) -> None:
        state = apply_event(WorkflowState.initial("P1"), GenerateRequested())
        with pytest.raises(InvalidTransitionError):
            apply_event(state, event)

    def test_blank_edit_request_is_rejected(self, patient: Patient) -> None:
        with pytest.raises(InvalidTransitionError, match="must not be empty"):
            apply_event(_awaiting_review(patient), EditsRequested(text="   "))

    def test_second_cycle_approval_hits_live_review_in_cycle_mode(self, patient: Patient) -> None:
        state = _apply(
            _awaiting_review(patient),
            EditsRequested(text="shorter"),
            StepStarted(step="Regenerate Draft"),
            StepSucceeded(step="Regenerate Draft", payload="D2"),
            Approved(),
        )

        reviews = [e for e in state.audit_log.entries if e.step == "Human Review"]
        assert [r.status for r in reviews] == [AuditStatus.COMPLETED, AuditStatus.COMPLETED]
        assert reviews[1].details == "Clinician approved the draft summary."

    def test_second_cycle_approval_hits_first_review_in_first_match_mode(self, patient: Patient) -> None:
        state = _apply(
            _awaiting_review(patient, match_mode="first_match"),
            EditsRequested(text="shorter"),
            StepStarted(step="Regenerate Draft"),
            StepSucceeded(step="Regenerate Draft", payload="D2"),
            Approved(),
        )

        reviews = [e for e in state.audit_log.entries if e.step == "Human Review"]
        assert reviews[0].details == "Clinician approved the draft summary."
        assert reviews[1].status == AuditStatus.HUMAN_INPUT
        assert state.status == AgentStatus.RUNNING
