"""Orchestrator: drives one patient's discharge-summary workflow.

The orchestrator owns the current ``WorkflowState``. Every change goes
through ``apply_event``; after each action the orchestrator repeatedly asks
``next_step`` what is eligible and executes it, until nothing is (the run
finished or failed, or a clinician decision is pending).

Suspension points are the awaited latency sleeps and collaborator calls.
Actions that discard the run (``reset``/``select_patient``) bump a run
generation counter; events produced by a step that was suspended across
such a discard are dropped.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Optional, Sequence

from discharge_scribe.core.config import WorkflowConfig
from discharge_scribe.exceptions import PatientNotFoundError
from discharge_scribe.hooks.run_tracker import end_run, get_current_run, start_run, track_stage
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
from discharge_scribe.workflow.reducer import apply_event
from discharge_scribe.workflow.state import (
    FINALIZE_SUMMARY,
    GENERATE_DRAFT,
    REGENERATE_DRAFT,
    RETRIEVE_PATIENT_DATA,
    START_WORKFLOW,
    SYNTHESIZE_NOTES,
    AgentStatus,
    WorkflowState,
)
from discharge_scribe.workflow.steps import StepKind, next_step

if TYPE_CHECKING:
    from discharge_scribe.gateway.protocols import IPatientGateway
    from discharge_scribe.generation.interfaces import IContentSynthesizer, IDraftGenerator
    from discharge_scribe.hooks.audit_hook import IWorkflowHook

log = logging.getLogger(__name__)


def _describe(exc: Exception) -> str:
    return str(exc) or exc.__class__.__name__


class WorkflowOrchestrator:
    """Single-patient state machine with human-in-the-loop review.

    Args:
        gateway: Synchronous patient record lookup.
        synthesizer: Async clinical-note synthesis collaborator.
        drafter: Async discharge-summary drafting collaborator.
        config: Latency and audit settings. Defaults to ``WorkflowConfig()``.
        hooks: Observers notified after every applied event.
    """

    def __init__(
        self,
        gateway: IPatientGateway,
        synthesizer: IContentSynthesizer,
        drafter: IDraftGenerator,
        *,
        config: Optional[WorkflowConfig] = None,
        hooks: Sequence[IWorkflowHook] = (),
    ) -> None:
        self._gateway = gateway
        self._synthesizer = synthesizer
        self._drafter = drafter
        self._config = config or WorkflowConfig()
        self._hooks = list(hooks)
        self._state = WorkflowState.initial(match_mode=self._config.audit_match_mode)
        self._generation = 0
        self._active_pass: Optional[int] = None

    @property
    def state(self) -> WorkflowState:
        """Current snapshot. Treat as read-only; it is replaced on every event."""
        return self._state

    # ── Actions ──────────────────────────────────────────────────────

    def select_patient(self, patient_id: str) -> WorkflowState:
        """Discard any run and select ``patient_id``. Does not start the workflow."""
        self._discard_run()
        return self.dispatch(PatientSelected(patient_id=patient_id))

    def reset(self) -> WorkflowState:
        """Discard all progress, the selection and the audit log."""
        self._discard_run()
        return self.dispatch(Reset())

    async def generate(self) -> WorkflowState:
        """Start a fresh run for the selected patient and drive it to the next pause."""
        if not self._state.patient_id:
            log.warning("generate() called with no patient selected; ignoring")
            return self._state
        self.dispatch(GenerateRequested())
        self._discard_run()
        start_run(patient_id=self._state.patient_id or "")
        return await self.advance()

    async def approve(self) -> WorkflowState:
        """Accept the draft under review; the run proceeds to finalization."""
        self.dispatch(Approved())
        return await self.advance()

    async def request_edits(self, text: str) -> WorkflowState:
        """Send the draft back for regeneration with the clinician's instruction."""
        self.dispatch(EditsRequested(text=text))
        return await self.advance()

    # ── Engine ───────────────────────────────────────────────────────

    def dispatch(self, event: WorkflowEvent) -> WorkflowState:
        """Apply ``event`` and notify hooks. Does not run any step."""
        self._state = apply_event(self._state, event)
        for hook in self._hooks:
            hook.on_event(event, self._state)
        return self._state

    async def advance(self) -> WorkflowState:
        """Run eligible steps one at a time until none is eligible.

        Calling this again with no intervening state change is a no-op. A
        call made while another pass of the same run is suspended returns
        immediately; a pass belonging to a discarded run never blocks a new one.
        """
        generation = self._generation
        if self._active_pass == generation:
            return self._state

        self._active_pass = generation
        try:
            while generation == self._generation:
                step = next_step(self._state)
                if step is None:
                    break
                await self._execute(step, generation)
        finally:
            if self._active_pass == generation:
                self._active_pass = None

        if generation != self._generation:
            return self._state

        if self._state.is_terminal and get_current_run() is not None:
            analytics = end_run("completed" if self._state.status == AgentStatus.FINISHED else "failed")
            log.info(
                "Workflow %s for patient %s in %.0fms",
                self._state.status.value,
                self._state.patient_id,
                analytics.total_duration_ms if analytics else 0.0,
            )
        return self._state

    def _discard_run(self) -> None:
        self._generation += 1
        if get_current_run() is not None:
            end_run("discarded")

    def _emit(self, generation: int, event: WorkflowEvent) -> bool:
        """Dispatch ``event`` unless its run has been discarded meanwhile."""
        if generation != self._generation:
            log.info("Dropping %s from a discarded run", event.kind)
            return False
        self.dispatch(event)
        return True

    async def _execute(self, step: StepKind, generation: int) -> None:
        with track_stage(step.value) as stage:
            if step == StepKind.RETRIEVE:
                ok = await self._retrieve(generation)
            elif step == StepKind.SYNTHESIZE:
                ok = await self._synthesize(generation)
            elif step == StepKind.DRAFT:
                ok = await self._draft(generation)
            else:
                ok = await self._finalize(generation)

            if generation != self._generation:
                return
            if ok:
                stage.success_count += 1
            else:
                stage.error_count += 1
                run = get_current_run()
                if run is not None and self._state.error:
                    run.errors.append(f"{step.value}: {self._state.error}")

    # ── Step handlers ────────────────────────────────────────────────

    async def _retrieve(self, generation: int) -> bool:
        patient_id = self._state.patient_id or ""
        self._emit(generation, StepStarted(step=START_WORKFLOW))
        await asyncio.sleep(self._config.start_delay_seconds)

        if not self._emit(generation, StepStarted(step=RETRIEVE_PATIENT_DATA)):
            return False
        try:
            patient = self._gateway.get_patient(patient_id)
        except Exception as e:
            log.error("Patient lookup for %s failed: %s", patient_id, e)
            self._emit(generation, StepFailed(step=RETRIEVE_PATIENT_DATA, message=_describe(e)))
            return False
        await asyncio.sleep(self._config.retrieval_delay_seconds)

        if patient is None:
            message = str(PatientNotFoundError(patient_id))
            log.warning(message)
            self._emit(generation, StepFailed(step=RETRIEVE_PATIENT_DATA, message=message))
            return False
        return self._emit(generation, StepSucceeded(step=RETRIEVE_PATIENT_DATA, payload=patient))

    async def _synthesize(self, generation: int) -> bool:
        patient = self._state.patient_data
        assert patient is not None
        self._emit(generation, StepStarted(step=SYNTHESIZE_NOTES))
        try:
            notes = await self._synthesizer.synthesize(patient)
        except Exception as e:
            log.error("Synthesis failed for %s: %s", patient.id, e)
            self._emit(generation, StepFailed(step=SYNTHESIZE_NOTES, message=_describe(e)))
            return False
        if not notes or not notes.strip():
            log.error("Synthesis for %s returned no content", patient.id)
            self._emit(generation, StepFailed(step=SYNTHESIZE_NOTES, message="Synthesis returned no content."))
            return False
        return self._emit(generation, StepSucceeded(step=SYNTHESIZE_NOTES, payload=notes))

    async def _draft(self, generation: int) -> bool:
        snapshot = self._state
        assert snapshot.patient_data is not None
        step = REGENERATE_DRAFT if snapshot.status == AgentStatus.EDITING else GENERATE_DRAFT

        self._emit(generation, StepStarted(step=step))
        try:
            draft = await self._drafter.draft(
                snapshot.synthesized_notes,
                snapshot.patient_data,
                snapshot.edit_request,
            )
        except Exception as e:
            log.error("%s failed for %s: %s", step, snapshot.patient_data.id, e)
            self._emit(generation, StepFailed(step=step, message=_describe(e)))
            return False
        if not draft or not draft.strip():
            log.error("%s for %s returned no content", step, snapshot.patient_data.id)
            self._emit(generation, StepFailed(step=step, message="Draft generation returned no content."))
            return False
        return self._emit(generation, StepSucceeded(step=step, payload=draft))

    async def _finalize(self, generation: int) -> bool:
        self._emit(generation, StepStarted(step=FINALIZE_SUMMARY))
        await asyncio.sleep(self._config.finalize_delay_seconds)
        return self._emit(generation, StepSucceeded(step=FINALIZE_SUMMARY))
