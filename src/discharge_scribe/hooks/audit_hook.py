"""Audit hook: logs every workflow event and its resulting status for traceability."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from discharge_scribe.workflow.events import WorkflowEvent
    from discharge_scribe.workflow.state import WorkflowState

log = logging.getLogger(__name__)


@runtime_checkable
class IWorkflowHook(Protocol):
    """Observer notified after the orchestrator applies an event."""

    def on_event(self, event: WorkflowEvent, state: WorkflowState) -> None:
        ...


class AuditTrailHook:
    """Mirrors the in-memory audit trail into the application log.

    Parameters
    ----------
    facility:
        Facility / ward dimension attached to every line for log filtering.
    """

    def __init__(self, facility: str = "") -> None:
        self._facility = facility

    def on_event(self, event: WorkflowEvent, state: WorkflowState) -> None:
        step = getattr(event, "step", "-")
        log.info(
            "workflow_event | kind=%s step=%s status=%s patient_id=%s cycle=%d facility=%s",
            event.kind,
            step,
            state.status.value,
            state.patient_id,
            state.review_cycle,
            self._facility,
        )
        if event.kind == "step_failed":
            log.warning("workflow_error | step=%s error=%s", step, state.error)
