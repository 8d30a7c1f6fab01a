"""Events accepted by the workflow reducer.

User actions (selection, reset, generate, review decisions) and step
lifecycle notifications share one event vocabulary so that every state
change goes through ``apply_event``.
"""

from __future__ import annotations

from typing import Literal, Optional, Union

from pydantic import BaseModel

from discharge_scribe.models import Patient


class PatientSelected(BaseModel):
    kind: Literal["patient_selected"] = "patient_selected"
    patient_id: str


class Reset(BaseModel):
    kind: Literal["reset"] = "reset"


class GenerateRequested(BaseModel):
    kind: Literal["generate_requested"] = "generate_requested"


class StepStarted(BaseModel):
    """An audit step has begun; ``step`` is the audit step name."""

    kind: Literal["step_started"] = "step_started"
    step: str


class StepSucceeded(BaseModel):
    """An audit step finished; ``payload`` is the step's product, if any."""

    kind: Literal["step_succeeded"] = "step_succeeded"
    step: str
    payload: Optional[Union[Patient, str]] = None


class StepFailed(BaseModel):
    kind: Literal["step_failed"] = "step_failed"
    step: str
    message: str


class Approved(BaseModel):
    kind: Literal["approved"] = "approved"


class EditsRequested(BaseModel):
    kind: Literal["edits_requested"] = "edits_requested"
    text: str


WorkflowEvent = Union[
    PatientSelected,
    Reset,
    GenerateRequested,
    StepStarted,
    StepSucceeded,
    StepFailed,
    Approved,
    EditsRequested,
]
