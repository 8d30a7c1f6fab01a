"""Pydantic data models for the patient record.

The orchestrator treats a ``Patient`` as opaque input for the generation
collaborators; only the demographic name is read for audit messages.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class Demographics(BaseModel):
    name: str
    dob: str
    nhs_number: str


class LabResult(BaseModel):
    test: str
    value: str
    status: str


class MedicationChange(BaseModel):
    medication: str
    dose: str
    frequency: str
    status: str  # e.g. "new", "stopped", "changed", "continued"


class Patient(BaseModel):
    """A single inpatient record as served by the patient gateway."""

    id: str
    demographics: Demographics
    admission_reason: str
    clinical_notes: str
    lab_results: list[LabResult] = Field(default_factory=list)
    medication_changes: list[MedicationChange] = Field(default_factory=list)

    @property
    def display_name(self) -> str:
        return self.demographics.name
