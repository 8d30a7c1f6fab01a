"""Prompt construction for the generation collaborators."""

from __future__ import annotations

from discharge_scribe.models import Patient
from discharge_scribe.prompts.templates import (
    DRAFT_PROMPT,
    EDIT_INSTRUCTION,
    NONE_RECORDED,
    SYNTHESIS_PROMPT,
    SYSTEM_PROMPT,
)

__all__ = ["SYSTEM_PROMPT", "build_draft_prompt", "build_synthesis_prompt"]


def _demographics(patient: Patient) -> dict[str, str]:
    d = patient.demographics
    return {"name": d.name, "dob": d.dob, "nhs_number": d.nhs_number}


def build_synthesis_prompt(patient: Patient) -> str:
    labs = "\n".join(f"- {r.test}: {r.value} ({r.status})" for r in patient.lab_results)
    meds = "\n".join(
        f"- {m.medication} {m.dose} {m.frequency} [{m.status}]" for m in patient.medication_changes
    )
    return SYNTHESIS_PROMPT.format(
        **_demographics(patient),
        admission_reason=patient.admission_reason,
        clinical_notes=patient.clinical_notes,
        lab_results=labs or NONE_RECORDED,
        medication_changes=meds or NONE_RECORDED,
    )


def build_draft_prompt(notes: str, patient: Patient, edit_request: str = "") -> str:
    """Draft prompt; the edit instruction is appended only for regenerations."""
    prompt = DRAFT_PROMPT.format(**_demographics(patient), notes=notes)
    if edit_request.strip():
        prompt += EDIT_INSTRUCTION.format(edit_request=edit_request.strip())
    return prompt
