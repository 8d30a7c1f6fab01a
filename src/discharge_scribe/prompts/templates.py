"""Discharge-summary prompt templates.

Templates use ``str.format`` placeholders; literal braces are doubled.
"""

from __future__ import annotations

SYSTEM_PROMPT = """You are a clinical documentation assistant working for an NHS hospital \
ward team. You write concise, accurate clinical prose for doctors and GPs.
Use only information present in the patient record. Never invent findings, \
results, doses or follow-up arrangements. If something is missing, say so."""

SYNTHESIS_PROMPT = """Synthesize the following inpatient record into structured clinical notes.

Patient: {name} (DOB {dob}, NHS number {nhs_number})
Reason for admission: {admission_reason}

Clinical notes:
{clinical_notes}

Laboratory results:
{lab_results}

Medication changes:
{medication_changes}

Organise the notes under these headings: Presenting Complaint, Hospital Course, \
Key Investigations, Medication Changes, Condition at Discharge.
Return plain text only."""

DRAFT_PROMPT = """Write a discharge summary for the patient's GP from the synthesized notes below.

Patient: {name} (DOB {dob}, NHS number {nhs_number})

Synthesized notes:
{notes}

Use these sections: Diagnosis, Summary of Admission, Investigations, \
Medications on Discharge (new, changed and stopped, with reasons), \
Follow-up and Actions for GP.
Return plain text only."""

EDIT_INSTRUCTION = """

The reviewing clinician has requested the following changes. Apply them \
to the summary while keeping everything else accurate:
{edit_request}"""

NONE_RECORDED = "None recorded."
