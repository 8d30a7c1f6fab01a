"""Bundled demo inpatients served when no patient file is configured."""

from __future__ import annotations

from discharge_scribe.models import Demographics, LabResult, MedicationChange, Patient


def sample_patients() -> list[Patient]:
    return [
        Patient(
            id="P001",
            demographics=Demographics(name="Eleanor Vance", dob="1948-03-12", nhs_number="485 777 3456"),
            admission_reason="Community-acquired pneumonia with type 1 respiratory failure.",
            clinical_notes=(
                "Day 1: Admitted via ED with 4 days of productive cough, fever 38.9C, SpO2 88% on air. "
                "CXR right lower lobe consolidation. CURB-65 score 2. Started IV co-amoxiclav and "
                "clarithromycin, 2L O2 via nasal cannulae.\n"
                "Day 3: Afebrile for 24h, weaned to room air, SpO2 95%. Switched to oral antibiotics.\n"
                "Day 5: Mobilising independently with physiotherapy. Eating and drinking well. "
                "Fit for discharge home with daughter's support."
            ),
            lab_results=[
                LabResult(test="CRP", value="187 mg/L", status="high"),
                LabResult(test="WCC", value="15.2 x10^9/L", status="high"),
                LabResult(test="CRP (day 5)", value="32 mg/L", status="improving"),
                LabResult(test="Creatinine", value="88 umol/L", status="normal"),
            ],
            medication_changes=[
                MedicationChange(
                    medication="Amoxicillin", dose="500 mg", frequency="TDS for 2 more days", status="new"
                ),
                MedicationChange(medication="Ramipril", dose="5 mg", frequency="OD", status="continued"),
            ],
        ),
        Patient(
            id="P002",
            demographics=Demographics(name="Rajesh Kumar", dob="1961-11-02", nhs_number="943 476 5919"),
            admission_reason="Non-ST elevation myocardial infarction.",
            clinical_notes=(
                "Presented with 2 hours of central crushing chest pain radiating to left arm. "
                "ECG: ST depression V4-V6. Troponin rise 48 -> 1240 ng/L. Loaded with aspirin and "
                "ticagrelor, started fondaparinux. Angiography day 2: 90% proximal LAD stenosis, "
                "drug-eluting stent placed, good result. Echo: LVEF 50%, mild anterior hypokinesia. "
                "Cardiac rehab referral made. No further pain post-PCI."
            ),
            lab_results=[
                LabResult(test="High-sensitivity troponin T", value="1240 ng/L", status="high"),
                LabResult(test="HbA1c", value="52 mmol/mol", status="high"),
                LabResult(test="Total cholesterol", value="6.4 mmol/L", status="high"),
                LabResult(test="Potassium", value="4.2 mmol/L", status="normal"),
            ],
            medication_changes=[
                MedicationChange(medication="Aspirin", dose="75 mg", frequency="OD lifelong", status="new"),
                MedicationChange(medication="Ticagrelor", dose="90 mg", frequency="BD for 12 months", status="new"),
                MedicationChange(medication="Atorvastatin", dose="80 mg", frequency="ON", status="new"),
                MedicationChange(medication="Bisoprolol", dose="2.5 mg", frequency="OD", status="new"),
                MedicationChange(medication="Amlodipine", dose="5 mg", frequency="OD", status="stopped"),
            ],
        ),
        Patient(
            id="P003",
            demographics=Demographics(name="Grace O'Neill", dob="1990-07-25", nhs_number="401 023 2137"),
            admission_reason="Diabetic ketoacidosis precipitated by gastroenteritis.",
            clinical_notes=(
                "Known type 1 diabetes. 48h vomiting and diarrhoea, stopped insulin as not eating. "
                "pH 7.12, bicarbonate 9, ketones 5.8. Treated per DKA protocol with fixed-rate insulin "
                "infusion and IV fluids. Ketones cleared at 18h; converted to basal-bolus regimen. "
                "Seen by diabetes specialist nurse: sick-day rules reinforced."
            ),
            lab_results=[
                LabResult(test="Venous pH", value="7.12", status="low"),
                LabResult(test="Blood ketones", value="5.8 mmol/L", status="high"),
                LabResult(test="Blood ketones (18h)", value="0.4 mmol/L", status="normal"),
            ],
            medication_changes=[
                MedicationChange(medication="Insulin glargine", dose="22 units", frequency="ON", status="changed"),
                MedicationChange(
                    medication="Insulin aspart", dose="per carbohydrate ratio", frequency="with meals",
                    status="continued",
                ),
            ],
        ),
    ]
