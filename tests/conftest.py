"""Shared fixtures for discharge-scribe tests."""

from __future__ import annotations

from typing import Callable, Optional

import pytest

from discharge_scribe.core.config import WorkflowConfig
from discharge_scribe.gateway.memory_gateway import InMemoryPatientGateway
from discharge_scribe.generation.interfaces import IContentSynthesizer, IDraftGenerator
from discharge_scribe.hooks.run_tracker import end_run
from discharge_scribe.models import Demographics, LabResult, MedicationChange, Patient
from discharge_scribe.workflow.orchestrator import WorkflowOrchestrator
from tests.fakes.fake_collaborators import FakeDraftGenerator, FakeSynthesizer


@pytest.fixture(autouse=True)
def _no_active_run():
    """Each test starts and ends without an active run tracker."""
    end_run()
    yield
    end_run()


@pytest.fixture
def patient() -> Patient:
    return Patient(
        id="P1",
        demographics=Demographics(name="Ada Lovelace", dob="1955-12-10", nhs_number="123 456 7890"),
        admission_reason="Cellulitis of the left lower leg.",
        clinical_notes="IV flucloxacillin for 3 days, erythema receding. Switched to oral.",
        lab_results=[LabResult(test="CRP", value="96 mg/L", status="high")],
        medication_changes=[
            MedicationChange(medication="Flucloxacillin", dose="1 g", frequency="QDS", status="new"),
        ],
    )


@pytest.fixture
def gateway(patient: Patient) -> InMemoryPatientGateway:
    return InMemoryPatientGateway([patient])


@pytest.fixture
def fast_config() -> WorkflowConfig:
    """Zero simulated latency."""
    return WorkflowConfig(
        start_delay_seconds=0.0,
        retrieval_delay_seconds=0.0,
        finalize_delay_seconds=0.0,
    )


@pytest.fixture
def make_orchestrator(
    gateway: InMemoryPatientGateway,
    fast_config: WorkflowConfig,
) -> Callable[..., WorkflowOrchestrator]:
    """Factory for orchestrators wired to fakes; override any collaborator per test."""

    def _make(
        synthesizer: Optional[IContentSynthesizer] = None,
        drafter: Optional[IDraftGenerator] = None,
        **kwargs,
    ) -> WorkflowOrchestrator:
        kwargs.setdefault("config", fast_config)
        return WorkflowOrchestrator(
            kwargs.pop("gateway", gateway),
            synthesizer or FakeSynthesizer(),
            drafter or FakeDraftGenerator(),
            **kwargs,
        )

    return _make
