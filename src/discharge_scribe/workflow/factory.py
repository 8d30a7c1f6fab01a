"""Factory wiring settings into a ready-to-run orchestrator."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Sequence

from discharge_scribe.gateway import create_patient_gateway
from discharge_scribe.generation.llm import LLMContentSynthesizer, LLMDraftGenerator
from discharge_scribe.hooks.audit_hook import AuditTrailHook
from discharge_scribe.providers.client import LLMClient
from discharge_scribe.workflow.orchestrator import WorkflowOrchestrator

if TYPE_CHECKING:
    from discharge_scribe.core.config import AppSettings
    from discharge_scribe.gateway.protocols import IPatientGateway
    from discharge_scribe.hooks.audit_hook import IWorkflowHook

log = logging.getLogger(__name__)


def create_orchestrator(
    settings: AppSettings,
    *,
    gateway: Optional[IPatientGateway] = None,
    hooks: Optional[Sequence[IWorkflowHook]] = None,
) -> WorkflowOrchestrator:
    """Build a ``WorkflowOrchestrator`` backed by the configured LLM and patient source.

    Args:
        settings: Application settings.
        gateway: Patient gateway override; defaults to ``settings.data``.
        hooks: Hook override; defaults to a single ``AuditTrailHook``.
    """
    client = LLMClient(settings.llm)
    log.debug("Using model %s via provider %s", client.model, settings.llm.provider)
    return WorkflowOrchestrator(
        gateway or create_patient_gateway(settings.data),
        LLMContentSynthesizer(client),
        LLMDraftGenerator(client),
        config=settings.workflow,
        hooks=[AuditTrailHook()] if hooks is None else hooks,
    )
