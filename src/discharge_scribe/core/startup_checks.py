"""Startup validation: fail-fast on critical misconfigurations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from discharge_scribe.exceptions import ConfigurationError

if TYPE_CHECKING:
    from discharge_scribe.core.config import AppSettings

log = logging.getLogger(__name__)

# Providers that use IAM/local auth and do not require an API key
_NO_KEY_PROVIDERS = frozenset({"bedrock", "ollama"})


def validate_settings(settings: AppSettings) -> None:
    """Validate application settings at startup. Raises ConfigurationError on fatal misconfig."""
    _check_api_key(settings)
    _check_delays(settings)
    _check_patients_file(settings)


def _check_api_key(settings: AppSettings) -> None:
    """Reject placeholder API keys for providers that need real ones."""
    if settings.llm.provider not in _NO_KEY_PROVIDERS:
        if settings.llm.api_key in ("no-key", ""):
            raise ConfigurationError(
                f"SCRIBE_LLM_API_KEY is required for provider '{settings.llm.provider}'. "
                f"Set it via environment variable or secrets manager."
            )


def _check_delays(settings: AppSettings) -> None:
    wf = settings.workflow
    for name in ("start_delay_seconds", "retrieval_delay_seconds", "finalize_delay_seconds"):
        if getattr(wf, name) < 0:
            raise ConfigurationError(f"SCRIBE_WORKFLOW_{name.upper()} must be >= 0.")


def _check_patients_file(settings: AppSettings) -> None:
    path = settings.data.patients_file
    if path is None:
        log.info("SCRIBE_DATA_PATIENTS_FILE not set; serving bundled sample patients.")
        return
    if not path.is_file():
        raise ConfigurationError(f"SCRIBE_DATA_PATIENTS_FILE does not exist: {path}")
