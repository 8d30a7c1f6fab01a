"""Nested pydantic-settings configuration for the application.

Each sub-model reads its own ``SCRIBE_<GROUP>_*`` env vars::

    export SCRIBE_LLM_PROVIDER=openai
    export SCRIBE_LLM_MODEL=gpt-4o-mini
    export SCRIBE_WORKFLOW_RETRIEVAL_DELAY_SECONDS=0
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class LLMConfig(BaseSettings):
    """LLM backend configuration.

    Env vars use ``SCRIBE_LLM_`` prefix::

        export SCRIBE_LLM_PROVIDER=ollama
        export SCRIBE_LLM_MODEL=ollama/llama3.1
    """

    model_config = {"env_prefix": "SCRIBE_LLM_"}

    provider: Literal["openai", "anthropic", "gemini", "ollama", "bedrock", "litellm"] = "ollama"
    base_url: str = "http://localhost:11434"
    api_key: str = "no-key"
    model: str = "ollama/llama3.1"
    temperature: float = 0.2
    timeout: float = 120.0
    max_retries: int = Field(default=3, ge=1)
    retry_jitter_factor: float = 0.5
    retry_max_delay: float = 30.0


class WorkflowConfig(BaseSettings):
    """Orchestrator timing and audit bookkeeping.

    Env vars use ``SCRIBE_WORKFLOW_`` prefix. The delays simulate the
    latency of the record system; set them to ``0`` in tests.
    """

    model_config = {"env_prefix": "SCRIBE_WORKFLOW_"}

    start_delay_seconds: float = 0.5
    retrieval_delay_seconds: float = 1.0
    finalize_delay_seconds: float = 0.5
    audit_match_mode: Literal["cycle", "first_match"] = "cycle"


class DataConfig(BaseSettings):
    """Patient record source.

    Env vars use ``SCRIBE_DATA_`` prefix. When ``patients_file`` is unset the
    bundled sample patients are served.
    """

    model_config = {"env_prefix": "SCRIBE_DATA_"}

    patients_file: Optional[Path] = None


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Env vars use ``SCRIBE_OBSERVABILITY_`` prefix.
    """

    model_config = {"env_prefix": "SCRIBE_OBSERVABILITY_"}

    log_level: str = "INFO"
    json_logs: Optional[bool] = None  # None: JSON unless stderr is a TTY


class AppSettings(BaseSettings):
    """Top-level application settings aggregating all sub-configs."""

    llm: LLMConfig = LLMConfig()
    workflow: WorkflowConfig = WorkflowConfig()
    data: DataConfig = DataConfig()
    observability: ObservabilityConfig = ObservabilityConfig()
