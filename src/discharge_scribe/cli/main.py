"""CLI for discharge-scribe: list patients and run the supervised workflow."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from discharge_scribe.core.config import AppSettings, DataConfig, LLMConfig
from discharge_scribe.core.startup_checks import validate_settings
from discharge_scribe.exceptions import ConfigurationError, InvalidTransitionError
from discharge_scribe.gateway import create_patient_gateway
from discharge_scribe.hooks.logging_config import setup_logging
from discharge_scribe.workflow.audit import AuditStatus
from discharge_scribe.workflow.factory import create_orchestrator
from discharge_scribe.workflow.orchestrator import WorkflowOrchestrator
from discharge_scribe.workflow.state import ALL_WORKFLOW_STEPS, AgentStatus, WorkflowState

app = typer.Typer(name="discharge-scribe", help="Supervised discharge-summary generation")
console = Console()

_STATUS_STYLE = {
    AuditStatus.PENDING: "dim",
    AuditStatus.IN_PROGRESS: "yellow",
    AuditStatus.COMPLETED: "green",
    AuditStatus.ERROR: "bold red",
    AuditStatus.HUMAN_INPUT: "cyan",
}


def _build_settings(
    model: Optional[str],
    api_key: Optional[str],
    patients_file: Optional[Path],
    no_delay: bool = False,
) -> AppSettings:
    """Build settings, overriding env defaults with CLI flags."""
    settings = AppSettings()
    llm_overrides: dict = {}
    if model:
        llm_overrides["model"] = model
    if api_key:
        llm_overrides["api_key"] = api_key
    if llm_overrides:
        settings.llm = LLMConfig(**{**settings.llm.model_dump(), **llm_overrides})
    if patients_file:
        settings.data = DataConfig(patients_file=patients_file)
    if no_delay:
        settings.workflow = settings.workflow.model_copy(
            update={
                "start_delay_seconds": 0.0,
                "retrieval_delay_seconds": 0.0,
                "finalize_delay_seconds": 0.0,
            }
        )
    return settings


def _render_audit(state: WorkflowState) -> Table:
    """Audit entries in order, followed by display steps not yet started."""
    table = Table(title=f"Workflow: {state.patient_id or '-'} [{state.status.value}]")
    table.add_column("Step", style="bold")
    table.add_column("Status")
    table.add_column("Details", max_width=70)
    table.add_column("Time")

    for entry in state.audit_log.entries:
        style = _STATUS_STYLE[entry.status]
        table.add_row(
            entry.step,
            f"[{style}]{entry.status.value}[/{style}]",
            entry.details,
            entry.timestamp.strftime("%H:%M:%S"),
        )
    for step in ALL_WORKFLOW_STEPS:
        if not state.audit_log.has_started(step):
            table.add_row(step, "[dim]pending[/dim]", "", "")
    return table


async def _drive(
    orchestrator: WorkflowOrchestrator,
    patient_id: str,
    edits: List[str],
    auto_approve: bool,
) -> WorkflowState:
    orchestrator.select_patient(patient_id)
    state = await orchestrator.generate()
    pending_edits = list(edits)

    while state.status == AgentStatus.AWAITING_APPROVAL:
        console.print(_render_audit(state))
        console.print(Panel(state.draft_summary, title="Draft discharge summary"))

        if pending_edits:
            text = pending_edits.pop(0)
            console.print(f"[cyan]Requesting edits:[/cyan] {text}")
            state = await orchestrator.request_edits(text)
            continue
        if auto_approve:
            state = await orchestrator.approve()
            continue

        choice = typer.prompt("Approve draft? [a]pprove / [e]dit / [q]uit", default="a").strip().lower()
        if choice.startswith("a"):
            state = await orchestrator.approve()
        elif choice.startswith("e"):
            text = typer.prompt("Describe the edits", default="", show_default=False)
            if not text.strip():
                console.print("[yellow]Edit request must not be empty.[/yellow]")
                continue
            state = await orchestrator.request_edits(text)
        else:
            console.print("[yellow]Review abandoned; draft not finalized.[/yellow]")
            break

    return state


@app.command()
def patients(
    patients_file: Optional[Path] = typer.Option(None, "--patients-file", help="JSON file of patient records"),
) -> None:
    """List the patients available to the workflow."""
    settings = _build_settings(None, None, patients_file)
    gateway = create_patient_gateway(settings.data)

    table = Table(title="Patients")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("DOB")
    table.add_column("Admission reason", max_width=60)
    for p in gateway.list_patients():
        table.add_row(p.id, p.demographics.name, p.demographics.dob, p.admission_reason)
    console.print(table)


@app.command()
def run(
    patient_id: str = typer.Argument(..., help="Patient identifier"),
    edit: Optional[List[str]] = typer.Option(
        None, "--edit", "-e", help="Edit request applied at a review (repeatable, in order)"
    ),
    auto_approve: bool = typer.Option(False, "--auto-approve", help="Approve without prompting"),
    output: Optional[Path] = typer.Option(None, help="Write the final summary to this file"),
    model: Optional[str] = typer.Option(None, "--model", help="LiteLLM model name"),
    api_key: Optional[str] = typer.Option(None, "--api-key", help="LLM API key"),
    patients_file: Optional[Path] = typer.Option(None, "--patients-file", help="JSON file of patient records"),
    no_delay: bool = typer.Option(False, "--no-delay", help="Skip simulated record-system latency"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Generate a discharge summary for PATIENT_ID with clinician review."""
    settings = _build_settings(model, api_key, patients_file, no_delay)
    if verbose:
        settings.observability.log_level = "DEBUG"
    setup_logging(settings.observability)

    try:
        validate_settings(settings)
    except ConfigurationError as e:
        console.print(f"[bold red]Configuration error:[/bold red] {e}")
        raise typer.Exit(code=2)

    edits = edit or []
    if any(not text.strip() for text in edits):
        console.print("[bold red]Invalid option:[/bold red] --edit must not be empty.")
        raise typer.Exit(code=2)

    orchestrator = create_orchestrator(settings)
    try:
        state = asyncio.run(_drive(orchestrator, patient_id, edits, auto_approve))
    except InvalidTransitionError as e:
        console.print(f"[bold red]Workflow error:[/bold red] {e}")
        raise typer.Exit(code=2)

    console.print(_render_audit(state))

    if state.status == AgentStatus.ERROR:
        console.print(f"[bold red]Error:[/bold red] {state.error}")
        raise typer.Exit(code=1)

    if state.status == AgentStatus.FINISHED:
        console.print(Panel(state.final_summary, title="Final discharge summary", style="green"))
        if output:
            output.write_text(state.final_summary, encoding="utf-8")
            console.print(f"[green]Summary saved to {output}[/green]")


if __name__ == "__main__":
    app()
