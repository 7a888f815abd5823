"""Typer CLI entrypoint for the allocation engine."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import typer

from .config import read_yaml
from .container import create_container
from .errors import AllocationError, ReservationConflict
from .filters import MatchFilters
from .logging import configure_logging
from .repository import StateLoadError, export_matches_csv
from .schemas import MatchScore
from .schemas.config import load_config
from .service import AllocationService

app = typer.Typer(help="Candidate-to-role matching and allocation CLI.")

StateOption = typer.Option(..., dir_okay=False, help="Allocation state JSON path.")
ConfigOption = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path.")
LogLevelOption = typer.Option("WARNING", help="Log level for structured logging.")


def _build_service(state: Path, config: Optional[Path], log_level: str) -> AllocationService:
    configure_logging(log_level)
    settings: dict[str, Any] = {}
    if config:
        try:
            settings = load_config(read_yaml(config)).to_settings()
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="'--config'") from exc
    container = create_container(settings=settings, state_path=state)
    try:
        return container.service()
    except (StateLoadError, AllocationError) as exc:
        raise typer.BadParameter(str(exc), param_hint="'--state'") from exc


def _echo_matches(matches: list[MatchScore]) -> None:
    typer.echo(
        json.dumps(
            [match.model_dump(mode="json") for match in matches],
            ensure_ascii=False,
            indent=2,
        )
    )


@app.command("rank-role")
def rank_role(
    role_id: str = typer.Argument(..., help="Role to rank candidates for."),
    state: Path = StateOption,
    limit: Optional[int] = typer.Option(None, min=1, help="Number of matches to return."),
    config: Optional[Path] = ConfigOption,
    log_level: str = LogLevelOption,
) -> None:
    """Print the best candidates for a role."""
    service = _build_service(state, config, log_level)
    try:
        _echo_matches(service.top_matches_for_role(role_id, limit))
    except AllocationError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)


@app.command("rank-candidate")
def rank_candidate(
    candidate_id: str = typer.Argument(..., help="Candidate to rank roles for."),
    state: Path = StateOption,
    limit: Optional[int] = typer.Option(None, min=1, help="Number of matches to return."),
    config: Optional[Path] = ConfigOption,
    log_level: str = LogLevelOption,
) -> None:
    """Print the best roles for a candidate."""
    service = _build_service(state, config, log_level)
    try:
        _echo_matches(service.top_matches_for_candidate(candidate_id, limit))
    except AllocationError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)


@app.command()
def shortlist(
    state: Path = StateOption,
    view: str = typer.Option("by-role", help="by-role or by-candidate."),
    country: Optional[str] = typer.Option(None),
    function: Optional[str] = typer.Option(None),
    level: Optional[str] = typer.Option(None),
    language: Optional[str] = typer.Option(None),
    stale_in_pipe: Optional[int] = typer.Option(None, min=0),
    old_role: Optional[int] = typer.Option(None, min=0),
    limit: Optional[int] = typer.Option(None, min=1),
    config: Optional[Path] = ConfigOption,
    log_level: str = LogLevelOption,
) -> None:
    """Rank every filtered role (or candidate) and print the combined shortlist."""
    if view not in ("by-role", "by-candidate"):
        raise typer.BadParameter("view must be by-role or by-candidate", param_hint="'--view'")
    service = _build_service(state, config, log_level)
    filters = MatchFilters(
        country=country,
        function=function,
        level=level,
        language=language,
        stale_in_pipe=stale_in_pipe,
        old_role=old_role,
    )
    _echo_matches(service.generate_shortlist(view, filters=filters, limit=limit))  # type: ignore[arg-type]


@app.command()
def batch(
    state: Path = StateOption,
    view: str = typer.Option("by-role", help="by-role or by-candidate."),
    limit: Optional[int] = typer.Option(None, min=1),
    config: Optional[Path] = ConfigOption,
    log_level: str = LogLevelOption,
) -> None:
    """Snapshot a fresh shortlist as the current batch."""
    if view not in ("by-role", "by-candidate"):
        raise typer.BadParameter("view must be by-role or by-candidate", param_hint="'--view'")
    service = _build_service(state, config, log_level)
    created = service.create_batch(service.generate_shortlist(view, limit=limit))  # type: ignore[arg-type]
    service.save()
    typer.echo(f"Created batch {created.batch_id} with {len(created.matches)} matches.")


@app.command()
def send(
    state: Path = StateOption,
    batch_id: Optional[str] = typer.Option(None, help="Batch to send; defaults to the current batch."),
    config: Optional[Path] = ConfigOption,
    log_level: str = LogLevelOption,
) -> None:
    """Mark a batch as sent to approvers."""
    service = _build_service(state, config, log_level)
    try:
        sent = service.send_batch(batch_id)
    except (AllocationError, KeyError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)
    service.save()
    typer.echo(f"Sent batch {sent.batch_id} with {len(sent.matches)} matches.")


@app.command()
def reserve(
    candidate_id: str = typer.Argument(...),
    role_id: str = typer.Argument(...),
    state: Path = StateOption,
    actor: str = typer.Option("manager", help="Approver committing the reservation."),
    config: Optional[Path] = ConfigOption,
    log_level: str = LogLevelOption,
) -> None:
    """Reserve a candidate for a role."""
    service = _build_service(state, config, log_level)
    try:
        service.select_candidate(candidate_id, role_id, actor)
    except ReservationConflict as exc:
        typer.echo(
            f"Conflict: {candidate_id} is already reserved for {exc.existing_role_id}. "
            "Release it first to reassign.",
            err=True,
        )
        raise typer.Exit(code=2)
    except AllocationError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)
    service.save()
    typer.echo(f"Reserved {candidate_id} for {role_id}.")


@app.command()
def release(
    candidate_id: str = typer.Argument(...),
    role_id: str = typer.Argument(...),
    state: Path = StateOption,
    config: Optional[Path] = ConfigOption,
    log_level: str = LogLevelOption,
) -> None:
    """Release a reservation; succeeds even when none exists."""
    service = _build_service(state, config, log_level)
    released = service.release(candidate_id, role_id)
    service.save()
    typer.echo("Released." if released else "No reservation to release.")


@app.command()
def export(
    state: Path = StateOption,
    output: Path = typer.Option(..., dir_okay=False, resolve_path=True, help="CSV output path."),
    config: Optional[Path] = ConfigOption,
    log_level: str = LogLevelOption,
) -> None:
    """Export the current shortlist (or a fresh by-role one) as CSV."""
    service = _build_service(state, config, log_level)
    matches = service.shortlist if service.coordinator.current else service.generate_shortlist()
    snapshot = service.snapshot()
    rows = export_matches_csv(matches, snapshot.roles, snapshot.candidates, output)
    typer.echo(f"Exported {rows} matches to {output}.")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
