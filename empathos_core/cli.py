"""CLI for the EmpathOS state store (Typer + Rich)."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Annotated, Optional

import typer
from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from empathos_core.config import EmpathosSettings, get_settings
from empathos_core.emotional_state import EmotionalState, utcnow
from empathos_core.errors import StoreError
from empathos_core.store import EmotionalStateStore, create_store

app = typer.Typer(
    name="empathos",
    help="Record and inspect emotional-state samples.",
    no_args_is_help=True,
)
console = Console()


def _load_settings() -> EmpathosSettings:
    """Load settings, calling dotenv first for local runs."""
    load_dotenv()
    return get_settings()


def _open_store() -> EmotionalStateStore:
    try:
        return create_store(_load_settings())
    except StoreError as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        raise typer.Exit(1)


def _fmt(value: float) -> str:
    return f"{value:.2f}"


def _print_state(state: EmotionalState) -> None:
    table = Table(show_header=False, box=None)
    table.add_column(style="bold")
    table.add_column()
    table.add_row("timestamp", state.timestamp.isoformat())
    for name in ("focus", "stress", "confusion", "flow", "valence", "arousal"):
        table.add_row(name, _fmt(getattr(state, name)))
    table.add_row("context", state.context or "-")
    console.print(table)


# ── init ──────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Create the history database if it does not exist."""
    store = _open_store()
    try:
        console.print(f"[green]OK:[/] history stored at {_load_settings().database.location()}")
    finally:
        store.close()


# ── record ────────────────────────────────────────────────────────────


@app.command()
def record(
    focus: Annotated[Optional[float], typer.Option(help="0.0 - 1.0")] = None,
    stress: Annotated[Optional[float], typer.Option(help="0.0 - 1.0")] = None,
    confusion: Annotated[Optional[float], typer.Option(help="0.0 - 1.0")] = None,
    flow: Annotated[Optional[float], typer.Option(help="0.0 - 1.0")] = None,
    valence: Annotated[Optional[float], typer.Option(help="-1.0 (unpleasant) to 1.0 (pleasant)")] = None,
    arousal: Annotated[Optional[float], typer.Option(help="0.0 (calm) to 1.0 (excited)")] = None,
    context: Annotated[Optional[str], typer.Option(help="Originating activity or application")] = None,
    timestamp: Annotated[Optional[datetime], typer.Option(help="Sample time (default: now, UTC)")] = None,
    payload: Annotated[Optional[str], typer.Option("--json", help="Full state as JSON")] = None,
) -> None:
    """Record a new emotional state. Unspecified metrics take the default values."""
    try:
        if payload is not None:
            state = EmotionalState.model_validate_json(payload)
        else:
            overrides = {
                "focus": focus,
                "stress": stress,
                "confusion": confusion,
                "flow": flow,
                "valence": valence,
                "arousal": arousal,
                "context": context,
            }
            base = EmotionalState.default(timestamp or utcnow())
            state = EmotionalState.model_validate(
                {**base.model_dump(), **{k: v for k, v in overrides.items() if v is not None}}
            )
    except ValidationError as e:
        console.print(f"[red]Error:[/] invalid state: {escape(str(e))}")
        raise typer.Exit(1)

    if not state.in_range():
        console.print("[yellow]Warning:[/] some metrics are outside their documented range")

    store = _open_store()
    try:
        record_id = store.set_current(state)
    except StoreError as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        raise typer.Exit(1)
    finally:
        store.close()

    console.print(f"[green]OK:[/] recorded state #{record_id}")


# ── history ───────────────────────────────────────────────────────────


@app.command()
def history(
    limit: Annotated[Optional[int], typer.Option(min=0, help="Maximum number of samples")] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print JSON instead of a table")] = False,
) -> None:
    """Show the most recent emotional states, newest first."""
    if limit is None:
        limit = _load_settings().store.history_limit

    store = _open_store()
    try:
        states = store.get_history(limit)
    except StoreError as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        raise typer.Exit(1)
    finally:
        store.close()

    if as_json:
        typer.echo(json.dumps([s.model_dump(mode="json") for s in states]))
        return

    if not states:
        console.print("No emotional states recorded yet.")
        return

    table = Table(title=f"Emotional history ({len(states)})")
    table.add_column("Timestamp")
    for name in ("Focus", "Stress", "Confusion", "Flow", "Valence", "Arousal"):
        table.add_column(name, justify="right")
    table.add_column("Context")
    for s in states:
        table.add_row(
            s.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
            _fmt(s.focus),
            _fmt(s.stress),
            _fmt(s.confusion),
            _fmt(s.flow),
            _fmt(s.valence),
            _fmt(s.arousal),
            s.context or "",
        )
    console.print(table)


# ── current ───────────────────────────────────────────────────────────


@app.command()
def current(
    as_json: Annotated[bool, typer.Option("--json", help="Print JSON instead of a table")] = False,
) -> None:
    """Show the current state of this process (the default until something is recorded)."""
    store = _open_store()
    try:
        state = store.get_current()
    except StoreError as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        raise typer.Exit(1)
    finally:
        store.close()

    if as_json:
        typer.echo(state.model_dump_json())
        return
    _print_state(state)


if __name__ == "__main__":
    app()
