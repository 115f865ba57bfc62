"""History command: list recorded telemetry events."""

from datetime import datetime

import typer

from ..app import app, console, get_json_mode
from ..utils import Output


@app.command("history")
def history_command(
    days: int = typer.Option(7, "--days", "-d", help="Days to look back (0 = all)"),
    event: str | None = typer.Option(
        None, "--event", "-e", help="Only show this event (e.g. run_failed)"
    ),
    limit: int = typer.Option(50, "--limit", "-n", help="Max events to show"),
):
    """
    Show recent runs from the local telemetry ledger.

    Example:
        asmigrate history
        asmigrate history --event run_failed --days 30
    """
    from ...config import get_config
    from ...telemetry import LedgerTelemetrySink

    out = Output(console=console, json_mode=get_json_mode())
    config = get_config()
    ledger = LedgerTelemetrySink(config.ledger_path_resolved)

    events = ledger.query_events(days=days or None, event=event, limit=limit)
    if not events:
        out.text("[dim]No telemetry events recorded.[/dim]")
        out.set_data("events", [])
        raise typer.Exit(out.finish())

    rows = []
    for ev in events:
        when = datetime.fromtimestamp(ev.timestamp).strftime("%Y-%m-%d %H:%M:%S")
        detail = ", ".join(f"{k}={v}" for k, v in ev.properties.items())
        rows.append([when, ev.run_id, ev.event, detail])

    out.table("Telemetry Events", ["Time", "Run", "Event", "Details"], rows, data_key="events")
    raise typer.Exit(out.finish())
