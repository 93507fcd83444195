"""events command: display recorded notification events."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

console = Console()

_OPCODE_STYLE = {
    "Existing": "dim",
    "Update": "cyan",
    "Post": "green",
    "Error": "red",
}


@click.command("events")
@click.option("--pr", "pr_id", type=int, default=None, help="Filter by pull request id.")
@click.option("--opcode", "opcode_prefix", default=None, help="Filter by opcode prefix, e.g. Comment:: or Build::.")
@click.option("--limit", default=20, show_default=True, help="Maximum number of events to show.")
@click.pass_context
def events_cmd(ctx, pr_id: int | None, opcode_prefix: str | None, limit: int):
    """Show notification events recorded by the configured broadcaster.

    Only the sqlite broadcaster keeps events between runs. Add
    'events: sqlite' to .prstatus.yml to enable it.
    """
    from prstatus_events.noop import NoOpBroadcaster

    broadcaster = ctx.obj.get("broadcaster") if ctx.obj else None
    if broadcaster is None or isinstance(broadcaster, NoOpBroadcaster):
        raise click.UsageError("No event log configured. Add 'events: sqlite' to .prstatus.yml.")

    messages = broadcaster.list_events(opcode_prefix=opcode_prefix, pr_id=pr_id)
    if not messages:
        console.print("[yellow]No events recorded.[/yellow]")
        return

    # Most recent first, capped at --limit.
    messages = list(reversed(messages))[:limit]

    table = Table(title="Notification events", show_header=True, header_style="bold cyan")
    table.add_column("Emitted At", no_wrap=True)
    table.add_column("Event", no_wrap=True)
    table.add_column("PR", style="bold", no_wrap=True)
    table.add_column("Commit", no_wrap=True)
    table.add_column("Build", max_width=30)

    for m in messages:
        kind = m.opcode.rsplit("::", 1)[-1]
        style = _OPCODE_STYLE.get(kind, "white")
        pr = m.payload.get("pr", {})
        build = m.payload.get("build", {})
        table.add_row(
            m.emitted_at[:19].replace("T", " "),
            f"[{style}]{m.opcode}[/{style}]",
            f"#{pr.get('id', '?')}",
            (pr.get("from_commit") or "")[:7],
            f"{build.get('build_id', '')} {build.get('state', '')}".strip(),
        )

    console.print(table)
