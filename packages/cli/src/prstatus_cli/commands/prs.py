"""prs command: list open pull requests."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from prstatus_cli.commands.common import notifier_from_context
from prstatus_core.errors import PrStatusError

console = Console()


@click.command("prs")
@click.pass_context
def prs_cmd(ctx):
    """List open pull requests on the configured repository."""
    notifier = notifier_from_context(ctx)

    try:
        prs = notifier.get_pr_list()
    except PrStatusError as e:
        raise click.ClickException(str(e))

    if not prs:
        console.print("[yellow]No open pull requests found.[/yellow]")
        return

    table = Table(title="Open pull requests", show_header=True, header_style="bold cyan")
    table.add_column("PR", style="bold", no_wrap=True)
    table.add_column("Title", max_width=40)
    table.add_column("Branch", max_width=30)
    table.add_column("Commit", no_wrap=True)
    table.add_column("Author", max_width=24)

    for pr in prs:
        table.add_row(
            f"#{pr.id}",
            pr.title[:40],
            pr.from_ref,
            pr.from_commit[:7],
            pr.author.name,
        )

    console.print(table)
