"""notify command: report one build lifecycle event for a pull request."""

from __future__ import annotations

import click
from rich.console import Console

from prstatus_cli.commands.common import notifier_from_context
from prstatus_core.build_state import details_for_event
from prstatus_core.errors import NotificationError, PrStatusError, StatusPostError
from prstatus_core.models import LifecycleEvent, OutcomeKind

console = Console()

_OUTCOME_STYLE = {
    OutcomeKind.EXISTING: "dim",
    OutcomeKind.UPDATE: "cyan",
    OutcomeKind.POST: "green",
}


@click.command("notify")
@click.argument("event", type=click.Choice([e.value for e in LifecycleEvent]))
@click.option("--pr", "pr_id", type=int, required=True, help="Pull request id (number).")
@click.option("--build-key", required=True, help="Build identifier, used as the build-status key.")
@click.option("--run-id", type=int, required=True, help="Build run number.")
@click.option("--url", "build_url", required=True, help="Web URL of the build.")
@click.option("--message", default=None, help="Status message shown after a finished build.")
@click.option(
    "--post-build/--no-post-build",
    "post_build",
    default=None,
    help="Also post a native build status for the commit. Overrides config file.",
)
@click.pass_context
def notify_cmd(
    ctx,
    event: str,
    pr_id: int,
    build_key: str,
    run_id: int,
    build_url: str,
    message: str | None,
    post_build: bool | None,
):
    """Create or update the build status comment on a pull request.

    EVENT is one of queued, running, success or failure. Deliver events for
    the same pull request one at a time: concurrent calls for one commit can
    produce duplicate comments.
    """
    notifier = notifier_from_context(ctx, overrides={"post_build": post_build})

    try:
        pr = next((p for p in notifier.get_pr_list() if p.id == pr_id), None)
    except PrStatusError as e:
        raise click.ClickException(str(e))
    if pr is None:
        raise click.ClickException(f"Pull request #{pr_id} is not open.")

    lifecycle = LifecycleEvent(event)
    build = details_for_event(lifecycle, run_id=run_id, build_key=build_key, web_url=build_url, status_text=message)

    try:
        outcome = notifier.notify(lifecycle, pr, build)
    except StatusPostError as e:
        console.print(f"[yellow]Comment {e.outcome.kind.value.lower()} on PR #{pr.id}, but:[/yellow]")
        raise click.ClickException(str(e))
    except NotificationError as e:
        raise click.ClickException(str(e))

    style = _OUTCOME_STYLE.get(outcome.kind, "white")
    console.print(
        f"[{style}]Comment::{outcome.kind.value}[/{style}] PR #{pr.id} "
        f"commit {pr.from_commit[:12]} ({lifecycle.value})"
    )
