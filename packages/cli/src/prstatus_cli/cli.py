"""CLI entry point for prstatus.

Commands:
  prs: list open pull requests on the configured repository
  notify: report a build lifecycle event (queued/running/success/failure)
  events: display notification events recorded by the configured broadcaster
"""

from __future__ import annotations

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from prstatus_cli.commands.events import events_cmd
from prstatus_cli.commands.notify import notify_cmd
from prstatus_cli.commands.prs import prs_cmd

console = Console()


def _build_broadcaster(config: dict):
    """Instantiate the configured broadcaster from .prstatus.yml settings.

    Broadcaster selection:
      events: sqlite → SQLiteBroadcaster (events_path or .prstatus.db)
      events: log    → LogBroadcaster    (one log line per event)
      (default)      → NoOpBroadcaster
    """
    from prstatus_events.noop import NoOpBroadcaster

    events_type = config.get("events", "noop")

    if events_type == "sqlite":
        from prstatus_events.sqlite import SQLiteBroadcaster

        return SQLiteBroadcaster(db_path=config.get("events_path", ".prstatus.db"))

    if events_type == "log":
        from prstatus_events.log import LogBroadcaster

        return LogBroadcaster()

    return NoOpBroadcaster()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


@click.group()
@click.version_option(package_name="prstatus", prog_name="prstatus")
@click.option(
    "--config",
    "config_path",
    default=".prstatus.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="PRSTATUS_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """Build status comments for pull requests on Bitbucket Server and GitHub."""
    from prstatus_core.config import load_config
    from prstatus_cli.auth import resolve_github_token

    _configure_logging(verbose)
    ctx.ensure_object(dict)

    config = load_config(config_path)

    if config.get("provider") == "github" and not config.get("github_token"):
        token = resolve_github_token()
        if token:
            config["github_token"] = token

    broadcaster = _build_broadcaster(config)
    ctx.obj["broadcaster"] = broadcaster
    ctx.obj["config"] = config
    ctx.call_on_close(broadcaster.close)


main.add_command(prs_cmd)
main.add_command(notify_cmd)
main.add_command(events_cmd)
