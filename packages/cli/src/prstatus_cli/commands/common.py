"""Helpers shared by commands that talk to the review platform."""

from __future__ import annotations

import click

from prstatus_core.errors import PrStatusError


def notifier_from_context(ctx: click.Context, overrides: dict | None = None):
    """Validate the provider settings in ``ctx.obj`` and build a BuildNotifier.

    Missing settings become one UsageError naming each of them.
    """
    from prstatus_core.config import missing_settings
    from prstatus_core.notifier import build_notifier

    config = dict(ctx.obj["config"])
    for key, value in (overrides or {}).items():
        if value is not None:
            config[key] = value

    try:
        missing = missing_settings(config)
    except ValueError as e:
        raise click.UsageError(str(e))
    if missing:
        raise click.UsageError(
            f"Missing settings for provider '{config['provider']}': {', '.join(missing)}.\n"
            "Set repository settings in .prstatus.yml and credentials in the environment."
        )

    try:
        return build_notifier(config, ctx.obj["broadcaster"])
    except PrStatusError as e:
        raise click.ClickException(str(e))
