from __future__ import annotations

from pathlib import Path

import typer

from zd.cli.commands.common import exit_env, exit_release
from zd.cli.context import build_context
from zd.core.environment import load_event_payload, require_token, write_outputs
from zd.core.result import Err
from zd.git.repository import Repository
from zd.github.http import RealHttpClient
from zd.github.releases import ReleasesApi
from zd.output.console import Style
from zd.release.dispatch import update_github_state
from zd.release.errors import ReleaseError
from zd.release.events import classify_event


def sync(
    filename: str = typer.Option(
        "",
        "--filename",
        help="Metadata file whose version names the tag (empty: .zenodo.json, then CITATION.cff).",
    ),
    upsert_doi: bool = typer.Option(
        False,
        "--upsert-doi/--no-upsert-doi",
        help="Commit the DOI written into CITATION.cff and make the release include it.",
    ),
    event_name: str | None = typer.Option(
        None, "--event-name", help="Triggering event (default: $GITHUB_EVENT_NAME)."
    ),
    event_path: Path | None = typer.Option(
        None, "--event-path", help="Webhook payload JSON (default: $GITHUB_EVENT_PATH)."
    ),
    workspace: Path | None = typer.Option(
        None, "--workspace", help="Repository checkout (default: $GITHUB_WORKSPACE or cwd)."
    ),
    config: Path | None = typer.Option(
        None, "--config", help="Config file (default: <workspace>/zenodraft.toml)."
    ),
    settle_seconds: float | None = typer.Option(
        None,
        "--settle-seconds",
        min=0.0,
        help="Wait between deleting the tag and recreating the release.",
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print commands without running them."),
) -> None:
    """Create a release or move a published tag after a DOI upsert."""
    ctx = build_context(workspace=workspace, config_path=config)
    console = ctx.console
    env = ctx.environment

    token = require_token(env)
    if isinstance(token, Err) and not dry_run:
        exit_release(ReleaseError(kind="missing_token", message=token.error.message), console=console)

    name = event_name or env.event_name
    if name is None:
        exit_env("no event name: pass --event-name or set GITHUB_EVENT_NAME", console=console)
    path = event_path or env.event_path
    if path is None:
        exit_env("no event payload: pass --event-path or set GITHUB_EVENT_PATH", console=console)

    raw = load_event_payload(path)
    if isinstance(raw, Err):
        exit_env(raw.error.message, console=console)

    payload = classify_event(name, raw.value, filename=filename, root=ctx.root, console=console)
    if isinstance(payload, Err):
        exit_release(payload.error, console=console)

    console.info(f"event: {payload.value.event}, tag: {payload.value.tag}")
    if env.output_path is not None:
        written = write_outputs(
            env.output_path, {"tag": payload.value.tag, "event": payload.value.event}
        )
        if isinstance(written, Err):
            exit_env(written.error.message, console=console)

    if dry_run:
        console.print("dry run: nothing will be changed", Style.WARNING)

    http = RealHttpClient(token.unwrap_or(""), timeout=ctx.config.http.timeout_seconds)
    result = update_github_state(
        payload.value,
        upsert_doi=upsert_doi,
        event_name=name,
        repo=Repository(ctx.root, console=console, dry_run=dry_run),
        api=ReleasesApi(http, api_url=env.api_url, console=console, dry_run=dry_run),
        config=ctx.config,
        console=console,
        settle_seconds=settle_seconds,
    )
    if isinstance(result, Err):
        exit_release(result.error, console=console)
