from __future__ import annotations

from pathlib import Path

import typer

from zd.cli.commands.common import exit_release
from zd.cli.context import build_context
from zd.core.result import Err
from zd.release.version import resolve_tag


def tag(
    filename: str = typer.Option(
        "",
        "--filename",
        help="Metadata file whose version names the tag (empty: .zenodo.json, then CITATION.cff).",
    ),
    workspace: Path | None = typer.Option(
        None, "--workspace", help="Repository checkout (default: $GITHUB_WORKSPACE or cwd)."
    ),
) -> None:
    """Print the tag a manual dispatch would release."""
    ctx = build_context(workspace=workspace)
    result = resolve_tag(filename, root=ctx.root)
    if isinstance(result, Err):
        exit_release(result.error, console=ctx.console)
    typer.echo(result.value)
