from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import typer

from zd.core.config import CONFIG_FILENAME, Config, load_config_or_default
from zd.core.environment import ActionEnvironment
from zd.core.errors import ErrorCode
from zd.core.result import Err
from zd.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    root: Path
    environment: ActionEnvironment
    config: Config
    console: ConsoleProtocol


def build_context(*, workspace: Path | None = None, config_path: Path | None = None) -> CLIContext:
    environment = ActionEnvironment.from_env(os.environ)
    console = RichConsole(actions=environment.in_actions)

    root = (workspace or environment.workspace or Path.cwd()).expanduser().resolve()
    if not root.is_dir():
        console.fail(f"workspace is not a directory: {root}")
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    config_result = load_config_or_default(config_path or root / CONFIG_FILENAME)
    if isinstance(config_result, Err):
        console.fail(config_result.error.message)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    return CLIContext(
        root=root,
        environment=environment,
        config=config_result.value,
        console=console,
    )
