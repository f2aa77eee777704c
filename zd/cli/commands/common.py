from __future__ import annotations

from typing import NoReturn

import typer

from zd.core.errors import ErrorCode
from zd.output.console import ConsoleProtocol, Style
from zd.release.errors import ReleaseError, ReleaseErrorKind


def release_error_code(kind: ReleaseErrorKind) -> ErrorCode:
    if kind == "missing_token":
        return ErrorCode.ENV_ERROR
    if kind == "inconsistent_versions":
        return ErrorCode.CONSISTENCY_ERROR
    if kind == "api_failed":
        return ErrorCode.NETWORK_ERROR
    if kind == "git_failed":
        return ErrorCode.GIT_ERROR
    return ErrorCode.USER_ERROR


def exit_release(error: ReleaseError, *, console: ConsoleProtocol) -> NoReturn:
    console.fail(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)
    raise typer.Exit(code=int(release_error_code(error.kind)))


def exit_env(message: str, *, console: ConsoleProtocol) -> NoReturn:
    console.fail(message)
    raise typer.Exit(code=int(ErrorCode.ENV_ERROR))
