"""Ordered, fail-fast execution of external commands.

A step groups one or more git commands or API calls under a title. Steps run
in order and the first failure stops the sequence; nothing already done is
undone, so the error names the step and tag to make manual recovery possible.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from zd.core.result import Err, Ok, Result
from zd.git.repository import GitError
from zd.github.http import HttpError
from zd.release.errors import ReleaseError

type StepFailure = GitError | HttpError
type Action = Callable[[], Result[object, StepFailure]]


@dataclass(frozen=True, slots=True)
class Step:
    title: str
    action: Action


def sequence(*actions: Action) -> Action:
    """Combine actions into one that stops at the first failure."""

    def run() -> Result[object, StepFailure]:
        result: Result[object, StepFailure] = Ok(None)
        for action in actions:
            result = action()
            if isinstance(result, Err):
                return result
        return result

    return run


def run_steps(
    steps: Sequence[Step],
    *,
    tag: str,
    start: int = 1,
    total: int | None = None,
) -> Result[None, ReleaseError]:
    """Run ``steps`` in order, numbering them from ``start`` in error messages."""
    count = total if total is not None else start - 1 + len(steps)
    for number, step in enumerate(steps, start=start):
        result = step.action()
        if isinstance(result, Err):
            return Err(_step_error(result.error, f"step {number}/{count} ({step.title})", tag))
    return Ok(None)


def _step_error(error: StepFailure, where: str, tag: str) -> ReleaseError:
    match error:
        case GitError(command=command, message=message):
            return ReleaseError(
                kind="git_failed",
                message=f"{where} failed for tag {tag}: git {command}",
                hint=message,
            )
        case HttpError():
            return ReleaseError(
                kind="api_failed",
                message=f"{where} failed for tag {tag}",
                hint=str(error),
            )
