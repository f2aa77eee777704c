"""Git repository abstraction.

Each method wraps exactly one git command and returns a Result, so callers
can run commands as an ordered sequence and stop at the first failure.

Usage:
    repo = Repository(Path("."), console=console)

    match repo.push("origin", "main"):
        case Ok(output):
            ...
        case Err(e):
            print(f"{e.command} failed: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from zd.core.result import Err, Ok, Result
from zd.output.console import ConsoleProtocol, Style
from zd.platform.process import run as run_process

__all__ = [
    "GitError",
    "Repository",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git command that failed (without the ``git`` prefix)
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


class Repository:
    """A git working copy that commands run against.

    Commands are not retried and have no timeout: a push that waits on the
    remote is left to the CI job's own time limit.

    Attributes:
        path: Path to the repository root
        dry_run: Echo commands without executing them
    """

    def __init__(
        self,
        path: Path,
        *,
        console: ConsoleProtocol | None = None,
        dry_run: bool = False,
    ) -> None:
        self.path = path
        self.dry_run = dry_run
        self._console = console

    def fetch(self, remote: str = "origin") -> Result[str, GitError]:
        return self._git(["fetch", remote])

    def fetch_tags(self) -> Result[str, GitError]:
        return self._git(["fetch", "--tags"])

    def config(self, key: str, value: str) -> Result[str, GitError]:
        """Set a repository-local config value (e.g. ``user.name``)."""
        return self._git(["config", key, value])

    def add(self, *paths: str) -> Result[str, GitError]:
        return self._git(["add", *paths])

    def commit(self, message: str) -> Result[str, GitError]:
        return self._git(["commit", "-m", message])

    def push(self, remote: str | None = None, refspec: str | None = None) -> Result[str, GitError]:
        """Push to ``remote``/``refspec``; with neither, push the current branch upstream."""
        args = ["push"]
        if remote is not None:
            args.append(remote)
            if refspec is not None:
                args.append(refspec)
        return self._git(args)

    def checkout(self, ref: str) -> Result[str, GitError]:
        return self._git(["checkout", ref])

    def checkout_new_branch(self, branch: str) -> Result[str, GitError]:
        return self._git(["checkout", "-b", branch])

    def merge(self, ref: str) -> Result[str, GitError]:
        return self._git(["merge", ref])

    def delete_tag(self, tag: str) -> Result[str, GitError]:
        return self._git(["tag", "-d", tag])

    def delete_remote_tag(self, remote: str, tag: str) -> Result[str, GitError]:
        """Delete ``tag`` on ``remote`` by pushing an empty source ref."""
        return self._git(["push", remote, f":{tag}"])

    def _git(self, args: list[str]) -> Result[str, GitError]:
        """Run a git command in this repository."""
        command = " ".join(args)
        if self._console is not None:
            self._console.print(f"git {command}", Style.DIM)
        if self.dry_run:
            return Ok("")

        result = run_process(["git", "-C", str(self.path), *args], cwd=self.path)
        match result:
            case Err(e):
                return Err(
                    GitError(
                        command=command,
                        message=e.stderr.strip() or e.stdout.strip() or f"git {args[0]} failed",
                        returncode=e.returncode,
                    )
                )
            case Ok(stdout):
                return Ok(stdout.strip())
