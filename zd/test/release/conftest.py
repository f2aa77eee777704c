from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from zd.core.result import Err, Ok, Result
from zd.core.structured import StrDict
from zd.git import repository as repo_mod
from zd.github.http import HttpError
from zd.platform.process import ProcessError
from zd.release import retag as retag_mod


def _calls() -> list[tuple[object, ...]]:
    return []


@dataclass
class Recorder:
    """Single ordered log of every external effect: git, sleep and HTTP.

    ``fail_git`` / ``fail_http`` make the first matching call fail.
    """

    calls: list[tuple[object, ...]] = field(default_factory=_calls)
    fail_git: tuple[str, ...] | None = None
    fail_http: str | None = None

    def run_process(
        self,
        cmd: list[str],
        cwd: Path,
        env: dict[str, str] | None = None,
        *,
        timeout: float | None = None,
    ) -> Result[str, ProcessError]:
        args = tuple(cmd[3:])
        self.calls.append(("git", *args))
        if self.fail_git is not None and args[: len(self.fail_git)] == self.fail_git:
            return Err(ProcessError(tuple(cmd), 1, "", "rejected"))
        return Ok("")

    def sleep(self, seconds: float) -> None:
        self.calls.append(("sleep", seconds))

    def request(
        self,
        method: str,
        url: str,
        body: dict[str, object] | None = None,
    ) -> Result[object, HttpError]:
        self.calls.append(("http", method, url, body))
        if self.fail_http == method:
            return Err(HttpError(url=url, status=422, message="Validation Failed"))
        return Ok({"id": 1001} if method == "POST" else None)


@pytest.fixture
def recorder(monkeypatch: pytest.MonkeyPatch) -> Recorder:
    rec = Recorder()
    monkeypatch.setattr(repo_mod, "run_process", rec.run_process)
    monkeypatch.setattr(retag_mod, "sleep", rec.sleep)
    return rec


@pytest.fixture
def dispatch_raw() -> StrDict:
    return {
        "ref": "refs/heads/main",
        "repository": {"full_name": "octo/project", "name": "project"},
        "inputs": {},
        "workflow": ".github/workflows/release.yml",
    }


@pytest.fixture
def release_raw() -> StrDict:
    return {
        "action": "published",
        "repository": {"full_name": "octo/project", "name": "project"},
        "release": {
            "id": 4242,
            "tag_name": "v3.0.0",
            "target_commitish": "main",
            "body": "Release notes\n\n- first\n",
            "draft": False,
            "prerelease": True,
            "name": "Version 3",
        },
    }


type WriteVersion = Callable[[str | None], None]


@pytest.fixture
def write_citation(tmp_path: Path) -> WriteVersion:
    """Write ``tmp_path/CITATION.cff``, with a version field unless None."""

    def write(version: str | None) -> None:
        lines = ["cff-version: 1.2.0", 'title: "project"']
        if version is not None:
            lines.append(f'version: "{version}"')
        (tmp_path / "CITATION.cff").write_text("\n".join(lines) + "\n", encoding="utf-8")

    return write


@pytest.fixture
def write_zenodo(tmp_path: Path) -> WriteVersion:
    """Write ``tmp_path/.zenodo.json``, with a version field unless None."""

    def write(version: str | None) -> None:
        data: StrDict = {"title": "project"}
        if version is not None:
            data["version"] = version
        (tmp_path / ".zenodo.json").write_text(json.dumps(data), encoding="utf-8")

    return write
