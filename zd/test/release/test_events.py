from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from zd.core.result import Err, Ok
from zd.core.structured import StrDict
from zd.output.console import MockConsole
from zd.release import events as events_mod
from zd.release.events import classify_event
from zd.release.model import ReleasePublishedPayload, WorkflowDispatchPayload
from zd.release.version import FALLBACK_VERSION, resolve_tag

Write = Callable[[str | None], None]


class TestWorkflowDispatch:
    @pytest.mark.parametrize("filename", ["", "CITATION.cff", ".zenodo.json"])
    def test_tag_matches_resolver(
        self,
        filename: str,
        tmp_path: Path,
        dispatch_raw: StrDict,
        write_citation: Write,
        write_zenodo: Write,
    ) -> None:
        write_citation("1.2.0")
        write_zenodo("1.2.0")

        result = classify_event(
            "workflow_dispatch", dispatch_raw, filename=filename, root=tmp_path, console=MockConsole()
        )

        assert isinstance(result, Ok)
        payload = result.value
        assert isinstance(payload, WorkflowDispatchPayload)
        assert payload.event == "WorkflowDispatch"
        assert Ok(payload.tag) == resolve_tag(filename, root=tmp_path)
        assert payload.contents.ref == "refs/heads/main"
        assert payload.contents.repository_full_name == "octo/project"

    def test_no_version_files_gives_fallback(self, tmp_path: Path, dispatch_raw: StrDict) -> None:
        result = classify_event(
            "workflow_dispatch", dispatch_raw, filename="", root=tmp_path, console=MockConsole()
        )
        assert isinstance(result, Ok)
        assert result.value.tag == FALLBACK_VERSION

    def test_inconsistent_versions_fail(
        self, tmp_path: Path, dispatch_raw: StrDict, write_citation: Write, write_zenodo: Write
    ) -> None:
        write_citation("1.0.0")
        write_zenodo("1.0.1")

        result = classify_event(
            "workflow_dispatch", dispatch_raw, filename="", root=tmp_path, console=MockConsole()
        )

        assert isinstance(result, Err)
        assert result.error.kind == "inconsistent_versions"

    def test_missing_ref_is_invalid(self, tmp_path: Path, dispatch_raw: StrDict) -> None:
        del dispatch_raw["ref"]
        result = classify_event(
            "workflow_dispatch", dispatch_raw, filename="", root=tmp_path, console=MockConsole()
        )
        assert isinstance(result, Err)
        assert result.error.kind == "invalid_payload"


class TestReleasePublished:
    def test_tag_comes_from_payload_not_resolver(
        self,
        tmp_path: Path,
        release_raw: StrDict,
        write_citation: Write,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        write_citation("9.9.9")

        def no_resolve(*args: object, **kwargs: object) -> None:
            raise AssertionError("resolver must not run for published releases")

        monkeypatch.setattr(events_mod, "resolve_tag", no_resolve)

        result = classify_event(
            "release", release_raw, filename="", root=tmp_path, console=MockConsole()
        )

        assert isinstance(result, Ok)
        payload = result.value
        assert isinstance(payload, ReleasePublishedPayload)
        assert payload.event == "ReleasePublished"
        assert payload.tag == "v3.0.0"
        release = payload.contents.release
        assert release.id == 4242
        assert release.attributes.target_commitish == "main"
        assert release.attributes.body == "Release notes\n\n- first\n"
        assert release.attributes.prerelease is True
        assert release.attributes.name == "Version 3"

    @pytest.mark.parametrize("action", ["edited", "created", "deleted", "prereleased"])
    def test_other_actions_fail(self, action: str, tmp_path: Path, release_raw: StrDict) -> None:
        release_raw["action"] = action

        result = classify_event(
            "release", release_raw, filename="", root=tmp_path, console=MockConsole()
        )

        assert isinstance(result, Err)
        assert result.error.kind == "unsupported_action"
        assert f'"{action}"' in result.error.message

    def test_null_body_and_name_become_empty(self, tmp_path: Path, release_raw: StrDict) -> None:
        release = release_raw["release"]
        assert isinstance(release, dict)
        release["body"] = None
        release["name"] = None

        result = classify_event(
            "release", release_raw, filename="", root=tmp_path, console=MockConsole()
        )

        assert isinstance(result, Ok)
        assert isinstance(result.value, ReleasePublishedPayload)
        assert result.value.contents.release.attributes.body == ""
        assert result.value.contents.release.attributes.name == ""

    def test_empty_tag_is_invalid(self, tmp_path: Path, release_raw: StrDict) -> None:
        release = release_raw["release"]
        assert isinstance(release, dict)
        release["tag_name"] = ""

        result = classify_event(
            "release", release_raw, filename="", root=tmp_path, console=MockConsole()
        )

        assert isinstance(result, Err)
        assert result.error.kind == "invalid_payload"


@pytest.mark.parametrize("event_name", ["push", "pull_request", "schedule", ""])
def test_unsupported_event(event_name: str, tmp_path: Path, dispatch_raw: StrDict) -> None:
    result = classify_event(
        event_name, dispatch_raw, filename="", root=tmp_path, console=MockConsole()
    )

    assert isinstance(result, Err)
    assert result.error.kind == "unsupported_event"
    assert result.error.message == f'Unsupported event: "{event_name}".'


def test_payload_is_logged_in_a_group_even_on_failure(
    tmp_path: Path, release_raw: StrDict
) -> None:
    console = MockConsole()
    release_raw["action"] = "edited"

    classify_event("release", release_raw, filename="", root=tmp_path, console=console)

    assert console.groups == ["payload"]
    assert console.find('"tag_name": "v3.0.0"')
