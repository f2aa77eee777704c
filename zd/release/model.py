from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from zd.core.result import Err, Ok, Result
from zd.core.structured import StrDict, get_bool, get_int, get_str, get_table, get_text
from zd.release.errors import ReleaseError

EventKind = Literal["WorkflowDispatch", "ReleasePublished"]


@dataclass(frozen=True, slots=True)
class RepoIdentity:
    owner: str
    name: str

    @classmethod
    def parse(cls, full_name: str) -> Result[RepoIdentity, ReleaseError]:
        """Split ``owner/name`` on its first slash."""
        owner, sep, name = full_name.partition("/")
        if not sep or not owner or not name:
            return Err(
                ReleaseError(
                    kind="invalid_payload",
                    message=f"invalid repository full name: {full_name!r}",
                    hint="expected owner/name",
                )
            )
        return Ok(cls(owner=owner, name=name))

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True, slots=True)
class ReleaseAttributes:
    """What a recreated release copies from the one it replaces."""

    body: str
    draft: bool
    prerelease: bool
    name: str
    target_commitish: str


@dataclass(frozen=True, slots=True)
class PublishedRelease:
    id: int
    tag_name: str
    attributes: ReleaseAttributes


@dataclass(frozen=True, slots=True)
class WorkflowDispatchEvent:
    repository_full_name: str
    ref: str
    raw: StrDict = field(compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class ReleasePublishedEvent:
    repository_full_name: str
    release: PublishedRelease
    raw: StrDict = field(compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class WorkflowDispatchPayload:
    contents: WorkflowDispatchEvent
    tag: str
    event: Literal["WorkflowDispatch"] = "WorkflowDispatch"


@dataclass(frozen=True, slots=True)
class ReleasePublishedPayload:
    contents: ReleasePublishedEvent
    tag: str
    event: Literal["ReleasePublished"] = "ReleasePublished"


type Payload = WorkflowDispatchPayload | ReleasePublishedPayload


def _invalid(message: str) -> Err[ReleaseError]:
    return Err(ReleaseError(kind="invalid_payload", message=message))


def _ref(table: StrDict, key: str) -> str | None:
    # Refs go to git and the API exactly as GitHub sent them.
    return get_text(table, key) or None


def _repository_full_name(raw: StrDict) -> Result[str, ReleaseError]:
    repository = get_table(raw, "repository")
    full_name = get_str(repository, "full_name") if repository is not None else None
    if full_name is None:
        return _invalid("event payload has no repository.full_name")
    return Ok(full_name)


def parse_workflow_dispatch(raw: StrDict) -> Result[WorkflowDispatchEvent, ReleaseError]:
    full_name = _repository_full_name(raw)
    if isinstance(full_name, Err):
        return full_name

    ref = _ref(raw, "ref")
    if ref is None:
        return _invalid("workflow_dispatch payload has no ref")

    return Ok(WorkflowDispatchEvent(repository_full_name=full_name.value, ref=ref, raw=raw))


def parse_release_published(raw: StrDict) -> Result[ReleasePublishedEvent, ReleaseError]:
    full_name = _repository_full_name(raw)
    if isinstance(full_name, Err):
        return full_name

    release = get_table(raw, "release")
    if release is None:
        return _invalid("release payload has no release object")

    release_id = get_int(release, "id")
    tag_name = _ref(release, "tag_name")
    target_commitish = _ref(release, "target_commitish")
    draft = get_bool(release, "draft")
    prerelease = get_bool(release, "prerelease")
    if release_id is None:
        return _invalid("release payload has no release.id")
    if tag_name is None:
        return _invalid("release payload has no release.tag_name")
    if target_commitish is None:
        return _invalid("release payload has no release.target_commitish")
    if draft is None or prerelease is None:
        return _invalid("release payload has no release.draft/prerelease flags")

    return Ok(
        ReleasePublishedEvent(
            repository_full_name=full_name.value,
            release=PublishedRelease(
                id=release_id,
                tag_name=tag_name,
                attributes=ReleaseAttributes(
                    # body and name are nullable in the webhook schema.
                    body=get_text(release, "body"),
                    draft=draft,
                    prerelease=prerelease,
                    name=get_text(release, "name"),
                    target_commitish=target_commitish,
                ),
            ),
            raw=raw,
        )
    )
