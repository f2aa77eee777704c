from __future__ import annotations

import json
from pathlib import Path

from zd.core.result import Err, Ok, Result
from zd.core.structured import StrDict, get_str
from zd.output.console import ConsoleProtocol, Style
from zd.release.errors import ReleaseError
from zd.release.model import (
    Payload,
    ReleasePublishedPayload,
    WorkflowDispatchPayload,
    parse_release_published,
    parse_workflow_dispatch,
)
from zd.release.version import FALLBACK_VERSION, resolve_tag

WORKFLOW_DISPATCH = "workflow_dispatch"
RELEASE = "release"


def classify_event(
    event_name: str,
    raw: StrDict,
    *,
    filename: str,
    root: Path,
    console: ConsoleProtocol,
    fallback: str = FALLBACK_VERSION,
) -> Result[Payload, ReleaseError]:
    """Turn the trigger into a typed payload carrying the release tag.

    A manual dispatch resolves its tag from the version files; a published
    release already has one, and GitHub is authoritative for it.
    """
    with console.group("payload"):
        console.print(json.dumps(raw, indent=4), Style.DIM)

    if event_name == WORKFLOW_DISPATCH:
        contents = parse_workflow_dispatch(raw)
        if isinstance(contents, Err):
            return contents
        tag = resolve_tag(filename, root=root, fallback=fallback)
        if isinstance(tag, Err):
            return tag
        return Ok(WorkflowDispatchPayload(contents=contents.value, tag=tag.value))

    if event_name == RELEASE:
        action = get_str(raw, "action")
        if action != "published":
            return Err(
                ReleaseError(
                    kind="unsupported_action",
                    message=f'Unsupported type of release event: "{action}".',
                )
            )
        published = parse_release_published(raw)
        if isinstance(published, Err):
            return published
        return Ok(
            ReleasePublishedPayload(
                contents=published.value,
                tag=published.value.release.tag_name,
            )
        )

    return Err(ReleaseError(kind="unsupported_event", message=f'Unsupported event: "{event_name}".'))
