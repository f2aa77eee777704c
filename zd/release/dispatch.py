from __future__ import annotations

from zd.core.config import Config
from zd.core.result import Err, Result
from zd.git.repository import Repository
from zd.github.releases import ReleasesApi
from zd.output.console import ConsoleProtocol
from zd.release.create import create_release
from zd.release.errors import ReleaseError
from zd.release.model import Payload, ReleasePublishedPayload, WorkflowDispatchPayload
from zd.release.retag import move_tag


def update_github_state(
    payload: Payload,
    *,
    upsert_doi: bool,
    event_name: str,
    repo: Repository,
    api: ReleasesApi,
    config: Config,
    console: ConsoleProtocol,
    settle_seconds: float | None = None,
) -> Result[None, ReleaseError]:
    """Route a classified payload to the path that handles it."""
    match payload:
        case ReleasePublishedPayload():
            return move_tag(
                payload,
                upsert_doi=upsert_doi,
                repo=repo,
                api=api,
                config=config,
                console=console,
                settle_seconds=settle_seconds,
            )
        case WorkflowDispatchPayload():
            return create_release(
                payload,
                upsert_doi=upsert_doi,
                repo=repo,
                api=api,
                config=config,
                console=console,
            )
        case _:
            return Err(
                ReleaseError(kind="unsupported_event", message=f'Unsupported event: "{event_name}".')
            )
