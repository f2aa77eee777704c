from __future__ import annotations

from zd.core.config import Config
from zd.core.result import Err, Result
from zd.git.repository import Repository
from zd.github.releases import ReleasesApi
from zd.output.console import ConsoleProtocol
from zd.release.citation import CITATION_FILENAME
from zd.release.errors import ReleaseError
from zd.release.model import RepoIdentity, WorkflowDispatchPayload
from zd.release.steps import Step, run_steps, sequence


def commit_citation_steps(repo: Repository, config: Config) -> list[Step]:
    """Commit CITATION.cff as the anonymous action identity."""
    git = config.git
    return [
        Step(
            "configure committer",
            sequence(
                lambda: repo.config("user.email", git.committer_email),
                lambda: repo.config("user.name", git.committer_name),
            ),
        ),
        Step(
            f"commit {CITATION_FILENAME}",
            sequence(
                lambda: repo.add(CITATION_FILENAME),
                lambda: repo.commit(git.commit_message),
            ),
        ),
    ]


def create_release(
    payload: WorkflowDispatchPayload,
    *,
    upsert_doi: bool,
    repo: Repository,
    api: ReleasesApi,
    config: Config,
    console: ConsoleProtocol,
) -> Result[None, ReleaseError]:
    """Release ``payload.tag`` on the dispatched ref.

    With ``upsert_doi`` the updated CITATION.cff is committed and pushed to
    the current branch first, so the release includes it.
    """
    identity = RepoIdentity.parse(payload.contents.repository_full_name)
    if isinstance(identity, Err):
        return identity
    owner, repo_name = identity.value.owner, identity.value.name

    if upsert_doi:
        steps = [*commit_citation_steps(repo, config), Step("push", lambda: repo.push())]
        with console.group(
            "updating the branch with changes that resulted from upserting the prereserved doi"
        ):
            pushed = run_steps(steps, tag=payload.tag)
        if isinstance(pushed, Err):
            return pushed

    created = run_steps(
        [
            Step(
                "create release",
                lambda: api.create_release(
                    owner,
                    repo_name,
                    tag_name=payload.tag,
                    target_commitish=payload.contents.ref,
                    body=config.release.body,
                    name=payload.tag,
                ),
            )
        ],
        tag=payload.tag,
    )
    if isinstance(created, Err):
        return created

    console.success(f"created release {payload.tag} on {identity.value.slug}")
    return created
