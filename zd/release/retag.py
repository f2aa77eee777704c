"""Move a published tag onto a commit that contains the DOI.

GitHub will not let a release point at a different commit, so the tag and the
release are both replaced: the CITATION.cff change is committed on a scratch
branch, merged into the release's target, the old tag is deleted locally and
remotely, and the release is deleted and recreated with its original
attributes. See https://gist.github.com/danielestevez/2044589 for the git side.

An interrupted run leaves whatever was already done in place (a scratch
branch, a deleted tag, a deleted release); the error names the step.
"""

from __future__ import annotations

from time import sleep

from zd.core.config import Config
from zd.core.result import Err, Ok, Result
from zd.git.repository import GitError, Repository
from zd.github.releases import ReleasesApi
from zd.output.console import ConsoleProtocol, Style
from zd.release.create import commit_citation_steps
from zd.release.errors import ReleaseError
from zd.release.model import ReleasePublishedPayload, RepoIdentity
from zd.release.steps import Step, run_steps

__all__ = ["move_tag", "scratch_branch", "retag_steps"]


def scratch_branch(tag: str) -> str:
    return f"{tag}-with-upserting-changes"


def retag_steps(
    payload: ReleasePublishedPayload,
    identity: RepoIdentity,
    *,
    repo: Repository,
    api: ReleasesApi,
    config: Config,
    console: ConsoleProtocol,
    settle_seconds: float,
) -> tuple[list[Step], list[Step]]:
    """Build the replacement protocol as (git steps, API steps)."""
    release = payload.contents.release
    attrs = release.attributes
    tag = release.tag_name
    target = attrs.target_commitish
    remote = config.git.remote
    branch = scratch_branch(tag)

    def settle() -> Result[object, GitError]:
        console.print(f"waiting {settle_seconds:g}s for GitHub to drop tag {tag}", Style.DIM)
        if not repo.dry_run:
            sleep(settle_seconds)
        return Ok(None)

    configure, commit = commit_citation_steps(repo, config)
    git_steps = [
        Step("fetch", lambda: repo.fetch(remote)),
        configure,
        Step("create scratch branch", lambda: repo.checkout_new_branch(branch)),
        commit,
        Step("check out target", lambda: repo.checkout(target)),
        Step("merge scratch branch", lambda: repo.merge(branch)),
        Step("push target", lambda: repo.push(remote, target)),
        Step("delete local tag", lambda: repo.delete_tag(tag)),
        Step("delete remote tag", lambda: repo.delete_remote_tag(remote, tag)),
        Step("fetch tags", lambda: repo.fetch_tags()),
        Step("settle", settle),
    ]
    api_steps = [
        Step(
            "delete release",
            lambda: api.delete_release(identity.owner, identity.name, release.id),
        ),
        Step(
            "recreate release",
            lambda: api.create_release(
                identity.owner,
                identity.name,
                tag_name=tag,
                target_commitish=target,
                body=attrs.body,
                name=attrs.name,
                draft=attrs.draft,
                prerelease=attrs.prerelease,
            ),
        ),
    ]
    return git_steps, api_steps


def move_tag(
    payload: ReleasePublishedPayload,
    *,
    upsert_doi: bool,
    repo: Repository,
    api: ReleasesApi,
    config: Config,
    console: ConsoleProtocol,
    settle_seconds: float | None = None,
) -> Result[None, ReleaseError]:
    """Replace the published tag and release when ``upsert_doi`` is set.

    Without ``upsert_doi`` nothing is run.
    """
    if not upsert_doi:
        console.print(f"release {payload.tag}: DOI upsert not requested, tag left as is", Style.DIM)
        return Ok(None)

    identity = RepoIdentity.parse(payload.contents.repository_full_name)
    if isinstance(identity, Err):
        return identity

    git_steps, api_steps = retag_steps(
        payload,
        identity.value,
        repo=repo,
        api=api,
        config=config,
        console=console,
        settle_seconds=config.release.settle_seconds if settle_seconds is None else settle_seconds,
    )
    total = len(git_steps) + len(api_steps)

    with console.group(
        "updating the tag with changes that resulted from upserting the prereserved doi"
    ):
        moved = run_steps(git_steps, tag=payload.tag, total=total)
    if isinstance(moved, Err):
        return moved

    replaced = run_steps(api_steps, tag=payload.tag, start=len(git_steps) + 1, total=total)
    if isinstance(replaced, Err):
        return replaced

    console.success(f"moved tag {payload.tag} and recreated its release on {identity.value.slug}")
    return replaced
