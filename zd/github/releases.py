"""GitHub Releases endpoints.

Only the two mutating calls the sync needs are exposed. Release metadata is
never listed or fetched: the webhook payload already carries it.
"""

from __future__ import annotations

from urllib.parse import quote

from zd.core.result import Err, Ok, Result
from zd.core.structured import as_str_dict, get_int
from zd.github.http import HttpClient, HttpError
from zd.output.console import ConsoleProtocol, Style

__all__ = ["ReleasesApi"]


class ReleasesApi:
    """Create and delete releases of one GitHub instance.

    Attributes:
        api_url: REST root, e.g. ``https://api.github.com``
        dry_run: Echo requests without sending them
    """

    def __init__(
        self,
        http: HttpClient,
        *,
        api_url: str = "https://api.github.com",
        console: ConsoleProtocol | None = None,
        dry_run: bool = False,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.dry_run = dry_run
        self._http = http
        self._console = console

    def releases_url(self, owner: str, repo: str) -> str:
        return f"{self.api_url}/repos/{quote(owner, safe='')}/{quote(repo, safe='')}/releases"

    def create_release(
        self,
        owner: str,
        repo: str,
        *,
        tag_name: str,
        target_commitish: str,
        body: str,
        name: str,
        draft: bool | None = None,
        prerelease: bool | None = None,
    ) -> Result[int | None, HttpError]:
        """Create a release and return its id.

        ``draft`` and ``prerelease`` are only sent when given, so GitHub's
        defaults apply to new releases.
        """
        payload: dict[str, object] = {
            "tag_name": tag_name,
            "target_commitish": target_commitish,
            "body": body,
            "name": name,
        }
        if draft is not None:
            payload["draft"] = draft
        if prerelease is not None:
            payload["prerelease"] = prerelease

        url = self.releases_url(owner, repo)
        self._echo(f"POST {url} (tag_name={tag_name}, target_commitish={target_commitish})")
        if self.dry_run:
            return Ok(None)

        result = self._http.request("POST", url, payload)
        if isinstance(result, Err):
            return result

        data = as_str_dict(result.value)
        return Ok(get_int(data, "id") if data is not None else None)

    def delete_release(self, owner: str, repo: str, release_id: int) -> Result[None, HttpError]:
        url = f"{self.releases_url(owner, repo)}/{release_id}"
        self._echo(f"DELETE {url}")
        if self.dry_run:
            return Ok(None)

        result = self._http.request("DELETE", url)
        if isinstance(result, Err):
            return result
        return Ok(None)

    def _echo(self, line: str) -> None:
        if self._console is not None:
            self._console.print(line, Style.DIM)
