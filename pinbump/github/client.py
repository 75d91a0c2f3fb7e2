"""GitHub REST client.

Only the two calls a bump run needs: resolve the head commit of a branch and
open a pull request. The token is passed in explicitly; the client never
looks up credentials on its own.
"""

from __future__ import annotations

from urllib.parse import quote

from pinbump.core.result import Err, Ok, Result
from pinbump.core.structured import as_str_dict, get_nested_str, get_str
from pinbump.github.http import HttpClient, HttpError, RealHttpClient

__all__ = ["GITHUB_API_URL", "GitHubClient"]

GITHUB_API_URL = "https://api.github.com"
_API_VERSION = "2022-11-28"


class GitHubClient:
    """Authenticated GitHub API client.

    Attributes:
        api_url: Base URL of the REST API (GitHub Enterprise uses another one)
    """

    def __init__(
        self,
        token: str,
        *,
        http: HttpClient | None = None,
        api_url: str = GITHUB_API_URL,
    ) -> None:
        self._token = token
        self._http = http if http is not None else RealHttpClient()
        self.api_url = api_url.rstrip("/")

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": _API_VERSION,
        }

    def get_branch_sha(self, owner: str, repo: str, branch: str) -> Result[str, HttpError]:
        """Return the full object id ``refs/heads/<branch>`` points at.

        Example:
            >>> client.get_branch_sha("acme", "billing", "master")
            Ok('1a2b3c4d5e6f...')
        """
        url = f"{self.api_url}/repos/{owner}/{repo}/git/ref/heads/{quote(branch)}"
        result = self._http.request_json("GET", url, headers=self._headers())
        if isinstance(result, Err):
            return result

        sha = get_nested_str(result.value, "object", "sha")
        if sha is None:
            return Err(HttpError(url=url, status=0, message="Missing object.sha in response"))
        return Ok(sha)

    def create_pull_request(
        self,
        owner: str,
        repo: str,
        *,
        head: str,
        base: str,
        title: str,
        body: str,
    ) -> Result[str, HttpError]:
        """Open a pull request and return its web URL."""
        url = f"{self.api_url}/repos/{owner}/{repo}/pulls"
        payload = {"title": title, "body": body, "head": head, "base": base}
        result = self._http.request_json("POST", url, headers=self._headers(), payload=payload)
        if isinstance(result, Err):
            return result

        data = as_str_dict(result.value) or {}
        html_url = get_str(data, "html_url")
        if html_url is None or not html_url.startswith("https://"):
            return Err(HttpError(url=url, status=0, message="Missing html_url in response"))
        return Ok(html_url)
