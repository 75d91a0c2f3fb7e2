"""Bindings from the git/GitHub adapters to the bump collaborator protocols.

Adapter errors are translated into ``BumpError`` here and nowhere else.
"""

from __future__ import annotations

from pinbump.core.result import Result
from pinbump.git.repository import GitError
from pinbump.github.auth import AuthError
from pinbump.github.client import GitHubClient
from pinbump.github.http import HttpError
from pinbump.services.bump.errors import BumpError


def from_git_error(error: GitError) -> BumpError:
    return BumpError(
        kind="external_tool",
        message=f"git {error.command} failed (exit {error.returncode})",
        hint=error.message or None,
    )


def from_auth_error(error: AuthError) -> BumpError:
    return BumpError(kind="prerequisite", message=error.message, hint=error.hint)


class GitHubReferenceLookup:
    """ReferenceLookup backed by the GitHub refs API."""

    def __init__(self, client: GitHubClient) -> None:
        self._client = client

    def head_sha(self, owner: str, repository: str, branch: str) -> Result[str, BumpError]:
        return self._client.get_branch_sha(owner, repository, branch).map_err(
            lambda e: _lookup_error(e, owner=owner, repository=repository)
        )


def _lookup_error(error: HttpError, *, owner: str, repository: str) -> BumpError:
    return BumpError(
        kind="resolution",
        message=f"error getting ref for {owner}/{repository}",
        hint=str(error),
    )


class GitHubPullRequestPublisher:
    """PullRequestPublisher opening PRs in one fixed repository of the owner."""

    def __init__(self, client: GitHubClient, *, repository: str) -> None:
        self._client = client
        self.repository = repository

    def open_pull_request(
        self,
        owner: str,
        head: str,
        base: str,
        title: str,
        body: str,
    ) -> Result[str, BumpError]:
        return self._client.create_pull_request(
            owner,
            self.repository,
            head=head,
            base=base,
            title=title,
            body=body,
        ).map_err(
            lambda e: BumpError(
                kind="external_tool",
                message=f"create pull request in {owner}/{self.repository}",
                hint=str(e),
            )
        )
