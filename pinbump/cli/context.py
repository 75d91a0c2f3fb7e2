from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pinbump.core.result import Err, Ok, Result
from pinbump.git.repository import Repository
from pinbump.github.auth import resolve_token
from pinbump.github.client import GitHubClient
from pinbump.services.bump.adapters import (
    GitHubPullRequestPublisher,
    GitHubReferenceLookup,
    from_auth_error,
)
from pinbump.services.bump.coordinator import PullRequestPublisher, VersionControl
from pinbump.services.bump.errors import BumpError
from pinbump.services.bump.resolver import ReferenceLookup


@dataclass(frozen=True, slots=True)
class BumpContext:
    vcs: VersionControl
    lookup: ReferenceLookup
    publisher: PullRequestPublisher


def build_context(*, repo_root: Path, pr_repository: str) -> Result[BumpContext, BumpError]:
    """Wire the real git and GitHub collaborators for a run in ``repo_root``."""
    token = resolve_token(cwd=repo_root)
    if isinstance(token, Err):
        return Err(from_auth_error(token.error))

    client = GitHubClient(token.value)
    return Ok(
        BumpContext(
            vcs=Repository(repo_root),
            lookup=GitHubReferenceLookup(client),
            publisher=GitHubPullRequestPublisher(client, repository=pr_repository),
        )
    )
