"""Git repository abstraction.

``Repository`` is the version-control adapter used by a bump run. Every
operation either succeeds or returns a ``GitError``; there is no
partial-success state exposed to callers.

Usage:
    repo = Repository(Path("/path/to/devops"))

    if repo.branch_exists("billing_prod_1a2b3c4d"):
        result = repo.checkout("billing_prod_1a2b3c4d")
    else:
        result = repo.create_branch("billing_prod_1a2b3c4d")

    match result:
        case Ok(_):
            ...
        case Err(e):
            print(f"{e.command}: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pinbump.core.result import Err, Ok, Result
from pinbump.platform.process import ProcessError
from pinbump.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0
_GIT_NETWORK_TIMEOUT_SECONDS = 3 * 60.0

__all__ = [
    "GitError",
    "Repository",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git command that failed (without the ``git`` prefix)
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


class Repository:
    """A local git working tree.

    Attributes:
        path: Path to the repository root
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def branch_exists(self, name: str) -> bool:
        """True if a local branch called ``name`` exists."""
        result = self._run(["rev-parse", "--verify", "--quiet", f"refs/heads/{name}"])
        return isinstance(result, Ok)

    def checkout(self, name: str) -> Result[None, GitError]:
        return self._simple(["checkout", name], fallback="checkout failed")

    def create_branch(self, name: str) -> Result[None, GitError]:
        """Create ``name`` from the current checkout point and switch to it."""
        return self._simple(["checkout", "-b", name], fallback="branch creation failed")

    def stage(self, path: Path) -> Result[None, GitError]:
        return self._simple(["add", "--", str(path)], fallback="git add failed")

    def commit(self, message: str) -> Result[None, GitError]:
        """Commit staged changes.

        Fails when nothing is staged; git reports that on stdout.
        """
        return self._simple(["commit", "-m", message], fallback="git commit failed")

    def push(self, name: str) -> Result[None, GitError]:
        return self._simple(["push", "origin", name], fallback="git push failed")

    def _simple(self, args: list[str], *, fallback: str) -> Result[None, GitError]:
        result = self._run(args)
        match result:
            case Err(e):
                return Err(
                    GitError(
                        command=" ".join(args),
                        message=e.detail or fallback,
                        returncode=e.returncode,
                    )
                )
            case Ok(_):
                return Ok(None)

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        network = bool(args) and args[0] == "push"
        timeout = _GIT_NETWORK_TIMEOUT_SECONDS if network else _GIT_TIMEOUT_SECONDS
        return run_process(["git", "-C", str(self.path), *args], cwd=self.path, timeout=timeout)
