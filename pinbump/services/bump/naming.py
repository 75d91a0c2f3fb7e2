from __future__ import annotations

from dataclasses import dataclass

from pinbump.services.bump.model import Transition


@dataclass(frozen=True, slots=True)
class ChangeName:
    """Branch and title of a bump, derived only from its three inputs.

    Re-running with the same repository, environment and identifier yields
    the same branch, which is what lets a second run reuse it.
    """

    repository: str
    environment: str
    identifier: str

    @property
    def branch(self) -> str:
        return f"{self.repository}_{self.environment}_{self.identifier}"

    @property
    def title(self) -> str:
        return f"{self.repository} {self.environment.upper()} {self.identifier}"


def compare_url(*, host: str, owner: str, repository: str, transition: Transition) -> str:
    return (
        f"https://{host}/{owner}/{repository}/compare/{transition.old}...{transition.new}"
    )
