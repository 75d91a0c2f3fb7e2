from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, cast

from pinbump.core.result import Err, Ok, Result
from pinbump.services.bump.errors import BumpError

Environment = Literal["dev", "prod"]
ENVIRONMENTS: tuple[Environment, ...] = ("dev", "prod")

IDENTIFIER_LENGTH = 8
_IDENTIFIER_RE = re.compile(rf"\w{{{IDENTIFIER_LENGTH}}}", re.ASCII)


def short_identifier(full: str) -> str:
    """Truncate a full commit id to a VersionIdentifier (first 8 characters)."""
    return full[:IDENTIFIER_LENGTH]


def is_version_identifier(value: str) -> bool:
    return _IDENTIFIER_RE.fullmatch(value) is not None


@dataclass(frozen=True, slots=True)
class Transition:
    """The (old, new) identifier pair of one run."""

    old: str
    new: str

    @property
    def is_noop(self) -> bool:
        return self.old == self.new


@dataclass(frozen=True, slots=True)
class BumpRequest:
    """Validated inputs of one bump run."""

    owner: str
    repository: str
    environment: Environment
    manifest: Path
    tag: str
    explicit_identifier: str | None
    main_branch: str
    pr_repository: str
    host: str


@dataclass(frozen=True, slots=True)
class BumpOutcome:
    transition: Transition
    branch: str
    title: str
    description: str
    pr_url: str
    branch_reused: bool


def _missing(flag: str, what: str) -> Err[BumpError]:
    return Err(BumpError(kind="prerequisite", message=f"{what} ({flag}) is required"))


def build_request(
    *,
    owner: str | None,
    repository: str | None,
    environment: str | None,
    manifest: str | None,
    tag: str | None,
    explicit_identifier: str | None,
    main_branch: str,
    pr_repository: str,
    host: str,
) -> Result[BumpRequest, BumpError]:
    """Validate raw flag values into a BumpRequest.

    The explicit identifier is not format-checked; an empty one means
    "resolve from the main branch".
    """
    if environment not in ENVIRONMENTS:
        return Err(
            BumpError(
                kind="prerequisite",
                message="Environment (-e) must be 'dev' or 'prod'",
                hint=f"got: {environment!r}" if environment else None,
            )
        )
    if not owner:
        return _missing("-o", "Organization")
    if not repository:
        return _missing("-r", "Repository")
    if not manifest:
        return _missing("-f", "YAML file")
    if not tag:
        return _missing("-t", "YAML tag")
    if not main_branch:
        return _missing("-m", "Main branch")

    explicit = (explicit_identifier or "").strip() or None
    return Ok(
        BumpRequest(
            owner=owner,
            repository=repository,
            environment=cast(Environment, environment),
            manifest=Path(manifest),
            tag=tag,
            explicit_identifier=explicit,
            main_branch=main_branch,
            pr_repository=pr_repository,
            host=host,
        )
    )
