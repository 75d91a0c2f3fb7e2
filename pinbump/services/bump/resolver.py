"""Resolution of the old and new VersionIdentifiers of a bump."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Protocol

from pinbump.core.result import Err, Ok, Result
from pinbump.services.bump.errors import BumpError
from pinbump.services.bump.model import IDENTIFIER_LENGTH, short_identifier


class ReferenceLookup(Protocol):
    def head_sha(self, owner: str, repository: str, branch: str) -> Result[str, BumpError]:
        """Full object id at the tip of ``refs/heads/<branch>``."""
        ...


def resolve_new_identifier(
    explicit: str | None,
    *,
    lookup: ReferenceLookup,
    owner: str,
    repository: str,
    main_branch: str,
) -> Result[str, BumpError]:
    """Return the identifier to pin.

    A non-empty explicit value is used verbatim. Otherwise the tip of
    ``main_branch`` is looked up and truncated to 8 characters.
    """
    if explicit:
        return Ok(explicit)

    result = lookup.head_sha(owner, repository, main_branch)
    if isinstance(result, Err):
        return result

    full = result.value.strip()
    if len(full) < IDENTIFIER_LENGTH:
        return Err(
            BumpError(
                kind="resolution",
                message=f"no commit found at {owner}/{repository}@{main_branch}",
                hint=full or None,
            )
        )
    return Ok(short_identifier(full))


def pin_pattern(main_branch: str) -> re.Pattern[str]:
    return re.compile(rf"{re.escape(main_branch)}_(\w{{{IDENTIFIER_LENGTH}}})", re.ASCII)


def resolve_old_identifier(path: Path, *, main_branch: str, tag: str) -> Result[str, BumpError]:
    """Return the identifier currently pinned for ``tag`` in the manifest.

    Only lines containing ``tag`` are searched, so a different tag pinned
    to the same branch is never picked up. The first matching line wins.
    """
    pattern = pin_pattern(main_branch)
    try:
        with path.open("r", encoding="utf-8") as handle:
            for line in handle:
                if tag not in line:
                    continue
                m = pattern.search(line)
                if m is not None:
                    return Ok(m.group(1))
    except (OSError, UnicodeDecodeError) as e:
        return Err(
            BumpError(
                kind="io",
                message=f"failed to read {path}",
                hint=str(e),
            )
        )

    return Err(
        BumpError(
            kind="not_found",
            message=f"commit hash not found for tag {tag!r} in {path}",
            hint=f'expected a line like {tag}: "{main_branch}_<8 chars>"',
        )
    )
