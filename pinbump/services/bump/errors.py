"""Error type for the bump bounded context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

BumpErrorKind = Literal[
    "resolution",
    "not_found",
    "io",
    "external_tool",
    "prerequisite",
    "no_change",
]


@dataclass(frozen=True, slots=True)
class BumpError:
    """Canonical bump error payload.

    ``kind`` is stable and drives the exit code; ``message`` names what
    failed and ``hint`` carries the underlying cause when there is one.
    """

    kind: BumpErrorKind
    message: str
    hint: str | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message
