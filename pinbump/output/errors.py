"""Error presentation utilities.

Centralized failure formatting and exit code mapping for the CLI.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pinbump.core.errors import ErrorCode
from pinbump.output.console import Style
from pinbump.services.bump.errors import BumpError

if TYPE_CHECKING:
    from pinbump.output.console import ConsoleProtocol
    from pinbump.services.bump.coordinator import StageFailure

__all__ = ["bump_error_exit_code", "print_bump_error", "print_stage_failure"]


def print_bump_error(error: BumpError, console: ConsoleProtocol) -> None:
    console.error(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)


def print_stage_failure(failure: StageFailure, console: ConsoleProtocol) -> None:
    """Print a single fatal message naming the failed stage."""
    console.error(failure.pretty())
    if failure.error.hint:
        console.print(f"hint: {failure.error.hint}", Style.DIM)


def bump_error_exit_code(error: BumpError) -> int:
    match error.kind:
        case "prerequisite" | "not_found" | "no_change":
            return int(ErrorCode.USER_ERROR)
        case "external_tool":
            return int(ErrorCode.ENV_ERROR)
        case "resolution":
            return int(ErrorCode.NETWORK_ERROR)
        case "io":
            return int(ErrorCode.IO_ERROR)
