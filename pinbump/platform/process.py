"""Running ``git`` and ``gh`` as child processes.

Both tools are driven non-interactively: a missing credential must fail the
run instead of leaving it waiting on a terminal prompt. Failures come back as
``ProcessError`` values.

Usage:
    match run(["git", "rev-parse", "HEAD"], cwd=Path(".")):
        case Ok(stdout):
            print(stdout.strip())
        case Err(error):
            print(f"{error}: {error.detail}")
"""

from __future__ import annotations

import os
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from pinbump.core.result import Err, Ok, Result

__all__ = ["NON_INTERACTIVE_ENV", "NO_EXIT_CODE", "ProcessError", "non_interactive_env", "run"]

NON_INTERACTIVE_ENV: Mapping[str, str] = {
    "GIT_TERMINAL_PROMPT": "0",
    "GH_PROMPT_DISABLED": "1",
}

# Exit code reported when the child never produced one (not found, timed out).
NO_EXIT_CODE = -1


@dataclass(frozen=True, slots=True)
class ProcessError:
    """A child process that failed to start, timed out or exited non-zero."""

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def detail(self) -> str:
        """What the tool said about the failure: stderr, else stdout."""
        return self.stderr.strip() or self.stdout.strip()

    def __str__(self) -> str:
        shown = " ".join(self.command[:3])
        if len(self.command) > 3:
            shown += " ..."
        return f"{shown} failed (exit {self.returncode})"


def non_interactive_env(base: Mapping[str, str] | None = None) -> dict[str, str]:
    """Copy ``base`` (default: the current environment) with prompts disabled."""
    env = dict(os.environ if base is None else base)
    env.update(NON_INTERACTIVE_ENV)
    return env


def run(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Run ``cmd`` in ``cwd`` and return its stdout.

    ``env`` replaces the inherited environment when given; prompt-disabling
    variables are added either way.
    """
    command = tuple(cmd)

    def failed(returncode: int, stdout: str, stderr: str) -> Err[ProcessError]:
        return Err(ProcessError(command, returncode, stdout, stderr))

    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=non_interactive_env(env),
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        partial = e.stdout if isinstance(e.stdout, str) else ""
        return failed(NO_EXIT_CODE, partial, f"timed out after {timeout}s")
    except OSError as e:
        return failed(NO_EXIT_CODE, "", str(e))

    if proc.returncode != 0:
        return failed(proc.returncode, proc.stdout, proc.stderr)
    return Ok(proc.stdout)
