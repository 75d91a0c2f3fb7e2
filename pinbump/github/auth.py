"""GitHub credential lookup.

The token comes from ``GITHUB_TOKEN``/``GH_TOKEN`` when set, otherwise from
the local GitHub CLI. Parsing of the CLI output lives here so the rest of
the code only ever sees a plain token string.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from pinbump.core.result import Err, Ok, Result
from pinbump.platform.process import run as run_process

__all__ = ["AuthError", "TOKEN_ENV_VARS", "parse_token", "resolve_token", "token_from_env"]

TOKEN_ENV_VARS = ("GITHUB_TOKEN", "GH_TOKEN")
_GH_TIMEOUT_SECONDS = 60.0


@dataclass(frozen=True, slots=True)
class AuthError:
    message: str
    hint: str | None = None


def token_from_env(env: Mapping[str, str]) -> str | None:
    for name in TOKEN_ENV_VARS:
        value = env.get(name, "").strip()
        if value:
            return value
    return None


def parse_token(output: str) -> Result[str, AuthError]:
    """Extract a token from GitHub CLI output.

    Accepts the bare output of ``gh auth token`` or the ``Token: <value>``
    line printed by ``gh auth status --show-token``.
    """
    for line in output.splitlines():
        if "Token:" in line:
            value = line.split("Token:", 1)[1].split()
            if len(value) == 1:
                return Ok(value[0])
            return Err(AuthError(message="malformed Token line in gh output", hint=line.strip()))

    fields = output.split()
    if len(fields) == 1:
        return Ok(fields[0])
    if not fields:
        return Err(AuthError(message="gh returned no token", hint="Run: gh auth login"))
    return Err(AuthError(message="unexpected gh auth output", hint="Run: gh auth token"))


def resolve_token(
    *, cwd: Path, env: Mapping[str, str] | None = None
) -> Result[str, AuthError]:
    token = token_from_env(os.environ if env is None else env)
    if token is not None:
        return Ok(token)

    result = run_process(["gh", "auth", "token"], cwd=cwd, timeout=_GH_TIMEOUT_SECONDS)
    if isinstance(result, Err):
        return Err(
            AuthError(
                message="failed to get token from gh cli",
                hint=result.error.detail or "Run: gh auth login",
            )
        )
    return parse_token(result.value)
