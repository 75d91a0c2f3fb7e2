from __future__ import annotations

from pathlib import Path

import pytest

from pinbump.core.result import Err, Ok, Result
from pinbump.github import auth as auth_mod
from pinbump.github.auth import parse_token, resolve_token, token_from_env
from pinbump.platform.process import ProcessError


class TestParseToken:
    def test_bare_token(self) -> None:
        assert parse_token("gho_abc123\n") == Ok("gho_abc123")

    def test_status_token_line(self) -> None:
        output = (
            "github.com\n"
            "  ✓ Logged in to github.com account octo (keyring)\n"
            "  - Active account: true\n"
            "  - Git operations protocol: https\n"
            "  - Token: gho_abc123\n"
        )
        assert parse_token(output) == Ok("gho_abc123")

    def test_empty_output(self) -> None:
        result = parse_token("  \n")
        assert isinstance(result, Err)
        assert "no token" in result.error.message

    def test_unexpected_output(self) -> None:
        result = parse_token("You are not logged into any GitHub hosts.")
        assert isinstance(result, Err)
        assert "unexpected" in result.error.message

    def test_malformed_token_line(self) -> None:
        result = parse_token("  - Token:\n")
        assert isinstance(result, Err)
        assert "malformed" in result.error.message


class TestTokenFromEnv:
    def test_prefers_github_token(self) -> None:
        assert token_from_env({"GITHUB_TOKEN": "a", "GH_TOKEN": "b"}) == "a"

    def test_falls_back_to_gh_token(self) -> None:
        assert token_from_env({"GITHUB_TOKEN": " ", "GH_TOKEN": "b"}) == "b"

    def test_none(self) -> None:
        assert token_from_env({}) is None


class TestResolveToken:
    def test_env_skips_gh(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        def fail_run(*args: object, **kwargs: object) -> Result[str, ProcessError]:
            raise AssertionError("gh must not be called")

        monkeypatch.setattr(auth_mod, "run_process", fail_run)

        assert resolve_token(cwd=tmp_path, env={"GH_TOKEN": "tok"}) == Ok("tok")

    def test_uses_gh_cli(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        seen: list[list[str]] = []

        def fake_run(
            cmd: list[str], cwd: Path, env: dict[str, str] | None = None, *, timeout: float | None = None
        ) -> Result[str, ProcessError]:
            seen.append(cmd)
            return Ok("gho_fromcli\n")

        monkeypatch.setattr(auth_mod, "run_process", fake_run)

        assert resolve_token(cwd=tmp_path, env={}) == Ok("gho_fromcli")
        assert seen == [["gh", "auth", "token"]]

    def test_gh_failure(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        def fake_run(
            cmd: list[str], cwd: Path, env: dict[str, str] | None = None, *, timeout: float | None = None
        ) -> Result[str, ProcessError]:
            return Err(ProcessError(tuple(cmd), 1, "", "not logged in"))

        monkeypatch.setattr(auth_mod, "run_process", fake_run)

        result = resolve_token(cwd=tmp_path, env={})

        assert isinstance(result, Err)
        assert result.error.hint == "not logged in"
