"""Tests for git/repository.py."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import pytest

from pinbump.core.result import Err, Ok, Result
from pinbump.git import repository as repo_mod
from pinbump.git.repository import GitError, Repository
from pinbump.platform.process import ProcessError


class _FakeGit:
    def __init__(self, failures: dict[str, ProcessError] | None = None) -> None:
        self.calls: list[list[str]] = []
        self.timeouts: list[float | None] = []
        self.failures = failures or {}

    def __call__(
        self, cmd: list[str], cwd: Path, env: dict[str, str] | None = None, *, timeout: float | None = None
    ) -> Result[str, ProcessError]:
        del cwd, env
        self.calls.append(cmd)
        self.timeouts.append(timeout)
        verb = cmd[3]
        if verb in self.failures:
            return Err(self.failures[verb])
        return Ok("")


def _proc_err(*, stderr: str = "", stdout: str = "", returncode: int = 1) -> ProcessError:
    return ProcessError(command=("git",), returncode=returncode, stdout=stdout, stderr=stderr)


class TestRepositoryCommands:
    def test_branch_exists_verifies_local_ref(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        fake = _FakeGit()
        monkeypatch.setattr(repo_mod, "run_process", fake)

        assert Repository(tmp_path).branch_exists("svc_dev_1a2b3c4d") is True
        assert fake.calls == [
            [
                "git",
                "-C",
                str(tmp_path),
                "rev-parse",
                "--verify",
                "--quiet",
                "refs/heads/svc_dev_1a2b3c4d",
            ]
        ]

    def test_branch_missing(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(repo_mod, "run_process", _FakeGit({"rev-parse": _proc_err()}))
        assert Repository(tmp_path).branch_exists("nope") is False

    def test_create_branch(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        fake = _FakeGit()
        monkeypatch.setattr(repo_mod, "run_process", fake)

        assert isinstance(Repository(tmp_path).create_branch("b"), Ok)
        assert fake.calls[0][3:] == ["checkout", "-b", "b"]

    def test_stage_commit_push(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        fake = _FakeGit()
        monkeypatch.setattr(repo_mod, "run_process", fake)
        repo = Repository(tmp_path)

        repo.stage(Path("deploy/values.yaml"))
        repo.commit("svc DEV 1a2b3c4d")
        repo.push("svc_dev_1a2b3c4d")

        assert [c[3:] for c in fake.calls] == [
            ["add", "--", "deploy/values.yaml"],
            ["commit", "-m", "svc DEV 1a2b3c4d"],
            ["push", "origin", "svc_dev_1a2b3c4d"],
        ]
        assert fake.timeouts[2] is not None
        assert fake.timeouts[2] > fake.timeouts[0]  # type: ignore[operator]

    def test_commit_failure_uses_stdout_when_stderr_empty(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        failure = _proc_err(stdout="nothing to commit, working tree clean\n")
        monkeypatch.setattr(repo_mod, "run_process", _FakeGit({"commit": failure}))

        result = Repository(tmp_path).commit("msg")

        assert result == Err(
            GitError(
                command="commit -m msg",
                message="nothing to commit, working tree clean",
                returncode=1,
            )
        )

    def test_checkout_failure_fallback_message(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(repo_mod, "run_process", _FakeGit({"checkout": _proc_err()}))

        result = Repository(tmp_path).checkout("b")

        assert isinstance(result, Err)
        assert result.error.message == "checkout failed"


def _git(cwd: Path, *args: str) -> str:
    proc = subprocess.run(["git", *args], cwd=cwd, capture_output=True, text=True, check=True)
    return proc.stdout


@pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")
class TestRepositoryWithGit:
    @pytest.fixture
    def work_tree(self, tmp_path: Path) -> Path:
        _git(tmp_path, "init", "-q")
        _git(tmp_path, "config", "user.email", "release@example.com")
        _git(tmp_path, "config", "user.name", "Release Bot")
        _git(tmp_path, "config", "commit.gpgsign", "false")
        (tmp_path / "values.yaml").write_text('image: "master_11111111"\n', encoding="utf-8")
        _git(tmp_path, "add", "values.yaml")
        _git(tmp_path, "commit", "-q", "-m", "init")
        return tmp_path

    def test_create_then_reuse_branch(self, work_tree: Path) -> None:
        repo = Repository(work_tree)
        assert repo.branch_exists("svc_dev_22222222") is False

        assert isinstance(repo.create_branch("svc_dev_22222222"), Ok)
        assert repo.branch_exists("svc_dev_22222222") is True

        # Creating it twice fails; checking it out does not.
        assert isinstance(repo.create_branch("svc_dev_22222222"), Err)
        assert isinstance(repo.checkout("svc_dev_22222222"), Ok)

    def test_commit_staged_manifest(self, work_tree: Path) -> None:
        repo = Repository(work_tree)
        (work_tree / "values.yaml").write_text('image: "master_22222222"\n', encoding="utf-8")

        assert isinstance(repo.stage(Path("values.yaml")), Ok)
        assert isinstance(repo.commit("svc DEV 22222222"), Ok)
        assert _git(work_tree, "log", "-1", "--format=%s").strip() == "svc DEV 22222222"

    def test_commit_without_changes_fails(self, work_tree: Path) -> None:
        repo = Repository(work_tree)

        assert isinstance(repo.stage(Path("values.yaml")), Ok)
        result = repo.commit("svc DEV 22222222")

        assert isinstance(result, Err)
        assert result.error.command.startswith("commit")
