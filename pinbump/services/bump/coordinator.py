"""Sequencing of the side effects of a bump run.

A run walks a fixed list of stages. Each stage either advances the session
to the next one or stops the run; nothing is retried and nothing already
done is undone. Re-running from the start is the recovery path, which is
why ENSURE_BRANCH reuses an existing branch instead of failing on it.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Protocol

from pinbump.core.result import Err, Ok, Result
from pinbump.git.repository import GitError
from pinbump.output.console import ConsoleProtocol, Style
from pinbump.services.bump.adapters import from_git_error
from pinbump.services.bump.errors import BumpError
from pinbump.services.bump.manifest import apply_transition, preview_transition
from pinbump.services.bump.model import (
    BumpOutcome,
    BumpRequest,
    Transition,
    is_version_identifier,
)
from pinbump.services.bump.naming import ChangeName, compare_url
from pinbump.services.bump.resolver import (
    ReferenceLookup,
    resolve_new_identifier,
    resolve_old_identifier,
)

DRY_RUN_PR_URL = "(dry-run)"


class Stage(Enum):
    RESOLVE_IDENTIFIERS = "resolve identifiers"
    ENSURE_BRANCH = "ensure branch"
    PATCH_MANIFEST = "patch manifest"
    COMMIT_CHANGE = "commit change"
    PUSH_BRANCH = "push branch"
    OPEN_PULL_REQUEST = "open pull request"
    DONE = "done"

    def __str__(self) -> str:
        return self.value


STAGE_ORDER: tuple[Stage, ...] = tuple(Stage)


def next_stage(stage: Stage) -> Stage:
    if stage is Stage.DONE:
        return stage
    return STAGE_ORDER[STAGE_ORDER.index(stage) + 1]


class VersionControl(Protocol):
    def branch_exists(self, name: str) -> bool: ...

    def checkout(self, name: str) -> Result[None, GitError]: ...

    def create_branch(self, name: str) -> Result[None, GitError]: ...

    def stage(self, path: Path) -> Result[None, GitError]: ...

    def commit(self, message: str) -> Result[None, GitError]: ...

    def push(self, name: str) -> Result[None, GitError]: ...


class PullRequestPublisher(Protocol):
    def open_pull_request(
        self,
        owner: str,
        head: str,
        base: str,
        title: str,
        body: str,
    ) -> Result[str, BumpError]:
        """Open a PR and return its URL."""
        ...


@dataclass(frozen=True, slots=True)
class StageFailure:
    """The stage a run stopped at, and why."""

    stage: Stage
    error: BumpError

    def pretty(self) -> str:
        return f"{self.stage}: {self.error.message}"


@dataclass(frozen=True, slots=True)
class BumpPlan:
    transition: Transition
    change: ChangeName
    description: str


@dataclass(frozen=True, slots=True)
class BumpSession:
    stage: Stage
    plan: BumpPlan | None = None
    branch_reused: bool = False
    pr_url: str | None = None

    def require_plan(self) -> BumpPlan:
        if self.plan is None:
            raise RuntimeError(f"stage {self.stage} reached before identifiers were resolved")
        return self.plan


StageHandler = Callable[[BumpSession], Result[BumpSession, BumpError]]


class PublicationCoordinator:
    """Runs one bump from identifier resolution to an open pull request."""

    def __init__(
        self,
        request: BumpRequest,
        *,
        vcs: VersionControl,
        lookup: ReferenceLookup,
        publisher: PullRequestPublisher,
        console: ConsoleProtocol,
        dry_run: bool = False,
    ) -> None:
        self.request = request
        self._vcs = vcs
        self._lookup = lookup
        self._publisher = publisher
        self._console = console
        self.dry_run = dry_run

    def run(self) -> Result[BumpOutcome, StageFailure]:
        handlers = self._handlers()
        session = BumpSession(stage=Stage.RESOLVE_IDENTIFIERS)

        while session.stage is not Stage.DONE:
            outcome = handlers[session.stage](session)
            if isinstance(outcome, Err):
                return Err(StageFailure(stage=session.stage, error=outcome.error))
            session = replace(outcome.value, stage=next_stage(session.stage))

        plan = session.require_plan()
        return Ok(
            BumpOutcome(
                transition=plan.transition,
                branch=plan.change.branch,
                title=plan.change.title,
                description=plan.description,
                pr_url=session.pr_url or DRY_RUN_PR_URL,
                branch_reused=session.branch_reused,
            )
        )

    def _handlers(self) -> dict[Stage, StageHandler]:
        return {
            Stage.RESOLVE_IDENTIFIERS: self._resolve_identifiers,
            Stage.ENSURE_BRANCH: self._ensure_branch,
            Stage.PATCH_MANIFEST: self._patch_manifest,
            Stage.COMMIT_CHANGE: self._commit_change,
            Stage.PUSH_BRANCH: self._push_branch,
            Stage.OPEN_PULL_REQUEST: self._open_pull_request,
        }

    def _resolve_identifiers(self, session: BumpSession) -> Result[BumpSession, BumpError]:
        req = self.request
        new = resolve_new_identifier(
            req.explicit_identifier,
            lookup=self._lookup,
            owner=req.owner,
            repository=req.repository,
            main_branch=req.main_branch,
        )
        if isinstance(new, Err):
            return new

        old = resolve_old_identifier(req.manifest, main_branch=req.main_branch, tag=req.tag)
        if isinstance(old, Err):
            return old

        transition = Transition(old=old.value, new=new.value)
        self._console.print(f"{req.tag}: {transition.old} -> {transition.new}", Style.DIM)
        if not is_version_identifier(transition.new):
            self._console.warning(f"{transition.new!r} is not an 8-character commit hash")
        if transition.is_noop:
            return Err(
                BumpError(
                    kind="no_change",
                    message=f"{req.manifest} already pins {req.tag} to {transition.new}",
                )
            )

        plan = BumpPlan(
            transition=transition,
            change=ChangeName(req.repository, req.environment, transition.new),
            description=compare_url(
                host=req.host,
                owner=req.owner,
                repository=req.repository,
                transition=transition,
            ),
        )
        return Ok(replace(session, plan=plan))

    def _ensure_branch(self, session: BumpSession) -> Result[BumpSession, BumpError]:
        branch = session.require_plan().change.branch

        if self._vcs.branch_exists(branch):
            self._console.print(f"git checkout {branch}", Style.DIM)
            if not self.dry_run:
                result = self._vcs.checkout(branch)
                if isinstance(result, Err):
                    return Err(from_git_error(result.error))
            return Ok(replace(session, branch_reused=True))

        self._console.print(f"git checkout -b {branch}", Style.DIM)
        if not self.dry_run:
            result = self._vcs.create_branch(branch)
            if isinstance(result, Err):
                return Err(from_git_error(result.error))
        return Ok(replace(session, branch_reused=False))

    def _patch_manifest(self, session: BumpSession) -> Result[BumpSession, BumpError]:
        req = self.request
        transition = session.require_plan().transition
        self._console.print(f"patch {req.manifest}", Style.DIM)

        patch = preview_transition if self.dry_run else apply_transition
        changed = patch(
            req.manifest,
            main_branch=req.main_branch,
            tag=req.tag,
            old=transition.old,
            new=transition.new,
        )
        if isinstance(changed, Err):
            return changed
        if not changed.value:
            target = f'{req.tag}: "{req.main_branch}_{transition.old}"'
            return Err(
                BumpError(
                    kind="no_change",
                    message=f"nothing to replace in {req.manifest}",
                    hint=f"expected the exact text {target}",
                )
            )
        return Ok(session)

    def _commit_change(self, session: BumpSession) -> Result[BumpSession, BumpError]:
        req = self.request
        title = session.require_plan().change.title
        self._console.print(f"git add -- {req.manifest}", Style.DIM)
        self._console.print(f"git commit -m {title}", Style.DIM)
        if self.dry_run:
            return Ok(session)

        staged = self._vcs.stage(req.manifest)
        if isinstance(staged, Err):
            return Err(from_git_error(staged.error))

        committed = self._vcs.commit(title)
        if isinstance(committed, Err):
            return Err(from_git_error(committed.error))
        return Ok(session)

    def _push_branch(self, session: BumpSession) -> Result[BumpSession, BumpError]:
        branch = session.require_plan().change.branch
        self._console.print(f"git push origin {branch}", Style.DIM)
        if self.dry_run:
            return Ok(session)

        pushed = self._vcs.push(branch)
        if isinstance(pushed, Err):
            return Err(from_git_error(pushed.error))
        return Ok(session)

    def _open_pull_request(self, session: BumpSession) -> Result[BumpSession, BumpError]:
        req = self.request
        plan = session.require_plan()
        self._console.print(
            f"open pull request {req.owner}/{req.pr_repository}: "
            f"{plan.change.branch} -> {req.main_branch}",
            Style.DIM,
        )
        if self.dry_run:
            return Ok(replace(session, pr_url=DRY_RUN_PR_URL))

        url = self._publisher.open_pull_request(
            req.owner,
            plan.change.branch,
            req.main_branch,
            plan.change.title,
            plan.description,
        )
        if isinstance(url, Err):
            return url
        return Ok(replace(session, pr_url=url.value))
