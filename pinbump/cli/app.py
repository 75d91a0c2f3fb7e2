from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer

from pinbump import __version__
from pinbump.cli.context import build_context
from pinbump.core.config import DEFAULT_CONFIG_NAME, Config, load_config
from pinbump.core.errors import ErrorCode
from pinbump.core.result import Err
from pinbump.output.console import ConsoleProtocol, RichConsole, Style
from pinbump.output.errors import bump_error_exit_code, print_bump_error, print_stage_failure
from pinbump.services.bump.coordinator import PublicationCoordinator
from pinbump.services.bump.errors import BumpError
from pinbump.services.bump.model import build_request

app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    rich_markup_mode="rich",
)


def _exit(error: BumpError, *, console: ConsoleProtocol) -> NoReturn:
    print_bump_error(error, console)
    raise typer.Exit(code=bump_error_exit_code(error))


def _load_config(path: Path | None, *, console: ConsoleProtocol) -> Config:
    if path is None:
        path = Path.cwd() / DEFAULT_CONFIG_NAME
        if not path.is_file():
            return Config()

    result = load_config(path)
    if isinstance(result, Err):
        _exit(BumpError(kind="prerequisite", message=result.error.message), console=console)
    return result.value


@app.command()
def bump(
    commit: str = typer.Option(
        "", "-c", "--commit", help="8-character commit hash (default: tip of the main branch)"
    ),
    owner: str | None = typer.Option(None, "-o", "--owner", help="GitHub owner"),
    repo: str | None = typer.Option(None, "-r", "--repo", help="GitHub repository"),
    env: str | None = typer.Option(None, "-e", "--env", help="Environment (dev or prod)"),
    file: str | None = typer.Option(None, "-f", "--file", help="YAML file"),
    tag: str | None = typer.Option(None, "-t", "--tag", help="YAML tag"),
    master: str | None = typer.Option(
        None, "-m", "--master", help="Name of main branch [default: master]"
    ),
    pr_repo: str | None = typer.Option(
        None, "--pr-repo", help="Repository the PR is opened in [default: devops]"
    ),
    host: str | None = typer.Option(
        None, "--host", help="Web host used in the compare link [default: github.com]"
    ),
    config: Path | None = typer.Option(
        None, "--config", help=f"Defaults file [default: ./{DEFAULT_CONFIG_NAME} if present]"
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print actions without executing"),
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    """Pin a manifest tag to a new commit and open a pull request."""
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=int(ErrorCode.OK))

    console = RichConsole()
    err_console = RichConsole(stderr=True)

    defaults = _load_config(config, console=err_console).bump
    request = build_request(
        owner=owner or defaults.owner,
        repository=repo or defaults.repo,
        environment=env or defaults.env,
        manifest=file or defaults.file,
        tag=tag or defaults.tag,
        explicit_identifier=commit,
        main_branch=master or defaults.master,
        pr_repository=pr_repo or defaults.pr_repo,
        host=host or defaults.host,
    )
    if isinstance(request, Err):
        _exit(request.error, console=err_console)

    ctx = build_context(repo_root=Path.cwd(), pr_repository=request.value.pr_repository)
    if isinstance(ctx, Err):
        _exit(ctx.error, console=err_console)

    coordinator = PublicationCoordinator(
        request.value,
        vcs=ctx.value.vcs,
        lookup=ctx.value.lookup,
        publisher=ctx.value.publisher,
        console=console,
        dry_run=dry_run,
    )
    result = coordinator.run()
    if isinstance(result, Err):
        print_stage_failure(result.error, err_console)
        raise typer.Exit(code=bump_error_exit_code(result.error.error))

    outcome = result.value
    if dry_run:
        console.info("dry run: nothing was changed")
    else:
        console.success("Pull request created successfully")
    if outcome.branch_reused:
        console.print(f"reused existing branch {outcome.branch}", Style.DIM)
    console.print(f"URL: {outcome.pr_url}")
    console.print(f"Title: {outcome.title}")
    console.print("Description:")
    console.print(outcome.description)


def main() -> None:
    app()
