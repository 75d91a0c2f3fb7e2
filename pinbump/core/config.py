"""Typed configuration loading.

A ``pinbump.toml`` file can hold defaults for the command-line flags so a
deploy repository does not have to repeat them on every run:

    [bump]
    owner = "acme"
    repo = "billing"
    file = "deploy/values.yaml"
    tag = "image"
    master = "main"
    pr_repo = "devops"

Flags given on the command line always win over the file.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_table

__all__ = [
    "Config",
    "BumpDefaults",
    "ConfigError",
    "DEFAULT_CONFIG_NAME",
    "DEFAULT_MAIN_BRANCH",
    "DEFAULT_PR_REPOSITORY",
    "DEFAULT_WEB_HOST",
    "load_config",
    "load_config_or_default",
]

DEFAULT_CONFIG_NAME = "pinbump.toml"
DEFAULT_MAIN_BRANCH = "master"
# Deployment manifests live in a shared repository; PRs are opened there.
DEFAULT_PR_REPOSITORY = "devops"
DEFAULT_WEB_HOST = "github.com"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class BumpDefaults:
    """Defaults for one bump run, all optional."""

    owner: str | None = None
    repo: str | None = None
    env: str | None = None
    file: str | None = None
    tag: str | None = None
    master: str = DEFAULT_MAIN_BRANCH
    pr_repo: str = DEFAULT_PR_REPOSITORY
    host: str = DEFAULT_WEB_HOST


@dataclass(frozen=True, slots=True)
class Config:
    bump: BumpDefaults = field(default_factory=BumpDefaults)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        bump: StrDict = get_table(data, "bump") or {}
        return cls(
            bump=BumpDefaults(
                owner=get_str(bump, "owner"),
                repo=get_str(bump, "repo"),
                env=get_str(bump, "env"),
                file=get_str(bump, "file"),
                tag=get_str(bump, "tag"),
                master=get_str(bump, "master") or DEFAULT_MAIN_BRANCH,
                pr_repo=get_str(bump, "pr_repo") or DEFAULT_PR_REPOSITORY,
                host=get_str(bump, "host") or DEFAULT_WEB_HOST,
            )
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to pinbump.toml

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result
    return Ok(Config.from_dict(result.value))


def load_config_or_default(path: Path) -> Config:
    """Load config from file, or return defaults if it cannot be loaded."""
    result = load_config(path)
    if isinstance(result, Ok):
        return result.value
    return Config()
