from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from pinbump.core.result import Err, Ok
from pinbump.services.bump.model import (
    Transition,
    build_request,
    is_version_identifier,
    short_identifier,
)


def _args(**overrides: Any) -> dict[str, Any]:
    args: dict[str, Any] = {
        "owner": "acme",
        "repository": "svc",
        "environment": "dev",
        "manifest": "values.yaml",
        "tag": "image",
        "explicit_identifier": "",
        "main_branch": "master",
        "pr_repository": "devops",
        "host": "github.com",
    }
    args.update(overrides)
    return args


def test_short_identifier() -> None:
    assert short_identifier("1a2b3c4d5e6f") == "1a2b3c4d"


@pytest.mark.parametrize(
    ("value", "expected"),
    [("1a2b3c4d", True), ("abc_defg", True), ("1a2b3c4", False), ("1a2b-c4d", False)],
)
def test_is_version_identifier(value: str, expected: bool) -> None:
    assert is_version_identifier(value) is expected


def test_transition_noop() -> None:
    assert Transition("a", "a").is_noop is True
    assert Transition("a", "b").is_noop is False


def test_build_request_ok() -> None:
    result = build_request(**_args(explicit_identifier="  22222222 "))

    assert isinstance(result, Ok)
    req = result.value
    assert req.environment == "dev"
    assert req.manifest == Path("values.yaml")
    assert req.explicit_identifier == "22222222"


def test_build_request_empty_identifier_means_resolve() -> None:
    result = build_request(**_args(explicit_identifier=""))

    assert isinstance(result, Ok)
    assert result.value.explicit_identifier is None


@pytest.mark.parametrize("env", [None, "", "staging", "PROD"])
def test_build_request_rejects_environment(env: str | None) -> None:
    result = build_request(**_args(environment=env))

    assert isinstance(result, Err)
    assert result.error.kind == "prerequisite"
    assert "'dev' or 'prod'" in result.error.message


@pytest.mark.parametrize(
    ("field", "flag"),
    [("owner", "-o"), ("repository", "-r"), ("manifest", "-f"), ("tag", "-t")],
)
def test_build_request_requires(field: str, flag: str) -> None:
    result = build_request(**_args(**{field: None}))

    assert isinstance(result, Err)
    assert result.error.kind == "prerequisite"
    assert flag in result.error.message
