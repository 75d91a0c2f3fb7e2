from __future__ import annotations

import ast
import os
from pathlib import Path

import pytest


def _require_arch_checks_enabled() -> None:
    if os.getenv("PINBUMP_ARCH_CHECKS") != "1":
        pytest.skip("architecture checks are opt-in; set PINBUMP_ARCH_CHECKS=1 to enable")


def _package_root() -> Path:
    return Path(__file__).resolve().parents[2]


def _iter_source_files(base: Path) -> list[Path]:
    root = _package_root()
    files: list[Path] = []
    for path in sorted(base.rglob("*.py")):
        rel = path.relative_to(root)
        if rel.parts and rel.parts[0] == "test":
            continue
        if any(part == "__pycache__" for part in rel.parts):
            continue
        files.append(path)
    return files


def _read_tree(path: Path) -> ast.AST:
    return ast.parse(path.read_text(encoding="utf-8"), filename=str(path))


def _imports(tree: ast.AST) -> list[tuple[str, int]]:
    found: list[tuple[str, int]] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            found.extend((alias.name, node.lineno) for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and not node.level and node.module:
            found.append((node.module, node.lineno))
    return found


def _matches_prefix(module: str, prefix: str) -> bool:
    return module == prefix or module.startswith(prefix + ".")


def test_subprocess_is_only_used_by_the_process_wrapper() -> None:
    _require_arch_checks_enabled()

    root = _package_root()
    allowlist = {"platform/process.py"}

    offenders: list[str] = []
    for file_path in _iter_source_files(root):
        rel = file_path.relative_to(root)
        if rel.as_posix() in allowlist:
            continue
        for module, line in _imports(_read_tree(file_path)):
            if _matches_prefix(module, "subprocess"):
                offenders.append(f"{rel}:{line}: direct subprocess import")

    assert not offenders, "Subprocess policy violations:\n" + "\n".join(offenders)


def test_rich_is_only_imported_by_the_console() -> None:
    _require_arch_checks_enabled()

    root = _package_root()
    allowlist = {"output/console.py"}

    offenders: list[str] = []
    for file_path in _iter_source_files(root):
        rel = file_path.relative_to(root)
        if rel.as_posix() in allowlist:
            continue
        for module, line in _imports(_read_tree(file_path)):
            if _matches_prefix(module, "rich"):
                offenders.append(f"{rel}:{line}: direct rich import '{module}'")

    assert not offenders, "Direct rich usage policy violations:\n" + "\n".join(offenders)


def test_services_do_not_import_cli_modules() -> None:
    _require_arch_checks_enabled()

    root = _package_root()
    offenders: list[str] = []
    for file_path in _iter_source_files(root / "services"):
        rel = file_path.relative_to(root)
        for module, line in _imports(_read_tree(file_path)):
            if _matches_prefix(module, "pinbump.cli") or _matches_prefix(module, "typer"):
                offenders.append(f"{rel}:{line}: forbidden import '{module}'")

    assert not offenders, "services -> cli dependency violations:\n" + "\n".join(offenders)
