"""In-place rewrite of a pinned identifier in a YAML manifest.

The file is never parsed as YAML: one exact, quoted ``<tag>: "<branch>_<id>"``
occurrence is swapped and every other byte is written back untouched, so
comments, key order and formatting survive.
"""

from __future__ import annotations

from pathlib import Path

from pinbump.core.result import Err, Ok, Result
from pinbump.platform.files import atomic_write_text, read_text_exact
from pinbump.services.bump.errors import BumpError


def pin_line(*, tag: str, main_branch: str, identifier: str) -> str:
    return f'{tag}: "{main_branch}_{identifier}"'


def _read(path: Path) -> Result[str, BumpError]:
    try:
        return Ok(read_text_exact(path))
    except (OSError, UnicodeDecodeError) as e:
        return Err(BumpError(kind="io", message=f"failed to read {path}", hint=str(e)))


def patched_content(
    content: str, *, main_branch: str, tag: str, old: str, new: str
) -> str:
    """Replace the first pinned occurrence of ``old`` with ``new``.

    Returns ``content`` unchanged when the exact occurrence is absent.
    """
    target = pin_line(tag=tag, main_branch=main_branch, identifier=old)
    replacement = pin_line(tag=tag, main_branch=main_branch, identifier=new)
    return content.replace(target, replacement, 1)


def preview_transition(
    path: Path, *, main_branch: str, tag: str, old: str, new: str
) -> Result[bool, BumpError]:
    """Report whether ``apply_transition`` would change the file."""
    content = _read(path)
    if isinstance(content, Err):
        return content
    out = patched_content(content.value, main_branch=main_branch, tag=tag, old=old, new=new)
    return Ok(out != content.value)


def apply_transition(
    path: Path, *, main_branch: str, tag: str, old: str, new: str
) -> Result[bool, BumpError]:
    """Rewrite the pin for ``tag`` from ``old`` to ``new``.

    Returns:
        Ok(True) if the file was rewritten, Ok(False) if the pinned
        occurrence was absent (file left as is), Err on read/write failure.
    """
    content = _read(path)
    if isinstance(content, Err):
        return content

    out = patched_content(content.value, main_branch=main_branch, tag=tag, old=old, new=new)
    if out == content.value:
        return Ok(False)

    try:
        atomic_write_text(path, out)
    except OSError as e:
        return Err(BumpError(kind="io", message=f"failed to write {path}", hint=str(e)))
    return Ok(True)
