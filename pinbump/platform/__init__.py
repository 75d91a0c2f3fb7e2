"""Platform layer: subprocesses and files."""

from .files import atomic_write_text, read_text_exact
from .process import ProcessError, non_interactive_env, run

__all__ = [
    # files
    "atomic_write_text",
    "read_text_exact",
    # process
    "ProcessError",
    "non_interactive_env",
    "run",
]
