"""Exit codes of the ``pinbump`` command.

Scripts and CI jobs branch on these values, so they do not change:

    0  pull request opened (or dry run finished)
    1  bad flags or missing credentials; tag not pinned; nothing to change
    2  a git command or a GitHub call failed
    4  the main branch head could not be resolved
    5  the manifest could not be read or written
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    NETWORK_ERROR = 4
    IO_ERROR = 5
