"""Git operations.

Usage:
    from pinbump.git import Repository

    repo = Repository(Path("."))
    repo.create_branch("billing_dev_1a2b3c4d")
"""

from pinbump.git.repository import GitError, Repository

__all__ = [
    "GitError",
    "Repository",
]
