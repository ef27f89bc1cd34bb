"""Git operations module.

Usage:
    from selective_pull.git import Repository

    repo = Repository(Path("/path/to/src"))
    if repo.has_commit():
        print(repo.describe())
"""

from selective_pull.git.repository import (
    CommandTrace,
    GitError,
    Repository,
    StatusEntry,
)

__all__ = [
    "CommandTrace",
    "GitError",
    "Repository",
    "StatusEntry",
]
