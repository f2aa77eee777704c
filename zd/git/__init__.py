"""Git operations module.

Usage:
    from zd.git import Repository

    repo = Repository(Path("."))
    result = repo.fetch_tags()
"""

from zd.git.repository import GitError, Repository

__all__ = [
    "GitError",
    "Repository",
]
