"""Git queries.

Usage:
    from releaseflow.git import Repository

    repo = Repository(Path("."))
    match repo.dirty_files():
        case Ok(entries) if entries:
            print("commit or stash your changes first")
"""

from releaseflow.git.repository import GitError, Repository, StatusEntry

__all__ = [
    "GitError",
    "Repository",
    "StatusEntry",
]
