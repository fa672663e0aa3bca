"""Version-control collaborator: interface, git backend and commit flags."""

from .base import CommandOutcome, GitError, VersionControl
from .flags import CommitFlags
from .git import GitClient, parse_porcelain

__all__ = [
    "CommandOutcome",
    "CommitFlags",
    "GitClient",
    "GitError",
    "VersionControl",
    "parse_porcelain",
]
