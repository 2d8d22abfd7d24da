"""
Error taxonomy for drift scans.

Collaborators raise these typed errors so callers never have to inspect
git's message text to decide what went wrong.
"""

from typing import Iterable


class ConfigDriftError(Exception):
    """Base class for every fatal error reported by the CLI."""


class UsageError(ConfigDriftError):
    """A required command-line argument is missing."""


class InvalidReferenceError(ConfigDriftError):
    """A revision reference is neither a tag nor a commit in history."""

    def __init__(self, refs: Iterable[str]):
        self.refs = list(refs)
        super().__init__(f"Invalid tag or commit: {', '.join(self.refs)}")


class RepositoryAccessError(ConfigDriftError):
    """The configured repository path is missing or not a git working copy."""

    def __init__(self, repo_path, reason: str = ""):
        self.repo_path = str(repo_path)
        message = f"Directory {self.repo_path} does not exist or is not a Git repository"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class PathNotFoundError(ConfigDriftError):
    """A directory to enumerate does not exist at the given revision."""

    def __init__(self, path: str, ref: str):
        self.path = path
        self.ref = ref
        super().__init__(f"Invalid path: {path} in {ref}")


class FetchError(ConfigDriftError):
    """Reading a file at a revision failed for a reason other than absence."""

    def __init__(self, path: str, ref: str, reason: str):
        self.path = path
        self.ref = ref
        super().__init__(f"Cannot read {path} from {ref}: {reason}")
