"""
Git Operations Module - Read-only access to the cloud-config repository

This module resolves revision references, enumerates files under a directory
at a revision and reads file content at a revision. It is the only place that
talks to git; everything above it sees typed errors from
``config_drift.exceptions``.
"""

import logging
import threading
from pathlib import Path
from typing import Dict, List, Optional, Set, Union

import git
from git.exc import BadName, BadObject, GitCommandError, InvalidGitRepositoryError, NoSuchPathError

from .exceptions import FetchError, InvalidReferenceError, PathNotFoundError, RepositoryAccessError
from .properties import parse_properties

logger = logging.getLogger(__name__)


class GitBackend:
    """
    Revision resolver, content fetcher and path enumerator over GitPython.

    A ``git.Repo`` keeps persistent ``git cat-file`` processes that must not
    be shared between threads, so each worker thread lazily opens its own
    handle. Call ``close()`` (or use the backend as a context manager) when
    done.
    """

    def __init__(self, repo_path: Union[str, Path]):
        self.repo_path = Path(repo_path)
        self._local = threading.local()
        self._lock = threading.Lock()
        self._handles: List[git.Repo] = []
        self._valid_refs: Optional[Set[str]] = None
        # Open eagerly so a bad path fails before any other work
        self._repo()

    def __enter__(self) -> "GitBackend":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Release every repository handle opened by any thread."""
        with self._lock:
            handles, self._handles = self._handles, []
        for repo in handles:
            repo.close()

    def _repo(self) -> git.Repo:
        repo = getattr(self._local, "repo", None)
        if repo is not None:
            return repo
        try:
            repo = git.Repo(self.repo_path)
        except NoSuchPathError:
            raise RepositoryAccessError(self.repo_path, "path does not exist")
        except InvalidGitRepositoryError:
            raise RepositoryAccessError(self.repo_path, "not a git working copy")
        self._local.repo = repo
        with self._lock:
            self._handles.append(repo)
        return repo

    def verify_repository(self) -> None:
        """
        Check that the repository path is a git working copy with a .git directory.

        Raises:
            RepositoryAccessError: If the path is a bare repository or unreadable
        """
        repo = self._repo()
        if repo.bare or not (self.repo_path / ".git").exists():
            raise RepositoryAccessError(self.repo_path, "no working copy")
        logger.info(f"Repo path valid: {self.repo_path}")

    def list_refs(self) -> Set[str]:
        """
        All tag names plus every commit reachable from any ref.

        Returns:
            Set of valid revision references
        """
        if self._valid_refs is not None:
            return self._valid_refs

        repo = self._repo()
        try:
            tags = {tag.name for tag in repo.tags}
            commits = set(repo.git.rev_list("--all").split())
        except GitCommandError as e:
            raise RepositoryAccessError(self.repo_path, f"cannot read history: {e.stderr.strip()}")

        logger.debug(f"Found {len(tags)} tags and {len(commits)} commits in {self.repo_path}")
        self._valid_refs = tags | commits
        return self._valid_refs

    def verify_refs(self, *refs: str) -> None:
        """
        Ensure every reference is a tag or a commit in history.

        Raises:
            InvalidReferenceError: Naming every reference that did not resolve
        """
        valid = self.list_refs()
        invalid = [ref for ref in dict.fromkeys(refs) if ref not in valid]
        if invalid:
            raise InvalidReferenceError(invalid)

    def _commit(self, ref: str) -> git.Commit:
        try:
            return self._repo().commit(ref)
        except (BadName, BadObject, ValueError):
            raise InvalidReferenceError([ref])

    def list_files(self, ref: str, directory: str) -> List[str]:
        """
        List all file paths recursively under a directory at a revision.

        Args:
            ref: Tag or commit
            directory: Repository-relative directory (e.g. "config/pt")

        Returns:
            Sorted repository-relative file paths

        Raises:
            PathNotFoundError: If the directory does not exist at that revision
        """
        directory = directory.strip("/")
        commit = self._commit(ref)
        try:
            tree = commit.tree / directory
        except KeyError:
            raise PathNotFoundError(directory, ref)
        if tree.type != "tree":
            raise PathNotFoundError(directory, ref)

        files = sorted(item.path for item in tree.traverse() if item.type == "blob")
        logger.debug(f"{len(files)} files under {directory} in {ref}")
        return files

    def read_file(self, ref: str, path: str) -> Optional[str]:
        """
        Read a file's text at a revision.

        Returns:
            Decoded content, or None if the file does not exist at that revision

        Raises:
            FetchError: If the path is not a regular file or cannot be read
        """
        commit = self._commit(ref)
        try:
            blob = commit.tree / path
        except KeyError:
            logger.debug(f"{path} does not exist in {ref}")
            return None
        if blob.type != "blob":
            raise FetchError(path, ref, "not a regular file")

        try:
            data = blob.data_stream.read()
        except (GitCommandError, ValueError, OSError) as e:
            raise FetchError(path, ref, str(e))

        try:
            return data.decode("utf-8-sig")
        except UnicodeDecodeError:
            # Java's historical default for .properties
            logger.debug(f"{path} in {ref} is not UTF-8, decoding as ISO-8859-1")
            return data.decode("latin-1")

    def fetch_properties(self, ref: str, path: str) -> Optional[Dict[str, str]]:
        """Fetch and parse a property file; None when absent at that revision."""
        text = self.read_file(ref, path)
        if text is None:
            return None
        return parse_properties(text)
