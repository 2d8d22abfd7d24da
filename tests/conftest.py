from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Tuple

import git
import pytest

from config_drift.config import Config
from config_drift.exceptions import InvalidReferenceError, PathNotFoundError


class ConfigRepo:
    """Throwaway cloud-config repository for tests."""

    def __init__(self, path: Path):
        self.path = path
        self.repo = git.Repo.init(path)
        with self.repo.config_writer() as writer:
            writer.set_value("user", "name", "Drift Test")
            writer.set_value("user", "email", "drift@example.com")
            writer.set_value("commit", "gpgsign", "false")
            writer.set_value("tag", "gpgsign", "false")

    def write(self, rel: str, content: str) -> None:
        target = self.path / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")

    def commit(self, message: str, tag: Optional[str] = None) -> str:
        self.repo.git.add(A=True)
        self.repo.git.commit("-m", message, "--allow-empty")
        if tag:
            self.repo.create_tag(tag)
        return self.repo.head.commit.hexsha


@pytest.fixture
def config_repo(tmp_path: Path) -> ConfigRepo:
    return ConfigRepo(tmp_path / "cloud-config")


@pytest.fixture
def scan_config(config_repo: ConfigRepo) -> Config:
    return Config(repo_path=config_repo.path, max_workers=4)


class FakeBackend:
    """In-memory stand-in for GitBackend: {ref: {path: property map}}."""

    def __init__(self, snapshots: Dict[str, Dict[str, Dict[str, str]]]):
        self.snapshots = snapshots
        self.fetched: List[Tuple[str, str]] = []
        self.listed: List[Tuple[str, str]] = []

    def verify_refs(self, *refs: str) -> None:
        invalid = [ref for ref in refs if ref not in self.snapshots]
        if invalid:
            raise InvalidReferenceError(invalid)

    def list_files(self, ref: str, directory: str) -> List[str]:
        self.listed.append((ref, directory))
        prefix = directory.rstrip("/") + "/"
        files = sorted(path for path in self.snapshots[ref] if path.startswith(prefix))
        if not files:
            raise PathNotFoundError(directory, ref)
        return files

    def fetch_properties(self, ref: str, path: str) -> Optional[Dict[str, str]]:
        self.fetched.append((ref, path))
        content = self.snapshots[ref].get(path)
        return dict(content) if content is not None else None
