"""
Environment Scanner

Discovers environments and their property files in the cloud-config
repository, runs the diff engine over every file and assembles the report.

Layout expected in the repository::

    config/
        <env>/
            <service>.properties

Per-file work (two fetches and a diff) is independent, so it runs on a thread
pool. Workers only return values; the report is assembled by the calling
thread in discovery order.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Dict, List, Optional, Sequence, Tuple, TypeVar

from .config import PROD_ENV, PT_ENV, Config
from .drift_analyzer import compute_diffs
from .exceptions import PathNotFoundError
from .models import CrossEnvResult, EnvironmentReport, FileDiff, TemporalResult

logger = logging.getLogger(__name__)

T = TypeVar("T")


def partition_by_environment(paths: Sequence[str], config_dir: str) -> Dict[str, Dict[str, str]]:
    """
    Group file paths by the first directory below the configuration root.

    Files sitting directly in the root belong to no environment and are
    skipped.

    Args:
        paths: Repository-relative paths, all under ``config_dir``
        config_dir: Configuration root (e.g. "config")

    Returns:
        {env: {file name relative to the env dir: full path}}
    """
    prefix = config_dir.strip("/") + "/"
    envs: Dict[str, Dict[str, str]] = {}
    for path in paths:
        if not path.startswith(prefix):
            continue
        segments = path[len(prefix):].split("/")
        if len(segments) < 2:
            continue
        env, name = segments[0], "/".join(segments[1:])
        envs.setdefault(env, {})[name] = path
    return envs


class EnvironmentScanner:
    """Drives discovery, fetching and diffing for both comparison modes."""

    def __init__(self, backend, config: Config):
        """
        Args:
            backend: Object providing ``verify_refs``, ``list_files`` and
                ``fetch_properties`` (normally a ``GitBackend``)
            config: Scan configuration
        """
        self.backend = backend
        self.config = config

    def _is_property_file(self, path: str) -> bool:
        return path.endswith(self.config.properties_suffix)

    def _run_parallel(self, fn: Callable[..., T], jobs: List[Tuple]) -> List[T]:
        """Run ``fn(*job)`` for every job on the worker pool, results in job order."""
        if not jobs:
            return []

        results: List[Optional[T]] = [None] * len(jobs)
        workers = min(self.config.max_workers, len(jobs))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {executor.submit(fn, *job): index for index, job in enumerate(jobs)}
            try:
                for future in as_completed(futures):
                    results[futures[future]] = future.result()
            except BaseException:
                for future in futures:
                    future.cancel()
                raise
        return results

    # -------- Temporal mode --------

    def _diff_revisions(self, old_ref: str, new_ref: str, path: str) -> FileDiff:
        old = self.backend.fetch_properties(old_ref, path)
        new = self.backend.fetch_properties(new_ref, path)
        return FileDiff(left=old, right=new, diffs=compute_diffs(old, new))

    def scan_temporal(self, old_ref: str, new_ref: str) -> TemporalResult:
        """
        Compare every environment between two revisions.

        Only the new revision's file list is enumerated, so a file that exists
        at ``old_ref`` but is gone from ``new_ref`` is not reported.

        Args:
            old_ref: Baseline tag or commit
            new_ref: Tag or commit to compare against the baseline

        Returns:
            TemporalResult with only the environments and files that changed
        """
        self.backend.verify_refs(old_ref, new_ref)
        config_dir = self.config.config_dir

        try:
            all_files = self.backend.list_files(new_ref, config_dir)
        except PathNotFoundError:
            logger.warning(f"{config_dir}/ does not exist in {new_ref}, nothing to compare")
            return TemporalResult()

        by_env = partition_by_environment(all_files, config_dir)
        logger.info(f"Comparing {len(by_env)} environments between {old_ref} and {new_ref}")

        jobs: List[Tuple[str, str, str]] = []
        owners: List[Tuple[str, str]] = []
        for env, files in by_env.items():
            for name, path in files.items():
                if self._is_property_file(path):
                    jobs.append((old_ref, new_ref, path))
                    owners.append((env, name))

        file_diffs = self._run_parallel(self._diff_revisions, jobs)

        envs: Dict[str, EnvironmentReport] = {env: {} for env in by_env}
        for (env, name), file_diff in zip(owners, file_diffs):
            if file_diff.is_reportable:
                envs[env][name] = file_diff

        # Drop environments where nothing changed
        envs = {env: files for env, files in envs.items() if files}

        result = TemporalResult(envs=envs)
        logger.info(f"{len(envs)} environments changed, {result.total_changes} key changes")
        return result

    # -------- Cross-environment mode --------

    def _list_property_files(self, ref: str, environment: str) -> Dict[str, str]:
        env_path = self.config.env_path(environment)
        prefix = env_path + "/"
        return {
            path[len(prefix):]: path
            for path in self.backend.list_files(ref, env_path)
            if self._is_property_file(path)
        }

    def _diff_environments(
        self,
        ref: str,
        pt_path: Optional[str],
        prod_path: Optional[str],
        apply_filter: bool,
    ) -> FileDiff:
        pt = self.backend.fetch_properties(ref, pt_path) if pt_path else None
        prod = self.backend.fetch_properties(ref, prod_path) if prod_path else None
        return FileDiff(left=pt, right=prod, diffs=compute_diffs(pt, prod, suppress_normalized=apply_filter))

    def scan_cross_env(self, ref: str, apply_filter: bool = True) -> CrossEnvResult:
        """
        Compare the pt and prod environments at a single revision.

        Args:
            ref: Tag or commit
            apply_filter: Suppress differences that are only environment-label
                substitutions (e.g. ``pt-svc`` vs ``prod-svc``)

        Returns:
            CrossEnvResult with only the files that differ

        Raises:
            PathNotFoundError: If either environment directory is missing
        """
        self.backend.verify_refs(ref)

        pt_files = self._list_property_files(ref, PT_ENV)
        prod_files = self._list_property_files(ref, PROD_ENV)
        logger.info(f"{PT_ENV}: {len(pt_files)} files, {PROD_ENV}: {len(prod_files)} files at {ref}")

        names = list(dict.fromkeys([*pt_files, *prod_files]))
        jobs = [(ref, pt_files.get(name), prod_files.get(name), apply_filter) for name in names]
        file_diffs = self._run_parallel(self._diff_environments, jobs)

        diffs = {
            name: file_diff
            for name, file_diff in zip(names, file_diffs)
            if file_diff.is_reportable
        }

        result = CrossEnvResult(diffs=diffs)
        logger.info(f"Total diffs: {result.total_changes}")
        return result
