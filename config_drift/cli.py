"""
Command-line entry points.

    check-config <oldTag> <newTag>     changes between two revisions, all environments
    compare-envs <tag> [filter]        pt vs prod at one revision

The JSON report is printed to stdout only after the whole scan succeeds.
Progress and errors go to stderr. Exit status is 0 on success, 1 on any error.
"""

import argparse
import logging
import sys
from typing import Callable, List, Optional

from dotenv import load_dotenv

from .config import Config
from .env_scanner import EnvironmentScanner
from .exceptions import ConfigDriftError, UsageError
from .git_operations import GitBackend
from .logging_config import setup_logging
from .models import ComparisonResult, comparison_result_adapter, render_result

logger = logging.getLogger(__name__)


def _build_check_config_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="check-config",
        description="Report property changes between two revisions of every environment",
    )
    parser.add_argument("old_tag", nargs="?", help="Baseline tag or commit")
    parser.add_argument("new_tag", nargs="?", help="Tag or commit to compare")
    return parser


def _build_compare_envs_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="compare-envs",
        description="Report property differences between pt and prod at one revision",
    )
    parser.add_argument("tag", nargs="?", help="Tag or commit")
    parser.add_argument(
        "filter",
        nargs="?",
        default="true",
        help='"true" (default) to ignore pt-/prod- label substitutions, anything else to report them',
    )
    return parser


def _require(parser: argparse.ArgumentParser, *values: Optional[str]) -> None:
    if not all(values):
        raise UsageError(parser.format_usage().strip())


def _run(scan: Callable[[EnvironmentScanner], ComparisonResult], verify_repo: bool) -> int:
    try:
        config = _load_config()
        config.validate()
        with GitBackend(config.repo_path) as backend:
            if verify_repo:
                backend.verify_repository()
            result = comparison_result_adapter.validate_python(scan(EnvironmentScanner(backend, config)))
    except (ConfigDriftError, ValueError) as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logger.debug("Unexpected failure", exc_info=True)
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1

    print(render_result(result))
    return 0


def _load_config() -> Config:
    load_dotenv()
    config = Config.from_env()
    setup_logging(config.log_level)
    return config


def check_config_main(argv: Optional[List[str]] = None) -> int:
    """Temporal mode: what changed in each environment between two revisions."""
    parser = _build_check_config_parser()
    # Extra arguments are ignored
    args, _ = parser.parse_known_args(argv)
    try:
        _require(parser, args.old_tag, args.new_tag)
    except UsageError as e:
        print(e, file=sys.stderr)
        return 1

    return _run(
        lambda scanner: scanner.scan_temporal(args.old_tag, args.new_tag),
        verify_repo=False,
    )


def compare_envs_main(argv: Optional[List[str]] = None) -> int:
    """Cross-environment mode: how pt and prod differ at one revision."""
    parser = _build_compare_envs_parser()
    # Extra arguments are ignored
    args, _ = parser.parse_known_args(argv)
    try:
        _require(parser, args.tag)
    except UsageError as e:
        print(e, file=sys.stderr)
        return 1

    apply_filter = args.filter == "true"
    return _run(
        lambda scanner: scanner.scan_cross_env(args.tag, apply_filter=apply_filter),
        verify_repo=True,
    )
