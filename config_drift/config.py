"""Configuration management for the config drift checker."""

import os
import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

# Project root and default location of the cloud-config working copy
PROJECT_ROOT = Path(__file__).parent.parent
DEFAULT_REPO_PATH = PROJECT_ROOT.parent / "cloud-config"

# Fixed environment roles compared by compare-envs
PT_ENV = "pt"
PROD_ENV = "prod"


def get_repo_path() -> Path:
    """
    Resolve the location of the cloud-config repository.

    Priority:
    1. CLOUD_CONFIG_PATH environment variable (if set)
    2. ../cloud-config next to the project root

    Returns:
        Path to the local working copy
    """
    env_path = os.getenv("CLOUD_CONFIG_PATH")
    if env_path:
        logger.debug(f"Using repo path from CLOUD_CONFIG_PATH: {env_path}")
        return Path(env_path)
    return DEFAULT_REPO_PATH.resolve()


@dataclass
class Config:
    """Central configuration for drift scans."""

    repo_path: Path = DEFAULT_REPO_PATH
    config_dir: str = "config"
    properties_suffix: str = ".properties"
    max_workers: int = 8
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Config":
        """Build a Config from environment variables (call load_dotenv() first)."""
        return cls(
            repo_path=get_repo_path(),
            config_dir=os.getenv("CONFIG_DIR", "config").strip("/"),
            properties_suffix=os.getenv("PROPERTIES_SUFFIX", ".properties"),
            max_workers=int(os.getenv("DRIFT_MAX_WORKERS", "8")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    def validate(self) -> None:
        """Validate configuration and raise errors for bad values."""
        if not self.config_dir:
            raise ValueError("config_dir must not be empty")
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")

    def env_path(self, environment: str) -> str:
        """Repository path of an environment directory, e.g. ``config/pt``."""
        return f"{self.config_dir}/{environment}"
