from pathlib import Path

import pytest

from config_drift.config import DEFAULT_REPO_PATH, Config


def test_from_env_reads_overrides(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("CLOUD_CONFIG_PATH", str(tmp_path))
    monkeypatch.setenv("CONFIG_DIR", "/settings/")
    monkeypatch.setenv("DRIFT_MAX_WORKERS", "2")

    config = Config.from_env()

    assert config.repo_path == tmp_path
    assert config.config_dir == "settings"
    assert config.max_workers == 2
    assert config.env_path("pt") == "settings/pt"


def test_default_repo_path_sits_next_to_project(monkeypatch):
    monkeypatch.delenv("CLOUD_CONFIG_PATH", raising=False)
    assert Config.from_env().repo_path == DEFAULT_REPO_PATH.resolve()
    assert DEFAULT_REPO_PATH.name == "cloud-config"


@pytest.mark.parametrize("overrides", [{"max_workers": 0}, {"config_dir": ""}])
def test_validate_rejects_bad_values(overrides):
    with pytest.raises(ValueError):
        Config(**overrides).validate()
