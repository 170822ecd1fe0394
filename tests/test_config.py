"""
Tests for Settings and its derived probe configuration.
"""

import pytest
from pydantic import ValidationError

from nfs_prober.config import Settings
from nfs_prober.core.exceptions import ConfigError


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep the developer's environment and settings.env out of these tests."""
    monkeypatch.chdir(tmp_path)
    for name in list(Settings.model_fields):
        monkeypatch.delenv(name, raising=False)
        monkeypatch.delenv(name.upper(), raising=False)


def test_defaults_match_flag_defaults():
    settings = Settings()

    assert settings.local_mount_dir == "/etc/prober-nfs"
    assert settings.rw_test_files is False
    assert settings.num_of_files == 1
    assert settings.file_size_bytes == 200
    assert settings.interval_seconds == 60.0
    assert settings.timeout_seconds == pytest.approx(0.25)
    assert settings.use_prometheus is True
    assert settings.port == 8080
    assert settings.nfs_version == "nfs"
    assert settings.startup_stagger_seconds == 30.0


def test_num_of_files_above_five_is_clamped():
    settings = Settings(num_of_files=12)
    assert settings.effective_num_files == 5


def test_target_list_uses_local_mount_dir(tmp_path):
    settings = Settings(targets="10.0.0.1:/exportA", local_mount_dir=str(tmp_path))

    (target,) = settings.target_list
    assert target.local_mount_path == str(tmp_path / "10.0.0.1")


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("TARGETS", "10.0.0.9:/data")
    monkeypatch.setenv("RW_TEST_FILES", "true")
    monkeypatch.setenv("INTERVAL", "5s")

    settings = Settings()

    assert settings.target_list[0].address == "10.0.0.9"
    assert settings.rw_test_files is True
    assert settings.interval_seconds == 5.0


@pytest.mark.parametrize(
    "overrides",
    [
        {"targets": "badentry"},
        {"targets": ""},
        {"targets": "10.0.0.1:/a", "interval": "sixty"},
        {"targets": "10.0.0.1:/a", "timeout": "0"},
        {"targets": "10.0.0.1:/a", "interval": "-1s"},
        {"targets": "10.0.0.1:/a", "file_size_bytes": -1},
        {"targets": "10.0.0.1:/a", "startup_stagger_seconds": -1.0},
    ],
)
def test_validate_probe_config_rejects_bad_values(overrides):
    settings = Settings(**overrides)
    with pytest.raises(ConfigError):
        settings.validate_probe_config()


def test_validate_probe_config_accepts_good_values():
    settings = Settings(targets="10.0.0.1:/exportA,10.0.0.2:/exportB", interval="60s", timeout="2s")
    settings.validate_probe_config()


@pytest.mark.parametrize("raw", ["debug", "Debug", " DEBUG "])
def test_log_level_is_case_insensitive(raw):
    assert Settings(log_level=raw).log_level == "DEBUG"


def test_log_level_from_environment_is_normalised(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "info")
    assert Settings().log_level == "INFO"


def test_unknown_log_level_is_rejected():
    with pytest.raises(ValidationError, match="log_level"):
        Settings(log_level="loud")
