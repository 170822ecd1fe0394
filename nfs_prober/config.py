from pathlib import Path
from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .core.exceptions import ConfigError
from .models import Target
from .services.fleet.target_parser import effective_num_files, parse_targets
from .utils.durations import parse_positive_duration

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseSettings):
    # Targets, comma separated list in format ip:/mountPoint
    targets: str = ""
    local_mount_dir: str = "/etc/prober-nfs"
    nfs_version: str = "nfs"  # e.g. nfs, nfs3, nfs4

    # Read/write verification
    rw_test_files: bool = False
    num_of_files: int = 1  # Clamped to MAX_TEST_FILES
    file_size_bytes: int = 200

    # Timing (duration strings such as "60s", "250ms", "1m30s")
    interval: str = "60s"
    timeout: str = "250ms"  # Bounds the mount step only
    startup_stagger_seconds: float = 30.0

    # HTTP endpoint
    use_prometheus: bool = True
    port: int = 8080

    # Logging konfiguration
    log_level: str = "INFO"
    log_file_path: str = "logs/nfs_prober.log"
    log_retention_days: int = 30

    model_config = SettingsConfigDict(env_file="settings.env", extra="ignore")

    @field_validator("log_level")
    @classmethod
    def log_level_known(cls, v):
        """Accept level names in any case, e.g. "debug" from the command line"""
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {v!r}")
        return level

    @property
    def log_directory(self) -> Path:
        return Path(self.log_file_path).parent

    @property
    def interval_seconds(self) -> float:
        return parse_positive_duration(self.interval, "interval")

    @property
    def timeout_seconds(self) -> float:
        return parse_positive_duration(self.timeout, "timeout")

    @property
    def effective_num_files(self) -> int:
        return effective_num_files(self.num_of_files)

    @property
    def target_list(self) -> List[Target]:
        return parse_targets(self.targets, self.local_mount_dir)

    def validate_probe_config(self) -> None:
        """Resolve every derived value once so bad input fails before launch."""
        parse_positive_duration(self.interval, "interval")
        parse_positive_duration(self.timeout, "timeout")
        parse_targets(self.targets, self.local_mount_dir)
        if self.file_size_bytes < 0:
            raise ConfigError(f"file_size_bytes must not be negative, got {self.file_size_bytes}")
        if self.startup_stagger_seconds < 0:
            raise ConfigError(
                f"startup_stagger_seconds must not be negative, got {self.startup_stagger_seconds}"
            )
