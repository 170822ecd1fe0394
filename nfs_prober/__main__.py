"""
Command line entry point.

Accepts the single-dash flag names used by existing deployments, e.g.

    python -m nfs_prober -targets 10.0.0.1:/exportA -rw_test_files -num_of_files 3

Flags that are not given fall back to the environment and settings.env.
"""

import argparse
import logging
import sys
from typing import Any, Dict, List, Optional

import uvicorn
from pydantic import ValidationError

from .config import Settings
from .core.exceptions import ConfigError, UnsupportedPlatformError
from .dependencies import get_mount_service
from .logging_config import setup_logging
from .main import create_app


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("1", "t", "true", "yes", "on"):
        return True
    if lowered in ("0", "f", "false", "no", "off"):
        return False
    raise argparse.ArgumentTypeError(f"invalid boolean value: {value!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nfs-prober",
        description="Periodically mount NFS targets and report availability and latency.",
    )

    def flag(name: str, **kwargs) -> None:
        parser.add_argument(f"-{name}", f"--{name}", dest=name, default=None, **kwargs)

    def bool_flag(name: str, help_text: str) -> None:
        flag(name, nargs="?", const=True, type=_parse_bool, metavar="BOOL", help=help_text)

    bool_flag("use_prometheus", "create a web endpoint and log timeseries metrics to that endpoint, default true")
    flag("local_mount_dir", help="directory to mount nfs targets")
    bool_flag("rw_test_files", "read and write test files and log results, default false")
    flag("num_of_files", type=int, help="number of test files to read and write, default 1, max 5")
    flag("file_size_bytes", type=int, help="test file size in bytes, default 200")
    flag("targets", help="comma separated list of targets in format ip:/mountPoint")
    flag("interval", help="interval between probes, default 60s")
    flag("timeout", help="timeout of the mount operation, default 250ms")
    flag("port", type=int, help="port for web server to listen on")
    flag("nfs_version", help="nfs version to use, eg nfs, nfs3")
    flag("startup_stagger_seconds", type=float, help="upper bound of the random start delay per target")
    flag("log_level", help="log level, default INFO")
    return parser


def load_settings(argv: Optional[List[str]] = None) -> Settings:
    args = build_parser().parse_args(argv)
    overrides: Dict[str, Any] = {
        name: value for name, value in vars(args).items() if value is not None
    }
    return Settings(**overrides)


def main(argv: Optional[List[str]] = None) -> int:
    try:
        settings = load_settings(argv)
    except ValidationError as e:
        print(f"invalid configuration: {e}", file=sys.stderr)
        return 1

    setup_logging(settings)
    try:
        settings.validate_probe_config()
    except ConfigError as e:
        logging.error(f"Invalid configuration: {e}")
        return 1

    try:
        app = create_app(settings, configure_logging=False)
        get_mount_service()
    except UnsupportedPlatformError as e:
        logging.error(str(e))
        return 1

    logging.info(f"starting HTTP endpoint on :{settings.port}")
    uvicorn.run(app, host="0.0.0.0", port=settings.port, log_level=settings.log_level.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
