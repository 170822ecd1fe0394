"""Parsing of the configured target list into Target descriptors."""

import logging
from typing import List

from ...core.exceptions import ConfigError
from ...models import Target

# Max of 5 files allowed, regardless of configuration
MAX_TEST_FILES = 5


def parse_target(entry: str, local_root: str) -> Target:
    """Parse one ``address:remotePath`` entry. Splits on the first colon."""
    address, separator, remote_path = entry.strip().partition(":")
    if not separator:
        raise ConfigError(f"target {entry!r} was not in correct format, expected address:/mountPoint")

    address = address.strip()
    remote_path = remote_path.strip()
    if not address:
        raise ConfigError(f"target {entry!r} has no address")
    if not remote_path:
        raise ConfigError(f"target {entry!r} has no remote mount point")

    return Target(address=address, remote_mount_point=remote_path, local_root=local_root)


def parse_targets(raw: str, local_root: str) -> List[Target]:
    """
    Parse a comma separated target list.

    Blank entries (e.g. a trailing comma) are skipped. Any malformed entry
    fails the whole list; nothing is silently dropped.
    """
    entries = [entry for entry in (raw or "").split(",") if entry.strip()]
    if not entries:
        raise ConfigError("please specify targets")

    targets = [parse_target(entry, local_root) for entry in entries]

    seen = set()
    for target in targets:
        if target.local_mount_path in seen:
            raise ConfigError(
                f"more than one target maps to local mount path {target.local_mount_path}"
            )
        seen.add(target.local_mount_path)

    logging.debug(f"Parsed {len(targets)} target(s): {[t.label for t in targets]}")
    return targets


def effective_num_files(requested: int) -> int:
    if requested > MAX_TEST_FILES:
        logging.debug(f"num_of_files {requested} clamped to {MAX_TEST_FILES}")
        return MAX_TEST_FILES
    return max(requested, 0)
