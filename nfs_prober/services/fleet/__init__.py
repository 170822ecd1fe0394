"""
Fleet Module

Components:
- FleetLauncher: starts one staggered ProbeScheduler per target
- DirectoryManager: local mount directory creation
- target_parser: target list parsing and file count clamping
"""

from .directory_manager import DirectoryManager
from .fleet_launcher import FleetLauncher, ProbeConfiguration
from .target_parser import MAX_TEST_FILES, effective_num_files, parse_targets

__all__ = [
    "FleetLauncher",
    "ProbeConfiguration",
    "DirectoryManager",
    "MAX_TEST_FILES",
    "effective_num_files",
    "parse_targets",
]
