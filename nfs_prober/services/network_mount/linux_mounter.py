"""Linux Network Mounter - mount(8)/umount(8) through asyncio subprocesses."""

import asyncio
import logging
import os
import signal
from typing import Sequence

from .base_mounter import BaseMounter
from ...core.exceptions import MountError


class LinuxMounter(BaseMounter):
    """Linux mount implementation. Requires root (CAP_SYS_ADMIN)."""

    def __init__(self, mount_binary: str = "mount", umount_binary: str = "umount"):
        self._mount_binary = mount_binary
        self._umount_binary = umount_binary

    async def attempt_mount(
        self, source: str, local_path: str, fs_type: str, options: str
    ) -> None:
        cmd = [self._mount_binary, "-t", fs_type, "-o", options, source, local_path]
        await self._run(cmd, local_path)

    async def release(self, local_path: str) -> None:
        await self._run([self._umount_binary, local_path], local_path)

    def get_platform_name(self) -> str:
        return "Linux"

    async def _run(self, cmd: Sequence[str], local_path: str) -> None:
        logging.debug(f"Running: {' '.join(cmd)}")
        try:
            # Own process group, so helpers such as mount.nfs can be killed with it
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                start_new_session=True,
            )
        except OSError as e:
            raise MountError(local_path, f"could not run {cmd[0]}: {e}") from e

        try:
            _, stderr = await process.communicate()
        except asyncio.CancelledError:
            # Timed out or shutting down - do not leave the command or its helpers behind
            self._kill_process_group(process)
            if process.returncode is None:
                await process.wait()
            raise

        if process.returncode != 0:
            error_msg = stderr.decode(errors="replace").strip() if stderr else ""
            raise MountError(
                local_path,
                error_msg or f"{cmd[0]} exited with status {process.returncode}",
            )

    def _kill_process_group(self, process: asyncio.subprocess.Process) -> None:
        try:
            os.killpg(process.pid, signal.SIGKILL)
        except ProcessLookupError:
            # Whole group already gone
            pass
        except PermissionError as e:
            logging.warning(f"Could not kill process group {process.pid}: {e}")
            if process.returncode is None:
                process.kill()
