import asyncio
import logging
from pathlib import Path


class DirectoryManager:

    async def ensure_directory_exists(self, path: str) -> None:
        """
        Create a local mount directory if it is missing.

        The whole check-and-create runs in a worker thread so a stale mount
        underneath cannot block the event loop. Raises OSError when the
        directory cannot be created.
        """
        created = await asyncio.to_thread(self._ensure_directory, Path(path))
        if created:
            logging.info(f"Created local mount directory: {path}")

    @staticmethod
    def _ensure_directory(path_obj: Path) -> bool:
        if path_obj.is_dir():
            return False

        path_obj.mkdir(parents=True, exist_ok=True)
        if not path_obj.is_dir():
            raise OSError(f"Directory creation appeared successful but verification failed: {path_obj}")
        return True
