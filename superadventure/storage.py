import asyncio
import logging
from pathlib import Path

from superadventure.errors import StorageError

logger = logging.getLogger(__name__)


class Storage:
    """Asynchronous string key-value store."""

    async def get(self, key):
        raise NotImplementedError

    async def set(self, key, value):
        raise NotImplementedError


class MemoryStorage(Storage):
    def __init__(self, initial=None):
        self.data = dict(initial or {})

    async def get(self, key):
        return self.data.get(key)

    async def set(self, key, value):
        self.data[key] = value


class FileStorage(Storage):
    """One file per key under a directory."""

    def __init__(self, directory):
        self.directory = Path(directory)

    def _path(self, key):
        return self.directory / f"{key}.json"

    def _read(self, key):
        path = self._path(key)
        if not path.exists():
            return None
        # undecodable bytes become U+FFFD so the caller sees malformed JSON
        return path.read_bytes().decode("utf-8", errors="replace")

    def _write(self, key, value):
        self.directory.mkdir(parents=True, exist_ok=True)
        self._path(key).write_text(value, encoding="utf-8")

    async def get(self, key):
        try:
            return await asyncio.to_thread(self._read, key)
        except OSError as e:
            raise StorageError(f"could not read {key}: {e}") from e

    async def set(self, key, value):
        try:
            await asyncio.to_thread(self._write, key, value)
        except OSError as e:
            raise StorageError(f"could not write {key}: {e}") from e


class FallbackStorage(Storage):
    """Use the primary store, and the local one whenever the primary fails."""

    def __init__(self, primary, local):
        self.primary = primary
        self.local = local

    async def get(self, key):
        try:
            return await self.primary.get(key)
        except StorageError as e:
            logger.warning("Primary store failed, reading %s locally: %s", key, e)
            return await self.local.get(key)

    async def set(self, key, value):
        try:
            await self.primary.set(key, value)
        except StorageError as e:
            logger.warning("Primary store failed, saving %s locally: %s", key, e)
            await self.local.set(key, value)


def default_storage(data_dir):
    return FallbackStorage(FileStorage(data_dir), MemoryStorage())
