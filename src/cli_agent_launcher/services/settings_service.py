"""Settings service: load, migrate, persist and share application settings.

The in-memory settings are shared between request handlers. Readers hold a
shared lock; an update holds the exclusive lock, writes the new document to
disk and only then swaps the in-memory value, so a reader never sees
settings that were not persisted.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

import aiofiles

from cli_agent_launcher.constants import SETTINGS_FILE
from cli_agent_launcher.models.settings import Settings

logger = logging.getLogger(__name__)


class AsyncRWLock:
    """Many concurrent readers or one writer."""

    def __init__(self) -> None:
        self._cond = asyncio.Condition()
        self._readers = 0
        self._writer = False

    @asynccontextmanager
    async def read(self) -> AsyncIterator[None]:
        async with self._cond:
            await self._cond.wait_for(lambda: not self._writer)
            self._readers += 1
        try:
            yield
        finally:
            async with self._cond:
                self._readers -= 1
                self._cond.notify_all()

    @asynccontextmanager
    async def write(self) -> AsyncIterator[None]:
        async with self._cond:
            await self._cond.wait_for(lambda: not self._writer and self._readers == 0)
            self._writer = True
        try:
            yield
        finally:
            async with self._cond:
                self._writer = False
                self._cond.notify_all()


def load_settings(path: Path = SETTINGS_FILE) -> Settings:
    """Read and, if stale, migrate the settings file. Missing file gives defaults."""
    try:
        raw_config = path.read_bytes()
    except FileNotFoundError:
        logger.info(f"No settings file at {path}, using defaults")
        return Settings()
    return Settings.from_raw(raw_config)


async def save_settings(settings: Settings, path: Path = SETTINGS_FILE) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    async with aiofiles.open(path, "w", encoding="utf-8") as f:
        await f.write(settings.model_dump_json(indent=2))
    logger.debug(f"Settings saved to {path}")


class SettingsStore:
    """Process-wide holder of the current settings."""

    def __init__(self, path: Path = SETTINGS_FILE):
        self.path = path
        self._settings: Optional[Settings] = None
        self._lock = AsyncRWLock()

    def load(self) -> Settings:
        """Load (and migrate) settings from disk. Called once at startup."""
        self._settings = load_settings(self.path)
        return self._settings

    @asynccontextmanager
    async def read(self) -> AsyncIterator[Settings]:
        if self._settings is None:
            async with self._lock.write():
                if self._settings is None:
                    self._settings = load_settings(self.path)
        async with self._lock.read():
            yield self._settings

    async def get(self) -> Settings:
        async with self.read() as settings:
            return settings.model_copy(deep=True)

    async def update(self, new_settings: Settings) -> Settings:
        """Persist ``new_settings`` and make them current.

        Raises:
            OSError: If the settings file cannot be written; the current
                in-memory settings are left unchanged
        """
        async with self._lock.write():
            await save_settings(new_settings, self.path)
            self._settings = new_settings
        logger.info("Settings updated")
        return new_settings


settings_store = SettingsStore()
