"""Structured log entries produced by normalizing raw agent output."""

import asyncio
from enum import Enum
from typing import Any, AsyncIterator, Dict, List, Optional, Protocol

from pydantic import BaseModel, Field


class EntryType(str, Enum):
    """Kind of a normalized log entry."""

    SYSTEM_MESSAGE = "system_message"
    USER_MESSAGE = "user_message"
    ASSISTANT_MESSAGE = "assistant_message"
    THINKING = "thinking"
    TOOL_USE = "tool_use"
    ERROR_MESSAGE = "error_message"


class NormalizedEntry(BaseModel):
    """One structured event derived from an agent's raw output."""

    entry_type: EntryType = Field(..., description="Kind of entry")
    content: str = Field(..., description="Human-readable content")
    metadata: Optional[Dict[str, Any]] = Field(None, description="Raw agent-specific payload")


class LogStore(Protocol):
    """Sink the providers read raw output from and push normalized entries to."""

    def stdout_lines(self) -> AsyncIterator[str]: ...

    def push_normalized(self, entry: NormalizedEntry) -> None: ...

    def push_session_id(self, session_id: str) -> None: ...


class MsgStore:
    """In-memory LogStore: raw stdout history plus a live tail."""

    def __init__(self) -> None:
        self._lines: List[str] = []
        self._closed = False
        self._cond = asyncio.Condition()
        self.entries: List[NormalizedEntry] = []
        self.session_id: Optional[str] = None

    async def push_stdout(self, line: str) -> None:
        async with self._cond:
            self._lines.append(line)
            self._cond.notify_all()

    async def close(self) -> None:
        async with self._cond:
            self._closed = True
            self._cond.notify_all()

    async def stdout_lines(self) -> AsyncIterator[str]:
        """Yield every stdout line pushed so far, then follow until closed."""
        index = 0
        while True:
            async with self._cond:
                await self._cond.wait_for(lambda: index < len(self._lines) or self._closed)
                batch = self._lines[index:]
                done = self._closed
            index += len(batch)
            for line in batch:
                yield line
            if done and not batch:
                return

    def push_normalized(self, entry: NormalizedEntry) -> None:
        self.entries.append(entry)

    def push_session_id(self, session_id: str) -> None:
        self.session_id = session_id
