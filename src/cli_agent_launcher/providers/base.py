"""Base provider interface for coding agent CLIs.

A "provider" is a concrete, configured instance of one supported coding agent
(Claude Code, Amp, Gemini, Codex, Opencode). It knows how to:

- spawn the agent for a new prompt in a working directory
- spawn a follow-up that resumes an earlier agent session
- normalize the agent's raw stdout into structured log entries

Providers are pydantic models so they can be loaded straight out of a profile
document. Static facts about each kind (config path, MCP layout) are not
stored on the instance; they are looked up in ``PROVIDER_FACTS``.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Set

from pydantic import BaseModel, ConfigDict, Field

from cli_agent_launcher.clients.process import spawn_shell
from cli_agent_launcher.models.command import CommandSpec
from cli_agent_launcher.models.log import LogStore, NormalizedEntry
from cli_agent_launcher.models.provider import (
    ProviderType,
    default_config_path,
    supports_mcp,
)

logger = logging.getLogger(__name__)

# Keeps fire-and-forget normalization tasks alive until they finish
_background_tasks: Set[asyncio.Task] = set()


class ExecutorError(Exception):
    """Base exception for provider resolution and spawning errors."""

    pass


class FollowUpNotSupported(ExecutorError):
    """Raised when a provider has no resumable-session mechanism."""

    pass


class UnknownExecutorType(ExecutorError):
    """Raised when a provider tag does not name a supported agent."""

    pass


class UnknownProfile(ExecutorError):
    """Raised when a profile label is not in the profile collection."""

    pass


class UnknownVariant(ExecutorError):
    """Raised when a variant label is not defined for a profile."""

    pass


class SpawnError(ExecutorError):
    """Raised when the OS fails to start the agent process."""

    pass


def make_path_relative(path: str, worktree_path: Path) -> str:
    """Strip ``worktree_path`` from an absolute path inside it."""
    try:
        relative = Path(path).relative_to(worktree_path)
    except ValueError:
        return path
    return str(relative) or "."


class BaseProvider(BaseModel, ABC):
    """Abstract base class for coding agent providers.

    Attributes:
        command: Base command and params used to launch the agent
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    command: CommandSpec = Field(..., description="Launch command for this agent")

    @property
    def provider_type(self) -> ProviderType:
        return ProviderType(self.kind)

    def supports_mcp(self) -> bool:
        return supports_mcp(self.provider_type)

    def default_config_path(self) -> Optional[Path]:
        return default_config_path(self.provider_type)

    def build_command(self) -> CommandSpec:
        """Command actually rendered for this instance.

        Providers with run-time toggles override this to add params.
        """
        return self.command

    @abstractmethod
    def follow_up_args(self, session_id: str) -> List[str]:
        """Extra args that make the agent resume ``session_id``.

        Raises:
            FollowUpNotSupported: If the agent cannot resume sessions
        """
        pass

    @abstractmethod
    def normalize_line(self, line: str, worktree_path: Path) -> List[NormalizedEntry]:
        """Turn one raw stdout line into zero or more normalized entries."""
        pass

    def extract_session_id(self, line: str) -> Optional[str]:
        """Return the agent session id if ``line`` announces one."""
        return None

    async def spawn(self, current_dir: Path, prompt: str) -> asyncio.subprocess.Process:
        """Start the agent on ``prompt`` in ``current_dir``."""
        command = self.build_command().render_initial()
        return await self._spawn(command, current_dir, prompt)

    async def spawn_follow_up(self, current_dir: Path, prompt: str, session_id: str) -> asyncio.subprocess.Process:
        """Resume agent session ``session_id`` with a new prompt."""
        command = self.build_command().render_follow_up(self.follow_up_args(session_id))
        return await self._spawn(command, current_dir, prompt)

    async def _spawn(self, command: str, current_dir: Path, prompt: str) -> asyncio.subprocess.Process:
        try:
            return await spawn_shell(command, current_dir, stdin_data=prompt)
        except OSError as e:
            raise SpawnError(f"Failed to spawn {self.provider_type.value}: {e}") from e

    def normalize_logs(self, raw_logs: LogStore, worktree_path: Path) -> None:
        """Start normalizing ``raw_logs`` in the background.

        Must be called from a running event loop. Returns immediately.
        """
        task = asyncio.get_running_loop().create_task(self.run_normalizer(raw_logs, worktree_path))
        _background_tasks.add(task)
        task.add_done_callback(_background_tasks.discard)

    async def run_normalizer(self, raw_logs: LogStore, worktree_path: Path) -> None:
        """Normalize ``raw_logs`` until its stdout stream ends."""
        session_recorded = False
        async for line in raw_logs.stdout_lines():
            if not line.strip():
                continue

            if not session_recorded:
                session_id = self.extract_session_id(line)
                if session_id:
                    raw_logs.push_session_id(session_id)
                    session_recorded = True

            for entry in self.normalize_line(line, worktree_path):
                raw_logs.push_normalized(entry)

        logger.debug(f"Finished normalizing {self.provider_type.value} logs")
