"""Gemini CLI provider implementation.

Gemini CLI prints plain text and has no way to resume an earlier session,
so follow-ups are rejected. Also used for Gemini-compatible CLIs such as
Qwen Code.
"""

import re
from pathlib import Path
from typing import List, Literal

from pydantic import AliasChoices, Field

from cli_agent_launcher.models.command import CommandSpec
from cli_agent_launcher.models.log import EntryType, NormalizedEntry
from cli_agent_launcher.models.provider import ProviderType
from cli_agent_launcher.providers.base import BaseProvider, FollowUpNotSupported

ANSI_CODE_PATTERN = r"\x1b\[[0-9;]*m"
ERROR_LINE_PATTERN = r"^(?:Error:|ERROR\b)"


def normalize_plain_text_line(line: str) -> List[NormalizedEntry]:
    """Normalize one line of plain-text agent output."""
    clean_line = re.sub(ANSI_CODE_PATTERN, "", line).rstrip()
    if not clean_line:
        return []
    if re.match(ERROR_LINE_PATTERN, clean_line):
        return [NormalizedEntry(entry_type=EntryType.ERROR_MESSAGE, content=clean_line)]
    return [NormalizedEntry(entry_type=EntryType.ASSISTANT_MESSAGE, content=clean_line)]


class Gemini(BaseProvider):
    """Provider for Gemini CLI tool integration."""

    kind: Literal[ProviderType.GEMINI] = ProviderType.GEMINI
    command: CommandSpec = Field(
        ...,
        validation_alias=AliasChoices("command", "command_builder"),
        description="Launch command for this agent",
    )

    def follow_up_args(self, session_id: str) -> List[str]:
        raise FollowUpNotSupported("Gemini CLI does not support resuming sessions")

    def normalize_line(self, line: str, worktree_path: Path) -> List[NormalizedEntry]:
        return normalize_plain_text_line(line)
