"""Claude Code provider implementation.

Claude Code is run non-interactively (``-p``) with ``--output-format=stream-json``
so that every stdout line is a JSON message:

- ``{"type": "system", "subtype": "init", "session_id": ..., "model": ...}``
- ``{"type": "assistant", "message": {"content": [...]}}``
- ``{"type": "user", "message": {"content": [...]}}`` (tool results, skipped)
- ``{"type": "result", "is_error": ..., "result": ...}``

Content parts are ``text``, ``thinking`` or ``tool_use``.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

from pydantic import Field

from cli_agent_launcher.models.command import CommandSpec
from cli_agent_launcher.models.log import EntryType, NormalizedEntry
from cli_agent_launcher.models.provider import ProviderType
from cli_agent_launcher.providers.base import BaseProvider, make_path_relative

logger = logging.getLogger(__name__)

PLAN_MODE_PARAM = "--permission-mode=plan"

# Tool input keys that carry a file system path
PATH_INPUT_KEYS = ("file_path", "path", "notebook_path")


def describe_tool_use(name: str, tool_input: Dict[str, Any], worktree_path: Path) -> str:
    """One-line summary of a tool invocation."""
    for key in PATH_INPUT_KEYS:
        if key in tool_input:
            return f"{name}: {make_path_relative(str(tool_input[key]), worktree_path)}"
    if "command" in tool_input:
        return f"{name}: {tool_input['command']}"
    if "pattern" in tool_input:
        return f"{name}: {tool_input['pattern']}"
    return name


def normalize_content_parts(parts: List[Dict[str, Any]], worktree_path: Path) -> List[NormalizedEntry]:
    """Normalize an Anthropic-style list of message content parts."""
    entries = []
    for part in parts:
        part_type = part.get("type")
        if part_type == "text" and part.get("text"):
            entries.append(NormalizedEntry(entry_type=EntryType.ASSISTANT_MESSAGE, content=part["text"]))
        elif part_type == "thinking" and part.get("thinking"):
            entries.append(NormalizedEntry(entry_type=EntryType.THINKING, content=part["thinking"]))
        elif part_type == "tool_use":
            entries.append(
                NormalizedEntry(
                    entry_type=EntryType.TOOL_USE,
                    content=describe_tool_use(part.get("name", "tool"), part.get("input") or {}, worktree_path),
                    metadata=part,
                )
            )
    return entries


def normalize_stream_json_line(line: str, worktree_path: Path) -> List[NormalizedEntry]:
    """Normalize one Claude stream-json line."""
    try:
        message = json.loads(line)
    except json.JSONDecodeError:
        return [NormalizedEntry(entry_type=EntryType.SYSTEM_MESSAGE, content=line)]

    if not isinstance(message, dict):
        return [NormalizedEntry(entry_type=EntryType.SYSTEM_MESSAGE, content=line)]

    message_type = message.get("type")
    if message_type == "system":
        model = message.get("model")
        if model:
            return [NormalizedEntry(entry_type=EntryType.SYSTEM_MESSAGE, content=f"System initialized with model: {model}")]
        return []
    if message_type == "assistant":
        content = (message.get("message") or {}).get("content") or []
        return normalize_content_parts(content, worktree_path)
    if message_type == "result" and message.get("is_error"):
        return [NormalizedEntry(entry_type=EntryType.ERROR_MESSAGE, content=str(message.get("result", "")))]
    return []


class ClaudeCode(BaseProvider):
    """Provider for Claude Code CLI tool integration."""

    kind: Literal[ProviderType.CLAUDE_CODE] = ProviderType.CLAUDE_CODE
    plan: bool = Field(False, description="Run Claude Code in plan permission mode")

    def build_command(self) -> CommandSpec:
        if self.plan:
            return self.command.with_params(PLAN_MODE_PARAM)
        return self.command

    def follow_up_args(self, session_id: str) -> List[str]:
        return [f"--resume={session_id}"]

    def extract_session_id(self, line: str) -> Optional[str]:
        try:
            message = json.loads(line)
        except json.JSONDecodeError:
            return None
        if isinstance(message, dict):
            return message.get("session_id")
        return None

    def normalize_line(self, line: str, worktree_path: Path) -> List[NormalizedEntry]:
        return normalize_stream_json_line(line, worktree_path)
