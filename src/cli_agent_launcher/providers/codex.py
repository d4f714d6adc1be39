"""Codex CLI provider implementation.

Codex runs as ``codex exec --json``. After an initial config summary line,
each line is an event of the form ``{"id": ..., "msg": {"type": ..., ...}}``.
"""

import json
import logging
from pathlib import Path
from typing import List, Literal, Optional

from cli_agent_launcher.models.log import EntryType, NormalizedEntry
from cli_agent_launcher.models.provider import ProviderType
from cli_agent_launcher.providers.base import BaseProvider, make_path_relative

logger = logging.getLogger(__name__)


class Codex(BaseProvider):
    """Provider for Codex CLI tool integration."""

    kind: Literal[ProviderType.CODEX] = ProviderType.CODEX

    def follow_up_args(self, session_id: str) -> List[str]:
        return ["resume", session_id]

    def extract_session_id(self, line: str) -> Optional[str]:
        msg = self._parse_msg(line)
        if msg and msg.get("type") == "session_configured":
            return msg.get("session_id")
        return None

    @staticmethod
    def _parse_msg(line: str) -> Optional[dict]:
        try:
            event = json.loads(line)
        except json.JSONDecodeError:
            return None
        if not isinstance(event, dict) or not isinstance(event.get("msg"), dict):
            return None
        return event["msg"]

    def normalize_line(self, line: str, worktree_path: Path) -> List[NormalizedEntry]:
        msg = self._parse_msg(line)
        if msg is None:
            try:
                summary = json.loads(line)
            except json.JSONDecodeError:
                return [NormalizedEntry(entry_type=EntryType.SYSTEM_MESSAGE, content=line)]
            # Initial config summary: {"model": ..., "sandbox": ..., ...}
            if isinstance(summary, dict) and "model" in summary:
                details = ", ".join(f"{k}: {v}" for k, v in summary.items())
                return [NormalizedEntry(entry_type=EntryType.SYSTEM_MESSAGE, content=details)]
            return []

        msg_type = msg.get("type")
        if msg_type == "agent_message":
            return [NormalizedEntry(entry_type=EntryType.ASSISTANT_MESSAGE, content=msg.get("message", ""))]
        if msg_type == "agent_reasoning":
            return [NormalizedEntry(entry_type=EntryType.THINKING, content=msg.get("text", ""))]
        if msg_type == "exec_command_begin":
            command = msg.get("command") or []
            if isinstance(command, list):
                # ["bash", "-lc", "<script>"] -> "<script>"
                command = command[-1] if command[:2] == ["bash", "-lc"] else " ".join(command)
            return [NormalizedEntry(entry_type=EntryType.TOOL_USE, content=f"exec: {command}", metadata=msg)]
        if msg_type == "patch_apply_begin":
            files = [make_path_relative(path, worktree_path) for path in (msg.get("changes") or {})]
            return [NormalizedEntry(entry_type=EntryType.TOOL_USE, content=f"apply_patch: {', '.join(files)}", metadata=msg)]
        if msg_type == "error":
            return [NormalizedEntry(entry_type=EntryType.ERROR_MESSAGE, content=msg.get("message", ""))]
        return []
