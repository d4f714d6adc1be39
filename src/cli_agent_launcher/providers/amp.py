"""Amp provider implementation.

Amp runs with ``--format=jsonl``. Relevant line shapes:

- ``{"type": "initial", "threadID": "T-..."}``
- ``{"type": "messages", "messages": [[index, {"role": ..., "content": [...]}], ...]}``
- ``{"type": "error", "error": ...}``
"""

import json
from pathlib import Path
from typing import List, Literal, Optional

from cli_agent_launcher.models.log import EntryType, NormalizedEntry
from cli_agent_launcher.models.provider import ProviderType
from cli_agent_launcher.providers.base import BaseProvider
from cli_agent_launcher.providers.claude_code import normalize_content_parts


class Amp(BaseProvider):
    """Provider for Amp CLI tool integration."""

    kind: Literal[ProviderType.AMP] = ProviderType.AMP

    def follow_up_args(self, session_id: str) -> List[str]:
        return ["threads", "continue", session_id]

    def extract_session_id(self, line: str) -> Optional[str]:
        try:
            message = json.loads(line)
        except json.JSONDecodeError:
            return None
        if isinstance(message, dict) and message.get("type") == "initial":
            return message.get("threadID")
        return None

    def normalize_line(self, line: str, worktree_path: Path) -> List[NormalizedEntry]:
        try:
            message = json.loads(line)
        except json.JSONDecodeError:
            return [NormalizedEntry(entry_type=EntryType.SYSTEM_MESSAGE, content=line)]
        if not isinstance(message, dict):
            return [NormalizedEntry(entry_type=EntryType.SYSTEM_MESSAGE, content=line)]

        if message.get("type") == "error":
            return [NormalizedEntry(entry_type=EntryType.ERROR_MESSAGE, content=str(message.get("error", "")))]
        if message.get("type") != "messages":
            return []

        entries = []
        for item in message.get("messages") or []:
            # Each item is an [index, message] pair
            if not isinstance(item, list) or len(item) != 2 or not isinstance(item[1], dict):
                continue
            if item[1].get("role") != "assistant":
                continue
            entries.extend(normalize_content_parts(item[1].get("content") or [], worktree_path))
        return entries
