"""Opencode provider implementation."""

import re
from pathlib import Path
from typing import List, Literal, Optional

from cli_agent_launcher.models.log import NormalizedEntry
from cli_agent_launcher.models.provider import ProviderType
from cli_agent_launcher.providers.base import BaseProvider
from cli_agent_launcher.providers.gemini import normalize_plain_text_line

# --print-logs emits service log lines such as "INFO ... session=ses_abc123 ..."
SESSION_ID_PATTERN = r"\bsession(?:ID|_id)?=(ses_[A-Za-z0-9]+)"
LOG_LINE_PATTERN = r"^(?:DEBUG|INFO|WARN)\s"


class Opencode(BaseProvider):
    """Provider for Opencode CLI tool integration."""

    kind: Literal[ProviderType.OPENCODE] = ProviderType.OPENCODE

    def follow_up_args(self, session_id: str) -> List[str]:
        return [f"--session={session_id}"]

    def extract_session_id(self, line: str) -> Optional[str]:
        match = re.search(SESSION_ID_PATTERN, line)
        return match.group(1) if match else None

    def normalize_line(self, line: str, worktree_path: Path) -> List[NormalizedEntry]:
        # Service logs carry no user-facing content
        if re.match(LOG_LINE_PATTERN, line):
            return []
        return normalize_plain_text_line(line)
