"""Tests for the MCP server configuration service."""

import json
import tomllib
from pathlib import Path
from unittest.mock import patch

import pytest

from cli_agent_launcher.mcp_config.agent_config import AgentConfigError
from cli_agent_launcher.models.profile import ProfileSelector
from cli_agent_launcher.models.provider import ProviderType
from cli_agent_launcher.models.settings import Settings
from cli_agent_launcher.providers.base import UnknownProfile
from cli_agent_launcher.services.mcp_service import (
    ensure_mcp_config,
    read_mcp_servers,
    resolve_target,
    update_mcp_servers,
)

SERVERS = {
    "fs": {"command": "npx", "args": ["-y", "@modelcontextprotocol/server-filesystem"]},
    "git": {"command": "uvx", "args": ["mcp-server-git"]},
}


class TestResolveTarget:
    """Tests for choosing which config file a request addresses."""

    def test_selected_profile_decides(self):
        provider_type, path = resolve_target(Settings(profile=ProfileSelector(profile="codex")))

        assert provider_type == ProviderType.CODEX
        assert path.name == "config.toml"

    def test_profile_override_path(self, monkeypatch):
        monkeypatch.setenv("HOME", "/home/dev")

        provider_type, path = resolve_target(Settings(profile=ProfileSelector(profile="qwen-code")))

        assert provider_type == ProviderType.GEMINI
        assert path == Path("/home/dev/.qwen/settings.json")

    @patch("cli_agent_launcher.services.mcp_service.default_config_path")
    def test_explicit_provider_type_wins(self, mock_default):
        mock_default.return_value = Path("/cfg/amp/settings.json")

        provider_type, path = resolve_target(Settings(), provider_type=ProviderType.AMP)

        assert provider_type == ProviderType.AMP
        assert path == Path("/cfg/amp/settings.json")

    def test_explicit_path_wins(self):
        _, path = resolve_target(Settings(), config_path="/tmp/custom.json")

        assert path == Path("/tmp/custom.json")

    def test_unknown_profile(self):
        with pytest.raises(UnknownProfile):
            resolve_target(Settings(profile=ProfileSelector(profile="gone")))

    @patch("cli_agent_launcher.services.mcp_service.default_config_path", return_value=None)
    def test_no_path(self, _mock_default):
        with pytest.raises(ValueError, match="Could not determine config file path"):
            resolve_target(Settings(), provider_type=ProviderType.GEMINI)


class TestReadAndUpdate:
    """Tests for reading and replacing servers in real files."""

    @pytest.mark.asyncio
    async def test_update_preserves_other_keys(self, tmp_path):
        path = tmp_path / ".claude.json"
        path.write_text(json.dumps({"numStartups": 12, "mcpServers": {"old": {"command": "x"}}}))

        message = await update_mcp_servers(path, ProviderType.CLAUDE_CODE, SERVERS)

        document = json.loads(path.read_text())
        assert message == "Updated MCP server configuration (was 1, now 2)"
        assert document["numStartups"] == 12
        assert document["mcpServers"] == SERVERS

    @pytest.mark.asyncio
    async def test_update_creates_missing_file(self, tmp_path):
        path = tmp_path / "new" / "settings.json"

        message = await update_mcp_servers(path, ProviderType.GEMINI, SERVERS)

        assert message == "Added 2 MCP server(s)"
        assert json.loads(path.read_text()) == {"mcpServers": SERVERS}

    @pytest.mark.asyncio
    async def test_amp_round_trip_uses_flat_key(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"amp.notifications.enabled": False}))

        await update_mcp_servers(path, ProviderType.AMP, SERVERS)

        assert json.loads(path.read_text()) == {"amp.notifications.enabled": False, "amp.mcpServers": SERVERS}
        assert await read_mcp_servers(path, ProviderType.AMP) == SERVERS

    @pytest.mark.asyncio
    async def test_codex_round_trip_is_toml(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('model = "o3"\n')

        message = await update_mcp_servers(path, ProviderType.CODEX, SERVERS)

        assert message == "Added 2 MCP server(s)"
        assert tomllib.loads(path.read_text()) == {"model": "o3", "mcp_servers": SERVERS}
        assert await read_mcp_servers(path, ProviderType.CODEX) == SERVERS

    @pytest.mark.asyncio
    async def test_clearing_servers(self, tmp_path):
        path = tmp_path / "opencode.json"
        path.write_text(json.dumps({"mcp": {}}))

        assert await update_mcp_servers(path, ProviderType.OPENCODE, {}) == "No MCP servers configured"

    @pytest.mark.asyncio
    async def test_read_missing_file(self, tmp_path):
        assert await read_mcp_servers(tmp_path / "absent.json", ProviderType.CLAUDE_CODE) == {}

    @pytest.mark.asyncio
    async def test_malformed_file_is_not_overwritten(self, tmp_path):
        path = tmp_path / ".claude.json"
        path.write_text("{broken")

        with pytest.raises(AgentConfigError):
            await update_mcp_servers(path, ProviderType.CLAUDE_CODE, SERVERS)

        assert path.read_text() == "{broken"

    @pytest.mark.asyncio
    async def test_json_file_unchanged_by_read_write_cycle(self, tmp_path):
        path = tmp_path / ".claude.json"
        original = {
            "numStartups": 12,
            "projects": {"/src/app": {"allowedTools": ["Bash"], "history": []}},
            "mcpServers": SERVERS,
            "tipsHistory": {"new-user-warmup": 1},
        }
        path.write_text(json.dumps(original))

        servers = await read_mcp_servers(path, ProviderType.CLAUDE_CODE)
        await update_mcp_servers(path, ProviderType.CLAUDE_CODE, servers)

        assert json.loads(path.read_text()) == original

    @pytest.mark.asyncio
    async def test_codex_file_with_other_tables_unchanged_by_read_write_cycle(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text(
            'model = "o3"\n'
            'approval_policy = "on-request"\n'
            "\n"
            "[profiles.fast]\n"
            'model = "o4-mini"\n'
            "\n"
            "[mcp_servers.fs]\n"
            'command = "npx"\n'
            'args = ["-y", "@modelcontextprotocol/server-filesystem"]\n'
            "\n"
            "[shell_environment_policy]\n"
            'inherit = "core"\n'
        )
        before = tomllib.loads(path.read_text())

        servers = await read_mcp_servers(path, ProviderType.CODEX)
        await update_mcp_servers(path, ProviderType.CODEX, servers)

        assert tomllib.loads(path.read_text()) == before


class TestEnsureMcpConfig:
    """Tests for creating an initial config file."""

    @pytest.mark.asyncio
    async def test_creates_file_with_empty_registry(self, tmp_path):
        path = tmp_path / "amp" / "settings.json"

        await ensure_mcp_config(path, ProviderType.AMP)

        assert json.loads(path.read_text()) == {"amp.mcpServers": {}}

    @pytest.mark.asyncio
    async def test_existing_file_untouched(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text('{"keep": true}')

        await ensure_mcp_config(path, ProviderType.GEMINI)

        assert path.read_text() == '{"keep": true}'
