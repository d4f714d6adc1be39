"""Tests for mcp command."""

import json
from unittest.mock import patch

from click.testing import CliRunner

from cli_agent_launcher.cli.commands.mcp import mcp
from cli_agent_launcher.models.settings import Settings


def test_mcp_lists_servers(tmp_path):
    """Servers from the given config file are printed as JSON."""
    path = tmp_path / ".claude.json"
    path.write_text(json.dumps({"mcpServers": {"fs": {"command": "npx"}}}))
    runner = CliRunner()

    with patch("cli_agent_launcher.cli.commands.mcp.load_settings", return_value=Settings()):
        result = runner.invoke(mcp, ["--config-path", str(path)])

    assert result.exit_code == 0
    assert f"Config file: {path}" in result.output
    assert '"fs"' in result.output


def test_mcp_no_servers(tmp_path):
    """An empty or missing registry is reported."""
    runner = CliRunner()

    with patch("cli_agent_launcher.cli.commands.mcp.load_settings", return_value=Settings()):
        result = runner.invoke(mcp, ["--provider", "codex", "--config-path", str(tmp_path / "config.toml")])

    assert result.exit_code == 0
    assert "No MCP servers configured" in result.output


def test_mcp_malformed_file(tmp_path):
    """A config file that does not parse is an error."""
    path = tmp_path / "settings.json"
    path.write_text("{broken")
    runner = CliRunner()

    with patch("cli_agent_launcher.cli.commands.mcp.load_settings", return_value=Settings()):
        result = runner.invoke(mcp, ["--provider", "GEMINI", "--config-path", str(path)])

    assert result.exit_code != 0
    assert "Invalid JSON config" in result.output
