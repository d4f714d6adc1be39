"""Tests for resolving providers from tags, labels and selectors."""

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from cli_agent_launcher.models.profile import AgentVariant, ProfileSelector
from cli_agent_launcher.models.provider import ProviderType
from cli_agent_launcher.providers.base import UnknownExecutorType, UnknownProfile, UnknownVariant
from cli_agent_launcher.providers.claude_code import ClaudeCode
from cli_agent_launcher.providers.gemini import Gemini
from cli_agent_launcher.providers.registry import (
    from_profile_selector,
    from_profile_str,
    parse_provider_type,
    resolve_selector,
    spawn_follow_up,
    spawn_initial,
)


class TestParseProviderType:
    """Tests for provider tag parsing."""

    def test_known_tags(self):
        assert parse_provider_type("CODEX") == ProviderType.CODEX
        assert parse_provider_type("claude") == ProviderType.CLAUDE_CODE

    def test_unknown_tag(self):
        with pytest.raises(UnknownExecutorType, match="Unknown executor type: cursor."):
            parse_provider_type("cursor")


class TestFromProfile:
    """Tests for profile and selector resolution against the defaults."""

    def test_from_profile_str(self):
        provider = from_profile_str("gemini")

        assert isinstance(provider, Gemini)

    def test_from_profile_str_unknown(self):
        with pytest.raises(UnknownProfile):
            from_profile_str("nope")

    def test_selector_without_variant_uses_profile_agent(self):
        provider = from_profile_selector(ProfileSelector(profile="claude-code"))

        assert isinstance(provider, ClaudeCode)
        assert provider.plan is False
        rendered = provider.build_command().render_initial()
        assert "-p" in rendered.split()
        assert "--dangerously-skip-permissions" in rendered.split()

    def test_variant_replaces_profile_agent(self):
        provider = from_profile_selector(ProfileSelector(profile="claude-code", variant="plan"))

        assert provider.plan is True
        assert provider.build_command().render_initial().endswith("--permission-mode=plan")

    def test_router_variant_changes_base(self):
        provider = from_profile_selector(ProfileSelector(profile="claude-code", variant="router"))

        assert provider.command.base == "npx -y @musistudio/claude-code-router code"

    def test_resolve_selector_returns_variant(self):
        resolved = resolve_selector(ProfileSelector(profile="claude-code", variant="router"))

        assert isinstance(resolved, AgentVariant)
        assert resolved.label == "router"

    def test_unknown_variant(self):
        with pytest.raises(UnknownVariant, match="Unknown mode 'turbo' for profile 'amp'"):
            from_profile_selector(ProfileSelector(profile="amp", variant="turbo"))

    def test_unknown_profile(self):
        with pytest.raises(UnknownProfile):
            from_profile_selector(ProfileSelector(profile="missing"))


class TestSpawnBySelector:
    """Tests for spawning through a profile selector."""

    @pytest.mark.asyncio
    @patch("cli_agent_launcher.providers.base.spawn_shell", new_callable=AsyncMock)
    async def test_spawn_initial(self, mock_spawn):
        await spawn_initial(ProfileSelector(profile="amp"), Path("/repo"), "hello")

        mock_spawn.assert_awaited_once_with(
            "npx -y @sourcegraph/amp@0.0.1752148945-gd8844f --format=jsonl", Path("/repo"), stdin_data="hello"
        )

    @pytest.mark.asyncio
    @patch("cli_agent_launcher.providers.base.spawn_shell", new_callable=AsyncMock)
    async def test_spawn_follow_up(self, mock_spawn):
        await spawn_follow_up(ProfileSelector(profile="codex"), Path("/repo"), "again", "abc")

        command = mock_spawn.await_args.args[0]
        assert command.endswith("--skip-git-repo-check resume abc")
