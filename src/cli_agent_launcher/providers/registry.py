"""Provider resolution from tags, profile labels and profile selectors."""

import asyncio
import logging
from pathlib import Path
from typing import Union

from cli_agent_launcher.models.profile import AgentProfile, AgentVariant, ProfileSelector
from cli_agent_launcher.models.provider import ProviderType
from cli_agent_launcher.providers.base import (
    BaseProvider,
    UnknownExecutorType,
    UnknownProfile,
    UnknownVariant,
)
from cli_agent_launcher.services.profile_service import get_cached_profiles

logger = logging.getLogger(__name__)


def parse_provider_type(tag: str) -> ProviderType:
    """Parse a provider tag such as "CLAUDE_CODE", "codex" or "claude"."""
    try:
        return ProviderType(tag)
    except ValueError:
        raise UnknownExecutorType(f"Unknown executor type: {tag}.") from None


def from_profile_str(label: str) -> BaseProvider:
    """Provider of a profile, ignoring its variants."""
    profile = get_cached_profiles().get_profile(label)
    if profile is None:
        raise UnknownProfile(f"Unknown profile: {label}")
    return profile.agent


def resolve_selector(selector: ProfileSelector) -> Union[AgentProfile, AgentVariant]:
    """Profile named by ``selector``, or its selected variant.

    Raises:
        UnknownProfile: If the profile label is not defined
        UnknownVariant: If the variant label is not defined for the profile
    """
    profile = get_cached_profiles().get_profile(selector.profile)
    if profile is None:
        raise UnknownProfile(f"Unknown profile: {selector.profile}")

    if selector.variant is None:
        return profile

    variant = profile.get_variant(selector.variant)
    if variant is None:
        raise UnknownVariant(f"Unknown mode '{selector.variant}' for profile '{selector.profile}'")
    return variant


def from_profile_selector(selector: ProfileSelector) -> BaseProvider:
    """Resolve a selector to a concrete provider.

    A variant, when selected, fully replaces the profile's own agent.
    """
    return resolve_selector(selector).agent


async def spawn_initial(selector: ProfileSelector, current_dir: Path, prompt: str) -> asyncio.subprocess.Process:
    provider = from_profile_selector(selector)
    logger.info(f"Spawning {selector} ({provider.provider_type.value}) in {current_dir}")
    return await provider.spawn(current_dir, prompt)


async def spawn_follow_up(
    selector: ProfileSelector, current_dir: Path, prompt: str, session_id: str
) -> asyncio.subprocess.Process:
    provider = from_profile_selector(selector)
    logger.info(f"Spawning follow-up for session {session_id} with {selector} in {current_dir}")
    return await provider.spawn_follow_up(current_dir, prompt, session_id)
