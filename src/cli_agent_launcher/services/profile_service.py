"""Profile registry service.

Profiles come from two places:
- Built-in defaults bundled in the ``agent_store`` package
- A user-editable profiles file at PROFILES_FILE

At startup the user file, if it reads and validates, is used as the whole
collection; otherwise the defaults are used. The loaded collection is cached
for the lifetime of the process. Edits saved through ``save_profiles`` take
effect after a restart.
"""

import logging
import threading
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Optional, Tuple, Union

import aiofiles
from pydantic import ValidationError

from cli_agent_launcher import agent_store
from cli_agent_launcher.constants import DEFAULT_PROFILES_RESOURCE, PROFILES_FILE
from cli_agent_launcher.models.profile import AgentProfile, AgentProfiles, AgentVariant

logger = logging.getLogger(__name__)

_profiles_cache: Optional[AgentProfiles] = None
_profiles_lock = threading.Lock()


class InvalidProfilesError(Exception):
    """Raised when a user-supplied profiles document fails validation."""

    pass


@lru_cache(maxsize=None)
def _default_profiles() -> AgentProfiles:
    try:
        content = (resources.files(agent_store) / DEFAULT_PROFILES_RESOURCE).read_text(encoding="utf-8")
        return AgentProfiles.model_validate_json(content)
    except (OSError, ValidationError) as e:
        logger.error(f"Failed to parse embedded {DEFAULT_PROFILES_RESOURCE}: {e}")
        raise RuntimeError("Default profiles JSON is invalid") from e


def load_default_profiles() -> AgentProfiles:
    """Return a fresh copy of the built-in default profiles.

    Raises:
        RuntimeError: If the bundled defaults are malformed
    """
    return _default_profiles().model_copy(deep=True)


def load_profiles() -> AgentProfiles:
    """Load the user profiles file, falling back to defaults on any failure."""
    try:
        content = PROFILES_FILE.read_bytes()
    except OSError as e:
        logger.warning(f"Failed to read {PROFILES_FILE}: {e}, using defaults")
        return load_default_profiles()

    # Bytes, so invalid UTF-8 is reported as a ValidationError
    try:
        profiles = AgentProfiles.model_validate_json(content)
    except ValidationError as e:
        logger.warning(f"Failed to parse {PROFILES_FILE}: {e}, using defaults")
        return load_default_profiles()

    logger.info(f"Loaded all profiles from {PROFILES_FILE}")
    return profiles


def get_cached_profiles() -> AgentProfiles:
    """Process-wide profile collection, loaded on first access."""
    global _profiles_cache
    if _profiles_cache is None:
        with _profiles_lock:
            if _profiles_cache is None:
                _profiles_cache = load_profiles()
    return _profiles_cache


def reset_profiles_cache() -> None:
    """Drop the cached collection so the next access reloads it."""
    global _profiles_cache
    with _profiles_lock:
        _profiles_cache = None


def get_profile(label: str) -> Optional[AgentProfile]:
    return get_cached_profiles().get_profile(label)


def get_variant(profile: AgentProfile, variant_label: str) -> Optional[AgentVariant]:
    return profile.get_variant(variant_label)


def resolve_mcp_config_path(profile_or_variant: Union[AgentProfile, AgentVariant]) -> Optional[Path]:
    return profile_or_variant.get_mcp_config_path()


def merge_user_profiles(defaults: AgentProfiles, user: AgentProfiles) -> AgentProfiles:
    """Overlay user profiles onto defaults by label.

    A user profile whose label matches a default replaces it entirely (no
    field-level merge); any other user profile is appended.
    """
    merged = list(defaults.profiles)
    for user_profile in user.profiles:
        for index, default_profile in enumerate(merged):
            if default_profile.label == user_profile.label:
                merged[index] = user_profile
                break
        else:
            merged.append(user_profile)
    return AgentProfiles(profiles=merged)


def get_profiles_content() -> Tuple[str, Path]:
    """Defaults overlaid with the user file, as pretty JSON, plus the file path."""
    profiles = load_default_profiles()
    try:
        user_content = PROFILES_FILE.read_bytes()
    except OSError:
        user_content = None

    if user_content is not None:
        try:
            profiles = merge_user_profiles(profiles, AgentProfiles.model_validate_json(user_content))
        except ValidationError as e:
            logger.error(f"Failed to parse {PROFILES_FILE}: {e}")

    return profiles.model_dump_json(indent=2), PROFILES_FILE


async def save_profiles(content: str) -> AgentProfiles:
    """Validate and persist a complete profiles document.

    Raises:
        InvalidProfilesError: If ``content`` is not a valid profiles document
        OSError: If the file cannot be written
    """
    try:
        profiles = AgentProfiles.model_validate_json(content)
    except ValidationError as e:
        raise InvalidProfilesError(f"Invalid profiles format: {e}") from e

    PROFILES_FILE.parent.mkdir(parents=True, exist_ok=True)
    async with aiofiles.open(PROFILES_FILE, "w", encoding="utf-8") as f:
        await f.write(profiles.model_dump_json(indent=2))

    logger.info(f"All profiles saved to {PROFILES_FILE} (restart to apply)")
    return profiles


async def ensure_profiles_file() -> Path:
    """Create the profiles file from defaults if it does not exist yet."""
    if not PROFILES_FILE.exists():
        PROFILES_FILE.parent.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(PROFILES_FILE, "w", encoding="utf-8") as f:
            await f.write(load_default_profiles().model_dump_json(indent=2))
        logger.info(f"Created {PROFILES_FILE} from defaults")
    return PROFILES_FILE
