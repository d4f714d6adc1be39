"""Shared fixtures: isolate user files and the process-wide profile cache."""

from unittest.mock import patch

import pytest

from cli_agent_launcher.services import profile_service


@pytest.fixture(autouse=True)
def isolated_profiles_file(tmp_path):
    """Point the user profiles file at an empty temp location and reset the cache."""
    profiles_file = tmp_path / "cal-home" / "profiles.json"
    with patch("cli_agent_launcher.services.profile_service.PROFILES_FILE", profiles_file):
        profile_service.reset_profiles_cache()
        yield profiles_file
    profile_service.reset_profiles_cache()
