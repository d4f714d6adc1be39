"""Persisted application settings and their schema migration.

The settings document carries a ``config_version`` stamp. The current schema
is v4, where the selected agent is a ``ProfileSelector``. The previous schema
stored a single profile name string; those names are remapped to
profile/variant pairs on upgrade.
"""

import logging
import shlex
import subprocess
from enum import Enum
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field, ValidationError

from cli_agent_launcher.constants import CURRENT_SETTINGS_VERSION, DEFAULT_PROFILE
from cli_agent_launcher.models.profile import ProfileSelector

logger = logging.getLogger(__name__)


class ThemeMode(str, Enum):
    """UI theme preference."""

    LIGHT = "LIGHT"
    DARK = "DARK"
    SYSTEM = "SYSTEM"


class EditorType(str, Enum):
    """Editor used to open config files."""

    VS_CODE = "VS_CODE"
    CURSOR = "CURSOR"
    WINDSURF = "WINDSURF"
    INTELLI_J = "INTELLI_J"
    ZED = "ZED"
    CUSTOM = "CUSTOM"


EDITOR_COMMANDS: Dict[EditorType, str] = {
    EditorType.VS_CODE: "code",
    EditorType.CURSOR: "cursor",
    EditorType.WINDSURF: "windsurf",
    EditorType.INTELLI_J: "idea",
    EditorType.ZED: "zed",
}


class EditorConfig(BaseModel):
    """Editor integration settings."""

    editor_type: EditorType = EditorType.VS_CODE
    custom_command: Optional[str] = None

    def get_command(self) -> List[str]:
        if self.editor_type == EditorType.CUSTOM and self.custom_command:
            return shlex.split(self.custom_command)
        return [EDITOR_COMMANDS.get(self.editor_type, "code")]

    def open_file(self, path: str) -> None:
        """Launch the editor on ``path`` without waiting for it.

        Raises:
            OSError: If the editor executable cannot be started
        """
        subprocess.Popen(self.get_command() + [path], start_new_session=True)


class NotificationConfig(BaseModel):
    """Notification settings."""

    sound_enabled: bool = True
    push_enabled: bool = True


class GitHubConfig(BaseModel):
    """GitHub account preferences."""

    username: Optional[str] = None
    primary_email: Optional[str] = None
    default_pr_base: Optional[str] = "main"


class LegacySettings(BaseModel):
    """Previous settings schema, where ``profile`` was a plain profile name."""

    config_version: Optional[str] = None
    theme: ThemeMode = ThemeMode.SYSTEM
    profile: str
    disclaimer_acknowledged: bool = False
    onboarding_acknowledged: bool = False
    github_login_acknowledged: bool = False
    telemetry_acknowledged: bool = False
    notifications: NotificationConfig = Field(default_factory=NotificationConfig)
    editor: EditorConfig = Field(default_factory=EditorConfig)
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    analytics_enabled: Optional[bool] = None
    workspace_dir: Optional[str] = None


# Legacy profile names and the profile/variant each maps to
LEGACY_PROFILE_MAP: Dict[str, ProfileSelector] = {
    "claude-code": ProfileSelector(profile="claude-code"),
    "claude-code-plan": ProfileSelector(profile="claude-code", variant="plan"),
    "claude-code-router": ProfileSelector(profile="claude-code", variant="router"),
    "amp": ProfileSelector(profile="amp"),
    "gemini": ProfileSelector(profile="gemini"),
    "codex": ProfileSelector(profile="codex"),
    "opencode": ProfileSelector(profile="opencode"),
    "qwen-code": ProfileSelector(profile="qwen-code"),
}


class Settings(BaseModel):
    """Current (v4) application settings."""

    config_version: str = CURRENT_SETTINGS_VERSION
    theme: ThemeMode = ThemeMode.SYSTEM
    profile: ProfileSelector = Field(default_factory=lambda: ProfileSelector(profile=DEFAULT_PROFILE))
    disclaimer_acknowledged: bool = False
    onboarding_acknowledged: bool = False
    github_login_acknowledged: bool = False
    telemetry_acknowledged: bool = False
    notifications: NotificationConfig = Field(default_factory=NotificationConfig)
    editor: EditorConfig = Field(default_factory=EditorConfig)
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    analytics_enabled: Optional[bool] = None
    workspace_dir: Optional[str] = None

    @classmethod
    def from_previous_version(cls, raw_config: Union[str, bytes]) -> "Settings":
        """Upgrade a previous-schema document.

        An unrecognized legacy profile falls back to the default profile and
        resets onboarding, since the earlier choice no longer exists.

        Raises:
            ValidationError: If ``raw_config`` is not a previous-schema document
        """
        try:
            old_config = LegacySettings.model_validate_json(raw_config)
        except ValidationError as e:
            logger.error(f"Failed to parse config: {e}")
            raise

        onboarding_acknowledged = old_config.onboarding_acknowledged
        profile = LEGACY_PROFILE_MAP.get(old_config.profile)
        if profile is None:
            logger.warning(f"Unsupported legacy profile '{old_config.profile}', resetting to {DEFAULT_PROFILE}")
            profile = ProfileSelector(profile=DEFAULT_PROFILE)
            onboarding_acknowledged = False

        return cls(
            config_version=CURRENT_SETTINGS_VERSION,
            theme=old_config.theme,
            profile=profile.model_copy(),
            disclaimer_acknowledged=old_config.disclaimer_acknowledged,
            onboarding_acknowledged=onboarding_acknowledged,
            github_login_acknowledged=old_config.github_login_acknowledged,
            telemetry_acknowledged=old_config.telemetry_acknowledged,
            notifications=old_config.notifications,
            editor=old_config.editor,
            github=old_config.github,
            analytics_enabled=old_config.analytics_enabled,
            workspace_dir=old_config.workspace_dir,
        )

    @classmethod
    def from_raw(cls, raw_config: Union[str, bytes]) -> "Settings":
        """Parse a settings document of any known version. Never raises."""
        try:
            config = cls.model_validate_json(raw_config)
            if config.config_version == CURRENT_SETTINGS_VERSION:
                return config
        except ValidationError:
            pass

        try:
            config = cls.from_previous_version(raw_config)
        except ValidationError as e:
            logger.warning(f"Config migration failed: {e}, using default")
            return cls()

        logger.info(f"Config upgraded to {CURRENT_SETTINGS_VERSION}")
        return config
