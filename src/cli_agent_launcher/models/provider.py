"""Agent kinds and their static, compiled-in facts.

Each supported coding agent CLI is one ``ProviderType`` member. Everything the
launcher needs to know about a kind without instantiating it (config file
format and location, where MCP servers live in that file) is kept as one row
of ``PROVIDER_FACTS``. Callers look facts up here instead of branching on the
kind.
"""

from enum import Enum
from pathlib import Path
from typing import Any, Dict, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from cli_agent_launcher.utils.paths import config_dir, home_dir, is_unix, xdg_config_home


class ProviderType(str, Enum):
    """Provider type enumeration."""

    CLAUDE_CODE = "CLAUDE_CODE"
    AMP = "AMP"
    GEMINI = "GEMINI"
    CODEX = "CODEX"
    OPENCODE = "OPENCODE"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            normalized = value.strip().upper().replace("-", "_")
            if normalized == "CLAUDE":
                return cls.CLAUDE_CODE
            for member in cls:
                if member.value == normalized:
                    return member
        return None


class ConfigFormat(str, Enum):
    """On-disk format of an agent's native configuration file."""

    JSON = "json"
    TOML = "toml"


class ConfigLocation(BaseModel):
    """Where a kind's config file lives, relative to a host directory.

    ``root`` selects the base directory:
    - home: the user's home directory
    - config: the OS configuration directory
    - xdg: $XDG_CONFIG_HOME on Unix, the OS configuration directory elsewhere
    """

    model_config = ConfigDict(frozen=True)

    root: Literal["home", "config", "xdg"]
    parts: Tuple[str, ...]

    def resolve(self) -> Path:
        if self.root == "home":
            base = home_dir()
        elif self.root == "xdg" and is_unix():
            base = xdg_config_home()
        else:
            base = config_dir()
        return base.joinpath(*self.parts)


class McpPathSpec(BaseModel):
    """Where MCP servers live inside a kind's config document."""

    model_config = ConfigDict(frozen=True)

    key_path: Tuple[str, ...] = Field(..., min_length=1)
    uses_flat_key: bool = False
    empty_container_shape: Dict[str, Any] = Field(default_factory=dict)
    server_entry_template: Dict[str, Any] = Field(default_factory=dict)

    @property
    def flat_key(self) -> str:
        """Single top-level key used by kinds that store the path flattened."""
        return ".".join(self.key_path)


class ProviderFacts(BaseModel):
    """Static facts for one provider type."""

    model_config = ConfigDict(frozen=True)

    config_format: ConfigFormat
    config_location: Optional[ConfigLocation]
    mcp: Optional[McpPathSpec] = None


_STDIO_SERVER_TEMPLATE = {
    "command": "npx",
    "args": ["-y", "@modelcontextprotocol/server-everything"],
}

PROVIDER_FACTS: Dict[ProviderType, ProviderFacts] = {
    ProviderType.CLAUDE_CODE: ProviderFacts(
        config_format=ConfigFormat.JSON,
        config_location=ConfigLocation(root="home", parts=(".claude.json",)),
        mcp=McpPathSpec(key_path=("mcpServers",), server_entry_template=_STDIO_SERVER_TEMPLATE),
    ),
    ProviderType.AMP: ProviderFacts(
        config_format=ConfigFormat.JSON,
        config_location=ConfigLocation(root="config", parts=("amp", "settings.json")),
        # Amp settings files only support the dotted top-level key form
        mcp=McpPathSpec(
            key_path=("amp", "mcpServers"),
            uses_flat_key=True,
            server_entry_template=_STDIO_SERVER_TEMPLATE,
        ),
    ),
    ProviderType.GEMINI: ProviderFacts(
        config_format=ConfigFormat.JSON,
        config_location=ConfigLocation(root="home", parts=(".gemini", "settings.json")),
        mcp=McpPathSpec(key_path=("mcpServers",), server_entry_template=_STDIO_SERVER_TEMPLATE),
    ),
    ProviderType.CODEX: ProviderFacts(
        config_format=ConfigFormat.TOML,
        config_location=ConfigLocation(root="home", parts=(".codex", "config.toml")),
        mcp=McpPathSpec(key_path=("mcp_servers",), server_entry_template=_STDIO_SERVER_TEMPLATE),
    ),
    ProviderType.OPENCODE: ProviderFacts(
        config_format=ConfigFormat.JSON,
        config_location=ConfigLocation(root="xdg", parts=("opencode", "opencode.json")),
        mcp=McpPathSpec(
            key_path=("mcp",),
            server_entry_template={
                "type": "local",
                "command": ["npx", "-y", "@modelcontextprotocol/server-everything"],
                "enabled": True,
            },
        ),
    ),
}


def mcp_path_spec(provider_type: ProviderType) -> Optional[McpPathSpec]:
    return PROVIDER_FACTS[provider_type].mcp


def mcp_key_path(provider_type: ProviderType) -> Optional[Tuple[str, ...]]:
    """Key path of the MCP server registry, or None if MCP is unsupported."""
    spec = mcp_path_spec(provider_type)
    return spec.key_path if spec else None


def supports_mcp(provider_type: ProviderType) -> bool:
    return mcp_key_path(provider_type) is not None


def config_format(provider_type: ProviderType) -> ConfigFormat:
    return PROVIDER_FACTS[provider_type].config_format


def default_config_path(provider_type: ProviderType) -> Optional[Path]:
    location = PROVIDER_FACTS[provider_type].config_location
    return location.resolve() if location else None
