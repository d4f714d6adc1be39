"""Agent profile models.

In the profiles document the agent configuration is flattened into the
profile under a key naming its kind::

    {
      "label": "claude-code",
      "CLAUDE_CODE": {"command": {"base": "npx ...", "params": ["-p"]}, "plan": false},
      "mcp_config_path": null,
      "variants": []
    }

Validation lifts that key into an ``agent`` field and serialization puts it
back.
"""

from pathlib import Path
from typing import Annotated, Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_serializer, model_validator

from cli_agent_launcher.models.provider import ProviderType
from cli_agent_launcher.providers.amp import Amp
from cli_agent_launcher.providers.claude_code import ClaudeCode
from cli_agent_launcher.providers.codex import Codex
from cli_agent_launcher.providers.gemini import Gemini
from cli_agent_launcher.providers.opencode import Opencode
from cli_agent_launcher.utils.paths import expand_tilde

CodingAgent = Annotated[Union[ClaudeCode, Amp, Gemini, Codex, Opencode], Field(discriminator="kind")]


def _as_provider_type(key: str) -> Optional[ProviderType]:
    try:
        return ProviderType(key)
    except ValueError:
        return None


class _FlattenedAgentModel(BaseModel):
    """Shared (de)flattening of the agent-kind key."""

    label: str = Field(..., min_length=1, description="Unique identifier (e.g. 'claude-code')")
    agent: CodingAgent
    mcp_config_path: Optional[str] = Field(
        None, description="MCP config file path override (absolute; supports leading ~)"
    )

    @model_validator(mode="before")
    @classmethod
    def _unflatten_agent(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "agent" in data:
            return data

        kind_keys = [(key, _as_provider_type(key)) for key in data]
        kind_keys = [(key, kind) for key, kind in kind_keys if kind is not None]
        if len(kind_keys) != 1:
            raise ValueError(
                f"Profile '{data.get('label')}' must define exactly one agent "
                f"({', '.join(t.value for t in ProviderType)})"
            )

        key, kind = kind_keys[0]
        unflattened = {k: v for k, v in data.items() if k != key}
        agent_config = data[key]
        if not isinstance(agent_config, dict):
            raise ValueError(f"Agent configuration under '{key}' must be an object")
        unflattened["agent"] = {**agent_config, "kind": kind}
        return unflattened

    @model_serializer(mode="wrap")
    def _flatten_agent(self, handler) -> Dict[str, Any]:
        data = handler(self)
        agent = dict(data.pop("agent"))
        kind = agent.pop("kind")
        kind_key = kind.value if isinstance(kind, ProviderType) else str(kind)

        flattened: Dict[str, Any] = {"label": data.pop("label"), kind_key: agent}
        flattened.update(data)
        return flattened

    def get_mcp_config_path(self) -> Optional[Path]:
        """Override path if set, else the agent kind's default config path."""
        if self.mcp_config_path:
            return expand_tilde(self.mcp_config_path)
        return self.agent.default_config_path()


class AgentVariant(_FlattenedAgentModel):
    """Alternate configuration of a profile (e.g. "plan" or "router" mode)."""

    pass


class AgentProfile(_FlattenedAgentModel):
    """Named, user-selectable coding agent configuration."""

    variants: List[AgentVariant] = Field(default_factory=list, description="Supported variants, may be empty")

    def get_variant(self, variant: str) -> Optional[AgentVariant]:
        return next((v for v in self.variants if v.label == variant), None)


class ProfileSelector(BaseModel):
    """Persisted user choice of profile and optional variant."""

    profile: str = Field(..., description="Profile label")
    variant: Optional[str] = Field(None, description="Variant label within the profile")

    def __str__(self) -> str:
        return f"{self.profile}/{self.variant}" if self.variant else self.profile


class AgentProfiles(BaseModel):
    """Ordered collection of agent profiles with unique labels."""

    profiles: List[AgentProfile]

    @field_validator("profiles")
    @classmethod
    def _labels_unique(cls, profiles: List[AgentProfile]) -> List[AgentProfile]:
        seen = set()
        for profile in profiles:
            if profile.label in seen:
                raise ValueError(f"Duplicate profile label: {profile.label}")
            seen.add(profile.label)
        return profiles

    def get_profile(self, label: str) -> Optional[AgentProfile]:
        return next((p for p in self.profiles if p.label == label), None)

    def to_map(self) -> Dict[str, AgentProfile]:
        return {p.label: p for p in self.profiles}
