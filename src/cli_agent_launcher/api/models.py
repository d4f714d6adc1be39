"""
API Request/Response Models

These are API-specific models for request/response validation,
separate from domain models in cli_agent_launcher/models/ folder.
"""
import platform
from typing import Any, Dict, List

from pydantic import BaseModel, Field

from cli_agent_launcher.models.profile import AgentProfile
from cli_agent_launcher.models.settings import Settings


class Environment(BaseModel):
    """Host OS facts reported alongside the configuration."""
    os_type: str = Field(..., description="Operating system name")
    os_version: str = Field(..., description="Operating system release")
    os_architecture: str = Field(..., description="Machine architecture")
    bitness: str = Field(..., description="Pointer width, e.g. 64bit")

    @classmethod
    def current(cls) -> "Environment":
        return cls(
            os_type=platform.system() or "unknown",
            os_version=platform.release() or "unknown",
            os_architecture=platform.machine() or "unknown",
            bitness=platform.architecture()[0] or "unknown",
        )


class UserSystemInfo(BaseModel):
    """Response model for GET /info."""
    config: Settings = Field(..., description="Current application settings")
    profiles: List[AgentProfile] = Field(..., description="Loaded agent profiles")
    environment: Environment = Field(..., description="Host environment")


class McpServersResponse(BaseModel):
    """Response model for reading MCP servers."""
    servers: Dict[str, Any] = Field(..., description="Registered MCP servers by name")
    config_path: str = Field(..., description="Agent config file the servers were read from")
    template: Dict[str, Any] = Field(..., description="Example server entry for this agent")


class MessageResponse(BaseModel):
    """Response model for operations that report a summary message."""
    message: str = Field(..., description="Result summary")


class ProfilesContentResponse(BaseModel):
    """Response model for GET /profiles."""
    content: str = Field(..., description="Profiles document as pretty-printed JSON")
    path: str = Field(..., description="Path of the user profiles file")
