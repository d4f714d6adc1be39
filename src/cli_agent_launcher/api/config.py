"""
Config API endpoints for settings, agent profiles and agent MCP configuration
"""
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, HTTPException, Query, Request, status

from cli_agent_launcher.api.models import (
    Environment,
    McpServersResponse,
    MessageResponse,
    ProfilesContentResponse,
    UserSystemInfo,
)
from cli_agent_launcher.mcp_config.agent_config import AgentConfigError
from cli_agent_launcher.mcp_config.servers import McpNotSupported, require_mcp_path_spec
from cli_agent_launcher.models.provider import ProviderType
from cli_agent_launcher.models.settings import Settings
from cli_agent_launcher.providers.base import UnknownProfile, UnknownVariant
from cli_agent_launcher.services import mcp_service, profile_service
from cli_agent_launcher.services.settings_service import settings_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["config"])


async def _resolve_mcp_target(provider_type: Optional[ProviderType], mcp_config_path: Optional[str]):
    settings = await settings_store.get()
    try:
        resolved_type, config_path = mcp_service.resolve_target(settings, provider_type, mcp_config_path)
        require_mcp_path_spec(resolved_type)
    except (UnknownProfile, UnknownVariant) as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except (McpNotSupported, ValueError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return resolved_type, config_path


@router.get("/info", response_model=UserSystemInfo)
async def get_user_system_info() -> UserSystemInfo:
    """Current settings, loaded profiles and host environment."""
    return UserSystemInfo(
        config=await settings_store.get(),
        profiles=profile_service.get_cached_profiles().profiles,
        environment=Environment.current(),
    )


@router.put("/config", response_model=Settings)
async def update_config(new_config: Settings) -> Settings:
    """Replace the whole settings document."""
    try:
        return await settings_store.update(new_config)
    except OSError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to save config: {str(e)}",
        )


@router.get("/mcp-config", response_model=McpServersResponse)
async def get_mcp_servers(
    provider_type: Optional[ProviderType] = Query(None, description="Agent kind; defaults to the selected profile"),
    mcp_config_path: Optional[str] = Query(None, description="Config file override"),
) -> McpServersResponse:
    """MCP servers registered in an agent's config file."""
    resolved_type, config_path = await _resolve_mcp_target(provider_type, mcp_config_path)
    try:
        servers = await mcp_service.read_mcp_servers(config_path, resolved_type)
    except (AgentConfigError, OSError) as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to read MCP servers: {str(e)}",
        )
    return McpServersResponse(
        servers=servers,
        config_path=str(config_path),
        template=require_mcp_path_spec(resolved_type).server_entry_template,
    )


@router.post("/mcp-config", response_model=MessageResponse)
async def update_mcp_servers(
    new_servers: Dict[str, Any],
    provider_type: Optional[ProviderType] = Query(None, description="Agent kind; defaults to the selected profile"),
    mcp_config_path: Optional[str] = Query(None, description="Config file override"),
) -> MessageResponse:
    """Replace the MCP servers in an agent's config file."""
    resolved_type, config_path = await _resolve_mcp_target(provider_type, mcp_config_path)
    try:
        message = await mcp_service.update_mcp_servers(config_path, resolved_type, new_servers)
    except (AgentConfigError, OSError) as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update MCP servers: {str(e)}",
        )
    return MessageResponse(message=message)


@router.post("/mcp-config/open-editor", status_code=status.HTTP_204_NO_CONTENT)
async def open_mcp_config_in_editor(
    provider_type: Optional[ProviderType] = Query(None, description="Agent kind; defaults to the selected profile"),
    mcp_config_path: Optional[str] = Query(None, description="Config file override"),
) -> None:
    """Open an agent's config file in the configured editor, creating it if needed."""
    resolved_type, config_path = await _resolve_mcp_target(provider_type, mcp_config_path)
    try:
        await mcp_service.ensure_mcp_config(config_path, resolved_type)
    except (AgentConfigError, OSError) as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to create config file: {str(e)}",
        )

    settings = await settings_store.get()
    try:
        settings.editor.open_file(str(config_path))
    except OSError as e:
        logger.error(f"Failed to open MCP config in editor: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to open editor: {str(e)}",
        )
    logger.info(f"Opened MCP config in editor at path: {config_path}")


@router.get("/profiles", response_model=ProfilesContentResponse)
async def get_profiles() -> ProfilesContentResponse:
    """Default profiles overlaid with the user's profiles file."""
    content, path = profile_service.get_profiles_content()
    return ProfilesContentResponse(content=content, path=str(path))


@router.put("/profiles", response_model=MessageResponse)
async def update_profiles(request: Request) -> MessageResponse:
    """Replace the user's profiles file with the request body."""
    body = (await request.body()).decode("utf-8")
    try:
        await profile_service.save_profiles(body)
    except profile_service.InvalidProfilesError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except OSError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to save profiles: {str(e)}",
        )
    return MessageResponse(message="Profiles updated successfully")


@router.post("/profiles/open-editor", status_code=status.HTTP_204_NO_CONTENT)
async def open_profiles_in_editor() -> None:
    """Open the profiles file in the configured editor, creating it if needed."""
    try:
        profiles_path = await profile_service.ensure_profiles_file()
    except OSError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to create profiles file: {str(e)}",
        )

    settings = await settings_store.get()
    try:
        settings.editor.open_file(str(profiles_path))
    except OSError as e:
        logger.error(f"Failed to open profiles file in editor: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to open editor: {str(e)}",
        )
    logger.info(f"Opened profiles file in editor at path: {profiles_path}")
