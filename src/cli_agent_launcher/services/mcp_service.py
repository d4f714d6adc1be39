"""MCP server configuration service.

Reads and updates the MCP server registry inside an agent's own config file.
The read-modify-write in ``update_mcp_servers`` is not locked: concurrent
updates of the same file race and the last writer wins.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from cli_agent_launcher.mcp_config.agent_config import read_raw, write_raw
from cli_agent_launcher.mcp_config.servers import (
    get_servers,
    initial_document,
    require_mcp_path_spec,
    set_servers,
    summarize_change,
)
from cli_agent_launcher.models.provider import ProviderType, default_config_path
from cli_agent_launcher.models.settings import Settings
from cli_agent_launcher.providers.registry import resolve_selector
from cli_agent_launcher.services.profile_service import resolve_mcp_config_path
from cli_agent_launcher.utils.paths import expand_tilde

logger = logging.getLogger(__name__)


def resolve_target(
    settings: Settings,
    provider_type: Optional[ProviderType] = None,
    config_path: Optional[str] = None,
) -> Tuple[ProviderType, Path]:
    """Provider type and config file whose MCP servers a request addresses.

    An explicit ``provider_type`` wins over the selected profile, and an
    explicit ``config_path`` (``~`` expanded) wins over any default. Without
    an explicit provider type, the selected profile or variant decides both,
    including its own config path override.

    Raises:
        UnknownProfile, UnknownVariant: If the settings select a missing profile
        ValueError: If no config path can be determined
    """
    if provider_type is not None:
        path = default_config_path(provider_type)
    else:
        entry = resolve_selector(settings.profile)
        provider_type = entry.agent.provider_type
        path = resolve_mcp_config_path(entry)

    if config_path:
        path = expand_tilde(config_path)
    if path is None:
        raise ValueError("Could not determine config file path")
    return provider_type, path


async def read_mcp_servers(config_path: Path, provider_type: ProviderType) -> Dict[str, Any]:
    """MCP servers currently registered in ``config_path``.

    Raises:
        McpNotSupported: If the provider has no MCP registry
        AgentConfigError: If the file does not parse
    """
    path_spec = require_mcp_path_spec(provider_type)
    document = await read_raw(config_path, provider_type)
    return get_servers(document, path_spec)


async def update_mcp_servers(config_path: Path, provider_type: ProviderType, new_servers: Dict[str, Any]) -> str:
    """Replace the MCP server registry in ``config_path``, keeping other keys.

    Returns:
        Human-readable summary of the change

    Raises:
        McpNotSupported: If the provider has no MCP registry
        AgentConfigError: If the existing file does not parse or the result
            cannot be serialized
        OSError: If the file cannot be read or written
    """
    path_spec = require_mcp_path_spec(provider_type)
    document = await read_raw(config_path, provider_type)

    old_count = len(get_servers(document, path_spec))
    document = set_servers(document, path_spec, new_servers)
    await write_raw(config_path, provider_type, document)

    message = summarize_change(old_count, len(new_servers))
    logger.info(f"{message} in {config_path}")
    return message


async def ensure_mcp_config(config_path: Path, provider_type: ProviderType) -> Path:
    """Create ``config_path`` with an empty server registry if it is missing."""
    require_mcp_path_spec(provider_type)
    if not config_path.exists():
        await write_raw(config_path, provider_type, initial_document(provider_type))
        logger.info(f"Created initial {provider_type.value} config at {config_path}")
    return config_path
