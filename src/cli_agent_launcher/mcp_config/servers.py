"""MCP server registry access inside a parsed agent config document.

The document is treated as opaque except for the sub-tree at the provider's
MCP key path. Kinds that use the flat-key convention store that path as one
top-level key joined with ".", e.g. ``{"amp.mcpServers": {...}}``.
"""

from typing import Any, Dict

from cli_agent_launcher.models.provider import McpPathSpec, ProviderType, mcp_path_spec


class McpNotSupported(Exception):
    """Raised when MCP is requested for a provider without MCP support."""

    pass


def require_mcp_path_spec(provider_type: ProviderType) -> McpPathSpec:
    spec = mcp_path_spec(provider_type)
    if spec is None:
        raise McpNotSupported(f"{provider_type.value} does not support MCP servers")
    return spec


def get_servers(document: Any, path_spec: McpPathSpec) -> Dict[str, Any]:
    """Servers at the path; any missing or non-object level yields ``{}``."""
    if path_spec.uses_flat_key:
        current = document.get(path_spec.flat_key) if isinstance(document, dict) else None
    else:
        current = document
        for part in path_spec.key_path:
            if not isinstance(current, dict) or part not in current:
                return {}
            current = current[part]

    if not isinstance(current, dict):
        return {}
    return dict(current)


def set_servers(document: Any, path_spec: McpPathSpec, servers: Dict[str, Any]) -> Dict[str, Any]:
    """Set the servers at the path and return the (possibly new) root.

    Missing intermediate levels are created. A non-object value found on the
    path, or a non-object root, is replaced by an empty object.
    """
    if not isinstance(document, dict):
        document = {}

    if path_spec.uses_flat_key:
        document[path_spec.flat_key] = dict(servers)
        return document

    current = document
    for part in path_spec.key_path[:-1]:
        if not isinstance(current.get(part), dict):
            current[part] = {}
        current = current[part]

    current[path_spec.key_path[-1]] = dict(servers)
    return document


def initial_document(provider_type: ProviderType) -> Dict[str, Any]:
    """Fresh config containing only the empty server registry."""
    spec = mcp_path_spec(provider_type)
    if spec is None:
        return {}
    return set_servers({}, spec, dict(spec.empty_container_shape))


def summarize_change(old_count: int, new_count: int) -> str:
    """Describe a server registry update by its before/after counts."""
    if old_count == 0 and new_count == 0:
        return "No MCP servers configured"
    if old_count == 0:
        return f"Added {new_count} MCP server(s)"
    if old_count == new_count:
        return f"Updated MCP server configuration ({new_count} server(s))"
    return f"Updated MCP server configuration (was {old_count}, now {new_count})"
