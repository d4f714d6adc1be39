"""MCP command for CLI Agent Launcher CLI."""

import asyncio
import json

import click

from cli_agent_launcher.models.provider import ProviderType
from cli_agent_launcher.services import mcp_service
from cli_agent_launcher.services.settings_service import load_settings


@click.command()
@click.option(
    "--provider",
    type=click.Choice([p.value for p in ProviderType], case_sensitive=False),
    help="Agent kind (default: kind of the selected profile)",
)
@click.option("--config-path", help="Agent config file to read instead of the default")
def mcp(provider, config_path):
    """Show MCP servers registered in an agent's config file."""
    try:
        provider_type = ProviderType(provider) if provider else None
        resolved_type, path = mcp_service.resolve_target(load_settings(), provider_type, config_path)
        servers = asyncio.run(mcp_service.read_mcp_servers(path, resolved_type))

        click.echo(f"Config file: {path}")
        if not servers:
            click.echo("No MCP servers configured")
            return
        click.echo(json.dumps(servers, indent=2, default=str))
    except Exception as e:
        raise click.ClickException(str(e))
