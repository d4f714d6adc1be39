"""Main CLI entry point for CLI Agent Launcher."""

import click

from cli_agent_launcher.cli.commands.info import info
from cli_agent_launcher.cli.commands.launch import launch
from cli_agent_launcher.cli.commands.mcp import mcp
from cli_agent_launcher.cli.commands.profiles import profiles


@click.group()
def cli():
    """CLI Agent Launcher."""
    pass


# Register commands
cli.add_command(launch)
cli.add_command(profiles)
cli.add_command(mcp)
cli.add_command(info)


if __name__ == "__main__":
    cli()
