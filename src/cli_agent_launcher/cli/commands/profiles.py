"""Profiles command for CLI Agent Launcher CLI."""

import click

from cli_agent_launcher.services.profile_service import get_cached_profiles


@click.command()
@click.option("--show-commands", is_flag=True, help="Also print the rendered launch command")
def profiles(show_commands):
    """List available agent profiles and their variants."""
    try:
        for profile in get_cached_profiles().profiles:
            click.echo(f"{profile.label} ({profile.agent.provider_type.value})")
            if show_commands:
                click.echo(f"    {profile.agent.build_command().render_initial()}")
            for variant in profile.variants:
                click.echo(f"  - {variant.label} ({variant.agent.provider_type.value})")
                if show_commands:
                    click.echo(f"      {variant.agent.build_command().render_initial()}")
    except Exception as e:
        raise click.ClickException(str(e))
