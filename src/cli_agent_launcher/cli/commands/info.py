"""Info command for CLI Agent Launcher CLI."""

import click
import requests

from cli_agent_launcher.constants import API_BASE_URL, PROFILES_FILE, SETTINGS_FILE


@click.command()
def info():
    """Display launcher paths and, if the server is running, its state."""
    try:
        click.echo(f"Settings file: {SETTINGS_FILE}")
        click.echo(f"Profiles file: {PROFILES_FILE}")

        try:
            response = requests.get(f"{API_BASE_URL}/info", timeout=5)
            if response.status_code == 200:
                data = response.json()
                environment = data.get("environment", {})
                selected = data.get("config", {}).get("profile", {})
                selected_label = selected.get("profile")
                if selected.get("variant"):
                    selected_label = f"{selected_label}/{selected['variant']}"
                click.echo(f"Selected profile: {selected_label}")
                click.echo(f"Profiles loaded: {len(data.get('profiles', []))}")
                click.echo(f"Environment: {environment.get('os_type')} {environment.get('os_version')}")
            else:
                click.echo(f"Server returned status {response.status_code}")
        except requests.exceptions.RequestException:
            click.echo("Server: not running")

    except Exception as e:
        raise click.ClickException(str(e))
