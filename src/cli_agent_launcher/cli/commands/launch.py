"""Launch command for CLI Agent Launcher CLI."""

import asyncio
import os
from pathlib import Path
from typing import Optional

import click

from cli_agent_launcher.clients.process import pump_output
from cli_agent_launcher.models.log import MsgStore, NormalizedEntry
from cli_agent_launcher.models.profile import ProfileSelector
from cli_agent_launcher.providers.base import ExecutorError
from cli_agent_launcher.providers.registry import from_profile_selector
from cli_agent_launcher.services.settings_service import load_settings


class EchoStore(MsgStore):
    """MsgStore that also prints each normalized entry as it arrives."""

    def push_normalized(self, entry: NormalizedEntry) -> None:
        super().push_normalized(entry)
        click.echo(f"[{entry.entry_type.value}] {entry.content}")


async def _run_agent(selector: ProfileSelector, workdir: Path, prompt: str, session_id: Optional[str]) -> int:
    provider = from_profile_selector(selector)
    if session_id:
        process = await provider.spawn_follow_up(workdir, prompt, session_id)
    else:
        process = await provider.spawn(workdir, prompt)

    store = EchoStore()
    exit_code, _ = await asyncio.gather(
        pump_output(process, store),
        provider.run_normalizer(store, workdir),
    )
    if store.session_id:
        click.echo(f"Session ID: {store.session_id}")
    return exit_code


@click.command()
@click.argument("prompt")
@click.option("--profile", help="Profile to launch (default: selected profile in settings)")
@click.option("--variant", help="Variant of the profile (e.g. plan, router)")
@click.option("--session-id", help="Resume an earlier agent session with a follow-up prompt")
@click.option(
    "--workdir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Working directory for the agent (default: current directory)",
)
@click.option("--dry-run", is_flag=True, help="Print the command instead of running it")
def launch(prompt, profile, variant, session_id, workdir, dry_run):
    """Launch a coding agent on PROMPT using a profile."""
    try:
        if profile:
            selector = ProfileSelector(profile=profile, variant=variant)
        else:
            selector = load_settings().profile
            if variant:
                selector = ProfileSelector(profile=selector.profile, variant=variant)

        workdir = workdir or Path(os.path.realpath(os.getcwd()))

        if dry_run:
            provider = from_profile_selector(selector)
            command = provider.build_command()
            if session_id:
                click.echo(command.render_follow_up(provider.follow_up_args(session_id)))
            else:
                click.echo(command.render_initial())
            return

        exit_code = asyncio.run(_run_agent(selector, workdir, prompt, session_id))
    except ExecutorError as e:
        raise click.ClickException(str(e))

    if exit_code != 0:
        raise click.ClickException(f"Agent exited with code {exit_code}")
