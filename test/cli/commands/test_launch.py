"""Tests for launch command."""

import json
from unittest.mock import patch

from click.testing import CliRunner

from cli_agent_launcher.cli.commands.launch import launch
from cli_agent_launcher.models.profile import ProfileSelector
from cli_agent_launcher.models.settings import Settings


def _write_profiles(profiles_file, base):
    profiles_file.parent.mkdir(parents=True, exist_ok=True)
    profiles_file.write_text(
        json.dumps({"profiles": [{"label": "local", "CLAUDE_CODE": {"command": {"base": base}}}]})
    )


def test_launch_dry_run_with_profile():
    """Dry run prints the profile's rendered command."""
    runner = CliRunner()

    result = runner.invoke(launch, ["hello", "--profile", "gemini", "--dry-run"])

    assert result.exit_code == 0
    assert result.output.strip() == "npx -y @google/gemini-cli@latest --yolo"


def test_launch_dry_run_plan_variant():
    """Dry run of the plan variant includes the plan permission param."""
    runner = CliRunner()

    result = runner.invoke(launch, ["hello", "--profile", "claude-code", "--variant", "plan", "--dry-run"])

    assert result.exit_code == 0
    assert result.output.strip().endswith("--output-format=stream-json --permission-mode=plan")


def test_launch_dry_run_follow_up():
    """Dry run with a session id renders the follow-up command."""
    runner = CliRunner()

    result = runner.invoke(launch, ["again", "--profile", "amp", "--session-id", "T-1", "--dry-run"])

    assert result.exit_code == 0
    assert result.output.strip().endswith("--format=jsonl threads continue T-1")


def test_launch_uses_selected_profile_from_settings():
    """Without --profile the settings selection is used."""
    runner = CliRunner()

    with patch(
        "cli_agent_launcher.cli.commands.launch.load_settings",
        return_value=Settings(profile=ProfileSelector(profile="codex")),
    ):
        result = runner.invoke(launch, ["hello", "--dry-run"])

    assert result.exit_code == 0
    assert result.output.startswith("npx -y @openai/codex exec")


def test_launch_unknown_variant():
    """Unknown variant is reported as a CLI error."""
    runner = CliRunner()

    result = runner.invoke(launch, ["hello", "--profile", "amp", "--variant", "nope", "--dry-run"])

    assert result.exit_code != 0
    assert "Unknown mode 'nope' for profile 'amp'" in result.output


def test_launch_follow_up_not_supported():
    """Gemini follow-ups are rejected before anything runs."""
    runner = CliRunner()

    result = runner.invoke(launch, ["again", "--profile", "gemini", "--session-id", "x", "--dry-run"])

    assert result.exit_code != 0
    assert "does not support resuming" in result.output


def test_launch_runs_agent_and_normalizes_output(isolated_profiles_file, tmp_path):
    """The agent's stdout is normalized and the session id reported."""
    _write_profiles(isolated_profiles_file, "cat")
    prompt = json.dumps({"type": "system", "session_id": "s-42", "model": "test-model"})
    runner = CliRunner()

    result = runner.invoke(launch, [prompt, "--profile", "local", "--workdir", str(tmp_path)])

    assert result.exit_code == 0
    assert "[system_message] System initialized with model: test-model" in result.output
    assert "Session ID: s-42" in result.output


def test_launch_reports_nonzero_exit(isolated_profiles_file, tmp_path):
    """A failing agent process fails the command."""
    _write_profiles(isolated_profiles_file, "cat > /dev/null; exit 3")
    runner = CliRunner()

    result = runner.invoke(launch, ["hello", "--profile", "local", "--workdir", str(tmp_path)])

    assert result.exit_code != 0
    assert "Agent exited with code 3" in result.output
