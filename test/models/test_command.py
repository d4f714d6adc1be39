"""Tests for command rendering."""

import pytest
from pydantic import ValidationError

from cli_agent_launcher.models.command import CommandSpec, render_follow_up, render_initial


class TestCommandSpec:
    """Tests for CommandSpec rendering."""

    def test_render_initial_joins_base_and_params(self):
        spec = CommandSpec(base="npx -y @openai/codex exec", params=["--json", "--skip-git-repo-check"])

        assert spec.render_initial() == "npx -y @openai/codex exec --json --skip-git-repo-check"

    def test_render_initial_without_params(self):
        spec = CommandSpec(base="claude")

        assert spec.render_initial() == "claude"

    def test_render_follow_up_appends_after_params(self):
        spec = CommandSpec(base="claude", params=["-p"])

        assert spec.render_follow_up(["--resume=abc"]) == "claude -p --resume=abc"

    def test_render_follow_up_with_no_extra_args_matches_initial(self):
        spec = CommandSpec(base="amp", params=["--format=jsonl"])

        assert spec.render_follow_up([]) == spec.render_initial()

    def test_no_quoting_is_applied(self):
        spec = CommandSpec(base="agent", params=["--msg='hello world'", "$HOME"])

        assert spec.render_initial() == "agent --msg='hello world' $HOME"

    def test_empty_base_is_permitted(self):
        spec = CommandSpec(base="", params=["--flag"])

        assert spec.render_initial() == " --flag"

    def test_module_level_helpers(self):
        spec = CommandSpec(base="gemini", params=["--yolo"])

        assert render_initial(spec) == "gemini --yolo"
        assert render_follow_up(spec, ["x"]) == "gemini --yolo x"

    def test_spec_is_immutable(self):
        spec = CommandSpec(base="claude", params=["-p"])

        with pytest.raises(ValidationError):
            spec.base = "other"

    def test_with_params_returns_new_spec(self):
        spec = CommandSpec(base="claude", params=["-p"])

        extended = spec.with_params("--permission-mode=plan")

        assert extended.render_initial() == "claude -p --permission-mode=plan"
        assert spec.render_initial() == "claude -p"
