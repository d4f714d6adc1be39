"""Command model for agent launch commands."""

from typing import Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field


class CommandSpec(BaseModel):
    """Base executable plus fixed parameters for a coding agent CLI.

    Rendering joins ``base`` and ``params`` with single spaces. Nothing is
    quoted or escaped: the result is handed verbatim to a shell.
    """

    model_config = ConfigDict(frozen=True)

    base: str = Field(..., description="Base executable command (e.g. 'npx -y @anthropic-ai/claude-code@latest')")
    params: Optional[Tuple[str, ...]] = Field(None, description="Parameters appended to the base command")

    def _parts(self) -> list:
        parts = [self.base]
        if self.params:
            parts.extend(self.params)
        return parts

    def render_initial(self) -> str:
        """Render the command used to start a new agent session."""
        return " ".join(self._parts())

    def render_follow_up(self, extra_args: Sequence[str]) -> str:
        """Render the command with call-site arguments appended after params."""
        parts = self._parts()
        parts.extend(extra_args)
        return " ".join(parts)

    def with_params(self, *extra: str) -> "CommandSpec":
        """Return a copy with additional params appended."""
        return CommandSpec(base=self.base, params=tuple(self.params or ()) + tuple(extra))


def render_initial(spec: CommandSpec) -> str:
    return spec.render_initial()


def render_follow_up(spec: CommandSpec, extra_args: Sequence[str]) -> str:
    return spec.render_follow_up(extra_args)
