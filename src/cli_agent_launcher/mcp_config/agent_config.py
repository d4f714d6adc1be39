"""Read and write an agent's native config file.

Both JSON and TOML files are loaded into the same plain tree of dicts,
lists and scalars so that MCP server handling never needs to know which
format a file uses. Only parsing and serialization here are format-specific.
"""

import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict

import aiofiles
import tomli_w

from cli_agent_launcher.models.provider import ConfigFormat, ProviderType, config_format

logger = logging.getLogger(__name__)


class AgentConfigError(Exception):
    """Raised when an agent config file cannot be parsed or serialized."""

    pass


def parse_document(content: str, fmt: ConfigFormat) -> Any:
    """Parse config text into a plain tree. Blank content is an empty document."""
    if not content.strip():
        return {}
    try:
        if fmt == ConfigFormat.TOML:
            return tomllib.loads(content)
        return json.loads(content)
    except (json.JSONDecodeError, tomllib.TOMLDecodeError) as e:
        raise AgentConfigError(f"Invalid {fmt.value.upper()} config: {e}") from e


def serialize_document(document: Any, fmt: ConfigFormat) -> str:
    try:
        if fmt == ConfigFormat.TOML:
            if not isinstance(document, dict):
                raise TypeError("TOML document root must be a table")
            return tomli_w.dumps(document)
        return json.dumps(document, indent=2) + "\n"
    except (TypeError, ValueError) as e:
        raise AgentConfigError(f"Failed to serialize {fmt.value.upper()} config: {e}") from e


async def read_raw(path: Path, provider_type: ProviderType) -> Any:
    """Read ``path`` in the provider's format. A missing file is ``{}``.

    Raises:
        AgentConfigError: If the file is not UTF-8 or its content does not parse
        OSError: On any other read failure
    """
    fmt = config_format(provider_type)
    try:
        async with aiofiles.open(path, "r", encoding="utf-8") as f:
            content = await f.read()
    except FileNotFoundError:
        logger.debug(f"Config file {path} does not exist, using empty document")
        return {}
    except UnicodeDecodeError as e:
        raise AgentConfigError(f"Invalid {fmt.value.upper()} config: {e}") from e
    return parse_document(content, fmt)


async def write_raw(path: Path, provider_type: ProviderType, document: Dict[str, Any]) -> None:
    """Write ``document`` to ``path`` in the provider's format, creating parents."""
    content = serialize_document(document, config_format(provider_type))
    path.parent.mkdir(parents=True, exist_ok=True)
    async with aiofiles.open(path, "w", encoding="utf-8") as f:
        await f.write(content)
    logger.info(f"Wrote {provider_type.value} config to {path}")
