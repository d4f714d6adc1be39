"""Process client for spawning agent commands in their own process group."""

import asyncio
import logging
import os
from pathlib import Path
from typing import Optional

from cli_agent_launcher.constants import AGENT_ENV
from cli_agent_launcher.models.log import MsgStore

logger = logging.getLogger(__name__)


async def spawn_shell(command: str, current_dir: Path, stdin_data: Optional[str] = None) -> asyncio.subprocess.Process:
    """Run a shell command string in ``current_dir`` as a new process group.

    If ``stdin_data`` is given it is written to the child's stdin, which is
    then closed. Raises OSError if the process cannot be started.
    """
    env = {**os.environ, **AGENT_ENV}
    logger.debug(f"Spawning in {current_dir}: {command}")
    process = await asyncio.create_subprocess_shell(
        command,
        cwd=str(current_dir),
        env=env,
        stdin=asyncio.subprocess.PIPE,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        start_new_session=True,
    )

    if process.stdin is not None:
        try:
            if stdin_data is not None:
                process.stdin.write(stdin_data.encode())
                await process.stdin.drain()
        except (BrokenPipeError, ConnectionResetError) as e:
            # The child exited or closed stdin before reading the prompt
            logger.debug(f"Process {process.pid} did not read its stdin: {e}")
        finally:
            process.stdin.close()

    logger.info(f"Spawned agent process {process.pid}")
    return process


async def _log_stderr(process: asyncio.subprocess.Process) -> None:
    if process.stderr is None:
        return
    async for raw in process.stderr:
        logger.debug(f"[{process.pid} stderr] {raw.decode(errors='replace').rstrip()}")


async def pump_output(process: asyncio.subprocess.Process, store: MsgStore) -> int:
    """Copy a child's stdout into ``store`` line by line and wait for exit.

    stderr is drained to the debug log so the child never blocks on it.
    """

    async def _pump_stdout() -> None:
        if process.stdout is not None:
            async for raw in process.stdout:
                await store.push_stdout(raw.decode(errors="replace").rstrip("\n"))
        await store.close()

    await asyncio.gather(_pump_stdout(), _log_stderr(process))
    return await process.wait()
