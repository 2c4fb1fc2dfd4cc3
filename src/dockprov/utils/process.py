"""Local command execution."""

import asyncio
import logging
from typing import Optional, List
from dataclasses import dataclass

from dockprov.errors import CommandExecutionFailure


logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Result from running a command."""
    returncode: int
    stdout: str = ""
    stderr: str = ""


async def run_command(
    cmd: List[str],
    check: bool = True,
    capture_output: bool = True,
    timeout: Optional[float] = None,
    **kwargs
) -> CommandResult:
    """Run a command and wait for it to exit.

    With ``check`` set, a non-zero exit raises ``CommandExecutionFailure``
    carrying the captured output. ``timeout`` defaults to None: a hung
    command blocks the caller indefinitely.
    """
    logger.debug(f"Running command: {' '.join(cmd)}")

    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdout=asyncio.subprocess.PIPE if capture_output else None,
        stderr=asyncio.subprocess.PIPE if capture_output else None,
        **kwargs
    )

    try:
        stdout, stderr = await asyncio.wait_for(
            process.communicate(),
            timeout=timeout
        )
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        raise CommandExecutionFailure(cmd, -9, stderr=f"timed out after {timeout}s")

    result = CommandResult(
        returncode=process.returncode,
        stdout=stdout.decode() if stdout else "",
        stderr=stderr.decode() if stderr else "",
    )

    if check and process.returncode != 0:
        raise CommandExecutionFailure(
            cmd, process.returncode, result.stdout, result.stderr
        )

    return result


class LocalCommandRunner:
    """Runs commands on the local host.

    Everything that touches the container runtime goes through a runner so
    tests can substitute one that records commands instead.
    """

    async def run(self, cmd: List[str], check: bool = True) -> CommandResult:
        """Run a command, raising on non-zero exit when ``check`` is set."""
        return await run_command(cmd, check=check)
