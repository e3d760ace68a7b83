"""Child process boundary.

Spawning a command yields a handle with two views of the child: an async
iterator over the raw chunks it writes to stdout, and an awaitable exit code.
The command runner only depends on the ChildHandle protocol, so tests can
swap in scripted children through a custom spawner.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import os
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import TYPE_CHECKING, Protocol

from ldx.process_utils import kill_process_tree

if TYPE_CHECKING:
    from ldx.command_runner import Invocation

logger = logging.getLogger(__name__)

# Upper bound on bytes requested per read from the child's stdout
CHUNK_SIZE = 65536


class ChildHandle(Protocol):
    """Protocol for spawned children consumed by the command runner."""

    pid: int

    def chunks(self) -> AsyncIterator[bytes]: ...

    async def wait(self) -> int: ...

    def kill(self) -> None: ...


# Type alias for spawn functions
Spawner = Callable[["Invocation"], Awaitable[ChildHandle]]


class ChildProcess:
    """ChildHandle backed by an asyncio subprocess."""

    def __init__(self, proc: asyncio.subprocess.Process) -> None:
        self._proc = proc

    @property
    def pid(self) -> int:
        return self._proc.pid

    @property
    def returncode(self) -> int | None:
        return self._proc.returncode

    async def chunks(self) -> AsyncIterator[bytes]:
        """Yield stdout data as it arrives until the child closes the pipe."""
        stream = self._proc.stdout
        if stream is None:
            return
        while True:
            chunk = await stream.read(CHUNK_SIZE)
            if not chunk:  # EOF reached
                break
            yield chunk

    async def wait(self) -> int:
        return await self._proc.wait()

    def kill(self) -> None:
        """Terminate the child and everything it spawned."""
        if self._proc.returncode is not None:
            return
        try:
            kill_process_tree(self._proc.pid)
        except (OSError, ValueError) as e:
            logger.warning("Failed to kill process tree for %s: %s", self._proc.pid, e)
            with contextlib.suppress(ProcessLookupError):
                self._proc.kill()


async def spawn(invocation: Invocation) -> ChildProcess:
    """Start ``invocation`` with stdout piped and stderr inherited.

    Raises:
        OSError: If the program cannot be started (e.g. it does not exist).
    """
    # Force unbuffered output for Python children so lines arrive promptly
    # when stdout is a pipe rather than a terminal
    env = os.environ.copy()
    env["PYTHONUNBUFFERED"] = "1"

    proc = await asyncio.create_subprocess_exec(  # noqa: S603
        invocation.program,
        *invocation.args,
        stdout=asyncio.subprocess.PIPE,
        stderr=None,
        env=env,
    )
    logger.debug("Spawned %s as pid %s", invocation, proc.pid)
    return ChildProcess(proc)
