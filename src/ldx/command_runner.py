"""Command runner: spawns the wrapped command and rewrites its output.

## Basic Usage

```python
rules = RuleSet.from_mapping({"Compiled": "✅ build ok", "DEBUG": ""})
runner = CommandRunner(Invocation(("npm", "run", "dev")), rules)
await runner.run()  # raises CommandFailedError on a non-zero exit code
```

Lines matching no rule are dropped, as are lines whose rule resolves to an
empty string. Everything else is written to stdout in arrival order.
"""

from __future__ import annotations

import asyncio
import enum
import logging
import subprocess
import sys
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from ldx.child_process import ChildHandle, Spawner, spawn
from ldx.line_processor import process_line
from ldx.line_splitter import LineSplitter
from ldx.rules import RuleSet

logger = logging.getLogger(__name__)


class CommandError(Exception):
    """Base class for failed invocations."""


class NoCommandError(CommandError):
    """Raised when the invocation has no program to run."""

    def __init__(self) -> None:
        super().__init__("No command provided.")


class CommandFailedError(CommandError):
    """Raised when the child exits with a non-zero code."""

    def __init__(self, returncode: int) -> None:
        self.returncode = returncode
        super().__init__(f"Command failed with exit code {returncode}")


class SpawnError(CommandError):
    """Raised when the child process cannot be created."""

    def __init__(self, program: str, error: OSError) -> None:
        self.program = program
        self.error = error
        super().__init__(f"Failed to start command: {program}: {error.strerror or error}")


class RunnerState(enum.Enum):
    IDLE = "idle"
    SPAWNING = "spawning"
    STREAMING = "streaming"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class Invocation:
    """The child command and its arguments, taken verbatim."""

    argv: tuple[str, ...] = ()

    @classmethod
    def from_argv(cls, argv: Sequence[str]) -> Invocation:
        """Build an invocation from a full process argv, dropping the program name."""
        return cls(tuple(argv[1:]))

    @property
    def program(self) -> str:
        if not self.argv:
            raise NoCommandError
        return self.argv[0]

    @property
    def args(self) -> tuple[str, ...]:
        return self.argv[1:]

    def __bool__(self) -> bool:
        return bool(self.argv)

    def __str__(self) -> str:
        return subprocess.list2cmdline(self.argv)


# Type alias for echo callbacks
EchoCallback = Callable[[str], None]


class EchoCallbackNull:
    """Null object implementation of EchoCallback that discards all output."""

    def __call__(self, line: str) -> None:
        """Discard the input line without doing anything."""


def _print_flushed(line: str) -> None:
    print(line)
    sys.stdout.flush()


def _normalize_echo_callback(echo: bool | EchoCallback) -> EchoCallback:
    """Normalize echo parameter to a callback function.

    True prints to stdout, False discards, a callable is used as is.
    """
    if echo is True:
        return _print_flushed
    if echo is False:
        return EchoCallbackNull()
    if callable(echo):
        return echo

    error_msg = f"echo must be bool or callable, got {type(echo).__name__}"
    raise TypeError(error_msg)


class CommandRunner:
    """
    Runs one invocation to completion, filtering its stdout through a rule set.

    The runner moves through IDLE -> SPAWNING -> STREAMING and ends in either
    SUCCEEDED or FAILED. An empty invocation goes straight from IDLE to FAILED
    without spawning anything. Each runner resolves exactly once.
    """

    def __init__(
        self,
        invocation: Invocation,
        rules: RuleSet | Mapping[str, Any] | Iterable[tuple[str, Any]],
        spawner: Spawner = spawn,
        echo: bool | EchoCallback = True,
    ) -> None:
        """
        Args:
            invocation: The command to run.
            rules: Ordered rules applied to every output line.
            spawner: Coroutine function creating the child. Defaults to a real subprocess.
            echo: Sink for processed lines. True prints to stdout, False discards.
        """
        self.invocation = invocation
        self.rules = RuleSet.coerce(rules)
        self.spawner = spawner
        self.echo = _normalize_echo_callback(echo)
        self.state = RunnerState.IDLE
        self.returncode: int | None = None
        self.lines_emitted = 0

    def _transition(self, state: RunnerState) -> None:
        logger.debug("Runner %s -> %s", self.state.value, state.value)
        self.state = state

    async def run(self) -> None:
        """
        Run the command and wait for it to exit.

        Raises:
            NoCommandError: The invocation is empty. Nothing is spawned.
            SpawnError: The program could not be started.
            CommandFailedError: The child exited with a non-zero code.
            RuntimeError: The runner has already been run.
        """
        if self.state is not RunnerState.IDLE:
            error_msg = f"Runner already used (state: {self.state.value})"
            raise RuntimeError(error_msg)

        if not self.invocation:
            self._transition(RunnerState.FAILED)
            raise NoCommandError

        self._transition(RunnerState.SPAWNING)
        try:
            child = await self.spawner(self.invocation)
        except OSError as e:
            self._transition(RunnerState.FAILED)
            raise SpawnError(self.invocation.program, e) from e

        self._transition(RunnerState.STREAMING)
        try:
            await self._stream_output(child)
            rtn = await child.wait()
        except BaseException:
            # Cancelled or interrupted: do not leave the child running
            self._transition(RunnerState.FAILED)
            child.kill()
            raise

        self.returncode = rtn
        if rtn != 0:
            self._transition(RunnerState.FAILED)
            raise CommandFailedError(rtn)
        self._transition(RunnerState.SUCCEEDED)

    async def _stream_output(self, child: ChildHandle) -> None:
        splitter = LineSplitter()
        async for chunk in child.chunks():
            self._emit_lines(splitter.feed(chunk))
        self._emit_lines(splitter.flush())

    def _emit_lines(self, lines: list[str]) -> None:
        for line in lines:
            processed = process_line(line, self.rules)
            if processed:
                self.echo(processed)
                self.lines_emitted += 1


def run_command(
    argv: Sequence[str],
    rules: RuleSet | Mapping[str, Any] | Iterable[tuple[str, Any]],
    echo: bool | EchoCallback = True,
) -> None:
    """Blocking convenience wrapper: run ``argv`` (program first) to completion."""
    runner = CommandRunner(Invocation(tuple(argv)), rules, echo=echo)
    asyncio.run(runner.run())
