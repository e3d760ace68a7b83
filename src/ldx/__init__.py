"""Run a command and rewrite its output line by line with substring rules."""

from __future__ import annotations

__version__ = "1.0.0"

from ldx.command_runner import (
    CommandError,
    CommandFailedError,
    CommandRunner,
    Invocation,
    NoCommandError,
    RunnerState,
    SpawnError,
    run_command,
)
from ldx.config import ConfigError, load_rules
from ldx.line_processor import process_line
from ldx.line_splitter import LineSplitter
from ldx.rules import Rule, RuleSet

__all__ = [
    "CommandError",
    "CommandFailedError",
    "CommandRunner",
    "ConfigError",
    "Invocation",
    "LineSplitter",
    "NoCommandError",
    "Rule",
    "RuleSet",
    "RunnerState",
    "SpawnError",
    "load_rules",
    "process_line",
    "run_command",
]
