#!/usr/bin/env python3
"""Process utilities for tearing down a wrapped command's process tree."""

from __future__ import annotations

import contextlib
import logging
import warnings

import psutil

logger = logging.getLogger(__name__)


def describe_process(pid: int) -> str:
    """Short human-readable description of a process, for log messages."""
    try:
        process = psutil.Process(pid)
        children = process.children(recursive=True)
        return f"pid {pid} ({process.name()}, {len(children)} children)"
    except psutil.Error:
        return f"pid {pid}"


def kill_process_tree(pid: int, timeout: float = 3.0) -> None:
    """Kill a process and all its children.

    Children are asked to terminate first and killed if still alive after
    ``timeout`` seconds, then the same is done for the parent.
    """
    try:
        parent = psutil.Process(pid)
        children = parent.children(recursive=True)
        logger.debug("Killing process tree of %s", describe_process(pid))

        # First try graceful termination
        for child in children:
            with contextlib.suppress(psutil.NoSuchProcess):
                child.terminate()

        _, alive = psutil.wait_procs(children, timeout=timeout)

        # Force kill any that are still alive
        for child in alive:
            with contextlib.suppress(psutil.NoSuchProcess):
                child.kill()

        with contextlib.suppress(psutil.NoSuchProcess, psutil.TimeoutExpired):
            parent.terminate()
            parent.wait(timeout)

        with contextlib.suppress(psutil.NoSuchProcess):
            parent.kill()

    except psutil.NoSuchProcess:
        return
    except (OSError, psutil.Error) as e:
        warnings.warn(f"Error killing process tree: {e}", UserWarning, stacklevel=2)
