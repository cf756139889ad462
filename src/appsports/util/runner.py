# (c) Copyright IBM Corp. 2025

"""
Thin wrapper around the external diagnostic tools (ss, netstat, lsof, fuser,
ps, docker).  Every probe and lookup goes through `run` so that a missing or
failing tool degrades to "no output" instead of an exception.
"""

import subprocess
from typing import Sequence

from appsports.log import logger


def run(tool_name: str, args: Sequence[str]) -> str:
    """
    Runs <tool_name> with <args>, discarding stderr.

    There is no timeout: a tool that never exits blocks the caller.

    @param tool_name: the executable to launch, resolved through PATH
    @param args: the argument list
    @return: stdout decoded as UTF-8 (invalid bytes replaced), or "" when
             the tool could not be launched
    """
    try:
        proc = subprocess.Popen(
            [tool_name, *args],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
        )
        (out, _) = proc.communicate()
    except OSError:
        logger.debug(f"run: couldn't launch {tool_name}", exc_info=True)
        return ""

    if proc.returncode != 0:
        logger.debug(
            f"run: {tool_name} {' '.join(args)} exited with {proc.returncode}"
        )

    return out.decode("utf-8", errors="replace")


def run_lines(tool_name: str, args: Sequence[str], skip_header: bool = False):
    """Same as `run`, split into lines.  Optionally drops the first (header) line."""
    lines = run(tool_name, args).splitlines()
    if skip_header:
        return lines[1:]
    return lines
