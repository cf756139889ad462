# (c) Copyright IBM Corp. 2025

"""Point lookups of a single PID through ps"""

from typing import Optional

from appsports.util import runner


def get_command_by_pid(pid: str) -> str:
    """
    Returns the full command line of <pid> as reported by `ps -o cmd`.

    An absent ps and an empty answer are treated the same way.

    @param pid: the PID as text
    @return: the trimmed command line, or "Unknown"
    """
    return _ps_field(pid, "cmd") or "Unknown"


def get_process_name_by_pid(pid: str) -> str:
    return _ps_field(pid, "comm") or "unknown"


def parse_pid(token: str) -> Optional[str]:
    """Returns <token> normalized as an unsigned 32 bit integer, or None."""
    token = token.strip()
    if token.startswith("+"):
        token = token[1:]
    if not token.isascii() or not token.isdigit():
        return None

    value = int(token)
    if value > 0xFFFFFFFF:
        return None
    return str(value)


def _ps_field(pid: str, field: str) -> str:
    return runner.run("ps", ["-p", pid, "-o", field, "--no-headers"]).strip()
