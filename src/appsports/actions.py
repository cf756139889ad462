# (c) Copyright IBM Corp. 2025

"""
Actions on a discovered process or container: kill, sudo kill, docker stop
and docker rm.  Unlike the discovery runner these report failures, with the
text of the error, so the user can be told what went wrong.
"""

import subprocess
from typing import List, NamedTuple

from appsports.log import logger


class ActionResult(NamedTuple):
    ok: bool
    message: str = ""


def run_action(args: List[str]) -> ActionResult:
    try:
        proc = subprocess.run(
            args,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
    except OSError as exc:
        logger.debug(f"run_action: couldn't launch {args[0]}", exc_info=True)
        return ActionResult(False, str(exc))

    if proc.returncode != 0:
        message = proc.stderr.decode("utf-8", errors="replace").strip()
        return ActionResult(False, message or f"exit status {proc.returncode}")

    return ActionResult(True)


def kill_process(pid: str) -> ActionResult:
    return run_action(["kill", pid])


def sudo_kill_process(pid: str) -> ActionResult:
    return run_action(["sudo", "kill", pid])


def stop_container(container_id: str, docker_binary: str = "docker") -> ActionResult:
    return run_action([docker_binary, "stop", container_id])


def remove_container(container_id: str, docker_binary: str = "docker") -> ActionResult:
    return run_action([docker_binary, "rm", container_id])
