# (c) Copyright IBM Corp. 2025

"""
The interactive kill dialog for one discovered record, as a state machine.

Docker containers (only with --kill-docker-container and a resolved container):
    found -> container_offered -> container_stopped -> container_removed
    container_offered -> container_failed     docker stop failed
    container_offered -> found                declined, fall back to the process

Processes:
    found -> kill_offered -> killed | skipped | kill_failed
    kill_failed -> killed                     sudo kill worked
    kill_failed -> failed
    found -> hidden                           PID unknown, nothing to kill
"""

from typing import Any, Callable, Optional

from fysom import Fysom

from appsports import actions
from appsports.log import logger
from appsports.util.process_discovery import ProcessPortRecord

FINAL_STATES = (
    "killed",
    "skipped",
    "failed",
    "hidden",
    "container_stopped",
    "container_removed",
    "container_failed",
)


class KillMachine:
    def __init__(
        self,
        record: ProcessPortRecord,
        confirm: Callable[[str], bool],
        echo: Callable[[str], None] = print,
        container_id: Optional[str] = None,
        docker_binary: str = "docker",
    ) -> None:
        """
        @param record: the record to act on
        @param confirm: asks the user a yes/no question
        @param echo: prints a line for the user
        @param container_id: when set, the container is offered for stopping
                             before the process itself
        """
        self.record = record
        self.confirm = confirm
        self.echo = echo
        self.container_id = container_id
        self.docker_binary = docker_binary

        self.fsm = Fysom(
            {
                "initial": "found",
                "events": [
                    ("hide", "found", "hidden"),
                    ("offer_container", "found", "container_offered"),
                    ("decline_container", "container_offered", "found"),
                    ("stop_container", "container_offered", "container_stopped"),
                    ("container_error", "container_offered", "container_failed"),
                    ("remove_container", "container_stopped", "container_removed"),
                    ("offer_kill", "found", "kill_offered"),
                    ("kill", "kill_offered", "killed"),
                    ("skip", "kill_offered", "skipped"),
                    ("fail", "kill_offered", "kill_failed"),
                    ("elevate", "kill_failed", "killed"),
                    ("give_up", "kill_failed", "failed"),
                ],
                "callbacks": {
                    "onchangestate": self.log_state_change,
                    "onafteroffer_container": self.on_offer_container,
                    "onafterstop_container": self.on_stop_container,
                    "onafteroffer_kill": self.on_offer_kill,
                    "onenterkill_failed": self.on_kill_failed,
                },
            }
        )

    @staticmethod
    def log_state_change(e: Any) -> None:
        logger.debug(f"KillMachine event: {e.event}, src: {e.src}, dst: {e.dst}")

    @property
    def state(self) -> str:
        return self.fsm.current

    def run(self) -> str:
        """
        Walks the dialog to one of FINAL_STATES.

        @return: the final state
        """
        if self.record.is_degraded:
            self.echo(
                f"Can't kill the process on port {self.record.port}: its PID is hidden. "
                "Run with 'sudo' to see process details"
            )
            self.fsm.hide()
            return self.state

        if self.container_id:
            self.fsm.offer_container()
            if self.state in FINAL_STATES:
                return self.state

        self.fsm.offer_kill()
        return self.state

    def on_offer_container(self, _: Any) -> None:
        question = (
            f"Kill Docker container {self.container_id} "
            f"(running on port {self.record.port})? [y/N]: "
        )
        if not self.confirm(question):
            self.fsm.decline_container()
            return

        self.echo(f"Stopping Docker container: {self.container_id}")
        result = actions.stop_container(self.container_id, self.docker_binary)
        if result.ok:
            self.echo(f"✓ Successfully stopped Docker container {self.container_id}")
            self.fsm.stop_container()
        else:
            self.echo(f"✗ Failed to stop container {self.container_id}: {result.message}")
            self.fsm.container_error()

    def on_stop_container(self, _: Any) -> None:
        if not self.confirm("Remove the stopped container? [y/N]: "):
            return

        result = actions.remove_container(self.container_id, self.docker_binary)
        if result.ok:
            self.echo(f"✓ Removed Docker container {self.container_id}")
            self.fsm.remove_container()
        else:
            self.echo(f"✗ Failed to remove container {self.container_id}: {result.message}")

    def on_offer_kill(self, _: Any) -> None:
        name, pid = self.record.process_name, self.record.pid

        if not self.confirm(f"Kill process {name} (PID: {pid})? [y/N]: "):
            self.echo(f"Skipped killing process {name} (PID: {pid})")
            self.fsm.skip()
            return

        result = actions.kill_process(pid)
        if result.ok:
            self.echo(f"✓ Killed process {name} (PID: {pid})")
            self.fsm.kill()
        else:
            self.echo(f"✗ Failed to kill process {pid}: {result.message}")
            self.fsm.fail()

    def on_kill_failed(self, _: Any) -> None:
        name, pid = self.record.process_name, self.record.pid

        if not self.confirm("Try with elevated privileges? [y/N]: "):
            self.fsm.give_up()
            return

        result = actions.sudo_kill_process(pid)
        if result.ok:
            self.echo(f"✓ Killed process {name} (PID: {pid}) with sudo")
            self.fsm.elevate()
        else:
            self.echo(f"✗ Failed to kill process {pid} even with sudo: {result.message}")
            self.fsm.give_up()
