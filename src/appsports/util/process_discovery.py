# (c) Copyright IBM Corp. 2025

from dataclasses import dataclass
from enum import Enum

HIDDEN_PID = "hidden"
ELEVATED_PROCESS_NAME = "(elevated privileges required)"
ELEVATED_COMMAND = "Run with 'sudo' to see process details"


class RecordState(Enum):
    RESOLVED = "resolved"  # the owning process is known
    DEGRADED = "degraded"  # the port is listening but the owner is hidden from us


@dataclass(frozen=True)
class ProcessPortRecord:
    port: str  # the listening port as printed by the tool, not validated
    pid: str  # the PID, or "hidden"
    process_name: str = ""  # short name of the executable
    full_command: str = ""  # the full command line of the process
    docker_container_id: str = ""  # full container id when this is a docker-proxy
    docker_image: str = ""  # image of that container
    state: RecordState = RecordState.RESOLVED

    @classmethod
    def degraded(cls, port: str) -> "ProcessPortRecord":
        """Placeholder for a listening port whose owner needs elevated privileges to see."""
        return cls(
            port=port,
            pid=HIDDEN_PID,
            process_name=ELEVATED_PROCESS_NAME,
            full_command=ELEVATED_COMMAND,
            state=RecordState.DEGRADED,
        )

    @property
    def is_degraded(self) -> bool:
        return self.state is RecordState.DEGRADED

    @property
    def key(self):
        return (self.pid, self.port)

    @property
    def is_docker_proxy(self) -> bool:
        return "docker-proxy" in self.full_command


@dataclass(frozen=True)
class ContainerHandle:
    container_id: str  # full, untruncated id
    ip_address: str = ""
    image_name: str = ""
