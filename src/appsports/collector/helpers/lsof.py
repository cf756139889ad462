# (c) Copyright IBM Corp. 2025

"""
Probe for the open files tool (lsof -i -P -n -sTCP:LISTEN).

COMMAND  PID USER   FD   TYPE DEVICE SIZE/OFF NODE NAME
node    1234 user   23u  IPv4 123456      0t0  TCP *:3000 (LISTEN)

Some lsof builds glue the state to the address ("*:3000(LISTEN)") and leave
out the FD column, so the address is taken as the token following the TCP
node column when there is one.
"""

from typing import List, Optional

from appsports.collector.helpers.base import BaseProbe
from appsports.util.pid_lookup import get_command_by_pid
from appsports.util.process_discovery import ProcessPortRecord
from appsports.util import runner

LSOF_ARGS = ["-i", "-P", "-n", "-sTCP:LISTEN"]

# Index of the NAME column in the standard layout
ADDRESS_COLUMN = 8


def address_from_columns(parts: List[str]) -> Optional[str]:
    for index in range(6, len(parts) - 1):
        if parts[index] == "TCP":
            return parts[index + 1]

    if len(parts) > ADDRESS_COLUMN:
        return parts[ADDRESS_COLUMN]
    return None


def port_from_lsof_address(address: str) -> str:
    """ "*:3000(LISTEN)" -> "3000" """
    return address.rsplit(":", 1)[-1].split("(", 1)[0]


class LsofProbe(BaseProbe):
    NAME = "lsof"

    def produce(self) -> List[ProcessPortRecord]:
        return self.parse_lines(runner.run_lines("lsof", LSOF_ARGS, skip_header=True))

    def parse_line(self, line: str) -> Optional[ProcessPortRecord]:
        parts = line.split()
        if len(parts) < ADDRESS_COLUMN:
            return None

        address = address_from_columns(parts)
        if address is None:
            return None

        process_name = parts[0]
        pid = parts[1]
        port = port_from_lsof_address(address)
        return self.create_record(port, pid, process_name, get_command_by_pid(pid))
