# (c) Copyright IBM Corp. 2025

"""
Probe for the legacy network statistics tool (netstat -tlnp).

Proto Recv-Q Send-Q Local Address   Foreign Address  State   PID/Program name
tcp        0      0 0.0.0.0:22      0.0.0.0:*        LISTEN  812/sshd
tcp6       0      0 :::80           :::*             LISTEN  -
"""

from typing import List, Optional

from appsports.collector.helpers.base import BaseProbe
from appsports.util.pid_lookup import get_command_by_pid
from appsports.util.process_discovery import ProcessPortRecord
from appsports.util import runner

NETSTAT_ARGS = ["-tlnp"]


class NetstatProbe(BaseProbe):
    NAME = "netstat"

    def produce(self) -> List[ProcessPortRecord]:
        lines = runner.run_lines("netstat", NETSTAT_ARGS)
        return self.parse_lines([line for line in lines if "LISTEN" in line])

    def parse_line(self, line: str) -> Optional[ProcessPortRecord]:
        parts = line.split()
        if len(parts) < 7:
            return None

        port = parts[3].rsplit(":", 1)[-1]

        # "-" means we may not see the owner.  Unlike ss there is no
        # placeholder record for it.
        pid_info = parts[6]
        if pid_info == "-" or "/" not in pid_info:
            return None

        pid, process_name = pid_info.split("/", 1)
        return self.create_record(port, pid, process_name, get_command_by_pid(pid))
