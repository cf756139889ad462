# (c) Copyright IBM Corp. 2025

"""
Probe for the socket statistics tool (ss).  This is the primary source.

With --processes and enough privileges each line carries the owner, e.g.:

State  Recv-Q Send-Q Local Address:Port Peer Address:Port Process
LISTEN 0      511    0.0.0.0:3000       0.0.0.0:*         users:(("node",pid=12345,fd=10))

Without privileges the Process column is missing and the owner is looked up by
port instead, or reported as a degraded record.
"""

import re
from typing import List, Optional, Tuple

from appsports.collector.helpers.base import BaseProbe, port_from_address
from appsports.log import logger
from appsports.util.pid_lookup import get_command_by_pid
from appsports.util.process_discovery import ProcessPortRecord
from appsports.util import runner

SS_ARGS_WITH_PROCESSES = ["--tcp", "--listening", "--numeric", "--processes"]
SS_ARGS = ["--tcp", "--listening", "--numeric"]

# Used by parse_users_pid
regexp_pid = re.compile(r"pid=([^,]*),")
# Used by parse_users_name
regexp_quoted = re.compile(r'"([^"]*)"')


def parse_users_pid(users: str) -> Optional[str]:
    """Returns the text between "pid=" and the next comma, or None"""
    match = regexp_pid.search(users)
    if match is None:
        return None
    return match.group(1)


def parse_users_name(users: str) -> Optional[str]:
    """Returns the first double quoted string, or None"""
    match = regexp_quoted.search(users)
    if match is None:
        return None
    return match.group(1)


def parse_users(users: str) -> Optional[Tuple[str, str]]:
    """
    Parses the process column of ss, e.g. users:(("node",pid=12345,fd=10)).
    When several processes share the socket only the first one is used.

    @return: (pid, process_name) or None
    """
    if "users:" not in users:
        return None

    pid = parse_users_pid(users)
    name = parse_users_name(users)
    if pid is None or name is None:
        return None
    return pid, name


class SocketStatisticsProbe(BaseProbe):
    NAME = "ss"

    def produce(self) -> List[ProcessPortRecord]:
        """
        Runs ss with --processes first.  Some environments reject the flag, so
        when that run yields nothing the probe tries once more without it.
        """
        for args in (SS_ARGS_WITH_PROCESSES, SS_ARGS):
            lines = runner.run_lines("ss", args, skip_header=True)
            records = self.parse_lines(lines)
            if records:
                return records
            logger.debug(f"ss: no records with {' '.join(args)}")
        return []

    def parse_line(self, line: str) -> Optional[ProcessPortRecord]:
        parts = line.split()
        if len(parts) < 4:
            return None

        port = port_from_address(parts[3])
        if port is None:
            return None

        if len(parts) >= 6:
            # Quoted process names may contain spaces.
            owner = parse_users(" ".join(parts[5:]))
            if owner is not None:
                pid, process_name = owner
                return self.create_record(
                    port, pid, process_name, get_command_by_pid(pid)
                )

        # No owner in the output: ss ran without the privileges to see it.
        record = self.collector.find_process_by_port(port)
        if record is not None:
            return record

        logger.debug(f"ss: owner of port {port} is hidden")
        return ProcessPortRecord.degraded(port)
