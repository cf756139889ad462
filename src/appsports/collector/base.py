# (c) Copyright IBM Corp. 2025

"""
The collector runs the discovery probes in a fixed order and merges what they
see into one list of ProcessPortRecord, unique by (pid, port).

No single tool is always installed or privileged enough, so all of them run
and the first one to report a (pid, port) binding wins.
"""

from typing import List, Optional

from appsports.collector.helpers.docker import DockerCorrelator
from appsports.collector.helpers.lsof import LsofProbe
from appsports.collector.helpers.netstat import NetstatProbe
from appsports.collector.helpers.ss import SocketStatisticsProbe
from appsports.log import logger
from appsports.options import Options
from appsports.util.pid_lookup import (
    get_command_by_pid,
    get_process_name_by_pid,
    parse_pid,
)
from appsports.util.process_discovery import ProcessPortRecord
from appsports.util import runner


class PortCollector(object):
    """
    Discovers the processes bound to listening TCP ports on this host
    """

    def __init__(self, options: Optional[Options] = None) -> None:
        self.options = options if options is not None else Options()

        self.docker = DockerCorrelator(
            docker_binary=self.options.docker_binary,
            enabled=self.options.docker_correlation,
        )

        # The probes in order of precedence
        self.probes = []
        for probe_class in (SocketStatisticsProbe, NetstatProbe, LsofProbe):
            if probe_class.NAME in self.options.disabled_probes:
                logger.debug(f"PortCollector: probe {probe_class.NAME} is disabled")
                continue
            self.probes.append(probe_class(self))

    def create_record(
        self, port: str, pid: str, process_name: str, full_command: str
    ) -> ProcessPortRecord:
        """Builds a record, resolving the container when the process is a docker-proxy"""
        docker_container_id, docker_image = self.docker.correlate(full_command)
        return ProcessPortRecord(
            port=port,
            pid=pid,
            process_name=process_name,
            full_command=full_command,
            docker_container_id=docker_container_id,
            docker_image=docker_image,
        )

    def discover_all(self) -> List[ProcessPortRecord]:
        """
        Runs every probe and merges the results.  A record whose (pid, port)
        is already known from an earlier probe is dropped.

        @return: list of records in discovery order
        """
        records = []
        seen = set()

        for probe in self.probes:
            try:
                produced = probe.produce()
            except Exception:
                logger.debug(f"PortCollector: {probe.NAME} probe failed", exc_info=True)
                continue

            added = 0
            for record in produced:
                if record.key in seen:
                    continue
                seen.add(record.key)
                records.append(record)
                added += 1
            logger.debug(
                f"PortCollector: {probe.NAME} reported {len(produced)} records, {added} new"
            )

        return records

    def find_by_port(self, port: str) -> List[ProcessPortRecord]:
        """The records of discover_all whose port is exactly <port>"""
        return [record for record in self.discover_all() if record.port == port]

    def find_process_by_port(self, port: str) -> Optional[ProcessPortRecord]:
        """
        Point lookup of the process listening on <port>: lsof scoped to the
        port first, then fuser.

        @return: a record, or None when no discoverable process owns the port
        """
        lsof = LsofProbe(self)
        lines = runner.run_lines("lsof", ["-i", f":{port}", "-P", "-n"], skip_header=True)
        for line in lines:
            if "LISTEN" not in line:
                continue
            record = lsof.parse_line(line)
            if record is not None:
                return record
            break

        for token in runner.run("fuser", [f"{port}/tcp"]).split():
            pid = parse_pid(token)
            if pid is None:
                continue
            return self.create_record(
                port, pid, get_process_name_by_pid(pid), get_command_by_pid(pid)
            )

        return None
