# (c) Copyright IBM Corp. 2025

"""
Base class for the discovery probes used by the collector.  Each probe wraps
one system tool (ss, netstat, lsof), runs it, and turns its output lines into
ProcessPortRecord instances.
"""

from typing import TYPE_CHECKING, List, Optional

from appsports.log import logger

if TYPE_CHECKING:
    from appsports.collector.base import PortCollector
    from appsports.util.process_discovery import ProcessPortRecord


class BaseProbe(object):
    """
    Base class for all probes.  Descendants must override and implement `self.produce`
    and, for line oriented tools, `self.parse_line`.
    """

    NAME = "base"

    def __init__(self, collector: "PortCollector") -> None:
        self.collector = collector

    def produce(self) -> List["ProcessPortRecord"]:
        logger.debug("BaseProbe.produce must be overridden")
        return []

    def parse_line(self, line: str) -> Optional["ProcessPortRecord"]:
        logger.debug("BaseProbe.parse_line must be overridden")
        return None

    def parse_lines(self, lines: List[str]) -> List["ProcessPortRecord"]:
        """Parses each line, dropping the ones that carry no record"""
        records = []
        for line in lines:
            try:
                record = self.parse_line(line)
            except Exception:
                logger.debug(f"{self.NAME}: couldn't parse {line!r}", exc_info=True)
                continue
            if record is not None:
                records.append(record)
        return records

    def create_record(
        self, port: str, pid: str, process_name: str, full_command: str
    ) -> "ProcessPortRecord":
        return self.collector.create_record(port, pid, process_name, full_command)


def port_from_address(address: str) -> Optional[str]:
    """
    Returns the port of a local address such as "0.0.0.0:8080", "*:8080",
    "[::]:8080" or "127.0.0.53%lo:53", i.e. whatever follows the last colon.

    @return: the port text or None when there is no colon
    """
    if ":" not in address:
        return None
    return address.rsplit(":", 1)[1]
