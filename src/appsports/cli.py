# (c) Copyright IBM Corp. 2025

"""
Command line front end:

    apps-ports                        list every listening process (same as -l)
    apps-ports -p 8080                show the process(es) on port 8080
    apps-ports -k 8080                interactively kill the process(es) on port 8080
    apps-ports -k 8080 --kill-docker-container
                                      offer to stop the container behind a docker-proxy
"""

import argparse
import sys
from typing import List, Optional, Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from appsports.collector.base import PortCollector
from appsports.fsm import KillMachine
from appsports.log import logger, set_log_level
from appsports.options import Options
from appsports.util.process_discovery import ProcessPortRecord
from appsports.version import VERSION

TABLE_COLUMNS = ["port", "pid", "process_name", "command", "docker_id", "docker_image"]


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="apps-ports",
        description="Find and stop applications using specific ports",
    )
    parser.add_argument("--version", action="version", version=f"apps-ports {VERSION}")
    parser.add_argument("-p", "--port", metavar="PORT", help="Specific port to check")
    parser.add_argument(
        "-l", "--list", action="store_true", help="List all processes using ports"
    )
    parser.add_argument(
        "-k", "--kill", metavar="PORT", help="Kill process using the specified port"
    )
    parser.add_argument(
        "--kill-docker-container",
        action="store_true",
        help="When used with -k, kill Docker container instead of just the process",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def record_cells(record: ProcessPortRecord) -> List[str]:
    return [
        record.port,
        record.pid,
        record.process_name,
        record.full_command,
        record.docker_container_id,
        record.docker_image,
    ]


def render_table(records: List[ProcessPortRecord], console: Optional[Console] = None) -> None:
    console = console or Console()
    table = Table(show_header=True, header_style="bold cyan")
    for column in TABLE_COLUMNS:
        table.add_column(column)

    for record in records:
        # Text cells: commands may contain "[...]", which is not markup.
        table.add_row(
            *(Text(value) for value in record_cells(record)),
            style="yellow" if record.is_degraded else None,
        )

    console.print(table)


def get_user_confirmation(question: str) -> bool:
    """Asks <question> and reads one line; only "y" or "yes" count as consent"""
    print(question, end="", flush=True)
    answer = sys.stdin.readline()
    return answer.strip().lower() in ("y", "yes")


def list_all_processes(collector: PortCollector, console: Optional[Console] = None) -> None:
    records = collector.discover_all()
    if not records:
        print("No processes found using ports.")
        return
    render_table(records, console)


def show_process_by_port(
    collector: PortCollector, port: str, console: Optional[Console] = None
) -> None:
    records = collector.find_by_port(port)
    if not records:
        print(f"No process found using port {port}")
        return
    render_table(records, console)


def kill_process_by_port(
    collector: PortCollector,
    port: str,
    kill_docker: bool = False,
    confirm=get_user_confirmation,
    console: Optional[Console] = None,
) -> List[str]:
    """
    Offers to kill each process on <port>, one at a time, in discovery order.

    @return: the final state of each dialog
    """
    records = collector.find_by_port(port)
    if not records:
        print(f"No process found using port {port}")
        return []

    print(f"Found process(es) using port {port}:")
    render_table(records, console)

    outcomes = []
    for record in records:
        container_id = None
        if kill_docker and record.is_docker_proxy:
            container_id = record.docker_container_id
            if not container_id:
                container_id = collector.docker.extract_container_id(record.full_command)
            if not container_id:
                print("Could not extract container ID from docker-proxy command")

        machine = KillMachine(
            record,
            confirm,
            container_id=container_id,
            docker_binary=collector.options.docker_binary,
        )
        outcomes.append(machine.run())
        logger.debug(f"Dialog for PID {record.pid} ended in state {machine.state}")
    return outcomes


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)

    options = Options(debug=True) if args.debug else Options()
    set_log_level(options.log_level)
    logger.debug(f"apps-ports {VERSION} starting with {vars(args)}")

    collector = PortCollector(options)

    if args.kill is not None:
        kill_process_by_port(collector, args.kill, args.kill_docker_container)
    elif args.port is not None:
        show_process_by_port(collector, args.port)
    else:
        list_all_processes(collector)
    return 0
