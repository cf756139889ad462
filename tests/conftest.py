# (c) Copyright IBM Corp. 2025

import os
from typing import Dict, Generator, List, Sequence, Tuple

import pytest

from appsports.collector.base import PortCollector
from appsports.options import Options

ENV_VARIABLES = (
    "APPS_PORTS_DEBUG",
    "APPS_PORTS_DOCKER",
    "APPS_PORTS_DISABLE_DOCKER",
    "APPS_PORTS_DISABLE_PROBES",
    "APPS_PORTS_CONFIG_PATH",
)


class FakeTools:
    """
    Stands in for appsports.util.runner.run.  Outputs are keyed by the full
    command line; anything unknown behaves like a missing tool and prints "".
    """

    def __init__(self) -> None:
        self.outputs: Dict[Tuple[str, ...], str] = {}
        self.calls: List[Tuple[str, ...]] = []

    def add(self, command: Sequence[str], output: str) -> None:
        self.outputs[tuple(command)] = output

    def add_ps(self, pid: str, cmd: str, comm: str = "") -> None:
        self.add(["ps", "-p", pid, "-o", "cmd", "--no-headers"], f"{cmd}\n")
        if comm:
            self.add(["ps", "-p", pid, "-o", "comm", "--no-headers"], f"{comm}\n")

    def run(self, tool_name: str, args: Sequence[str]) -> str:
        command = (tool_name, *args)
        self.calls.append(command)
        return self.outputs.get(command, "")

    def called(self, *command: str) -> bool:
        return tuple(command) in self.calls

    def called_tool(self, tool_name: str) -> bool:
        return any(call[0] == tool_name for call in self.calls)


@pytest.fixture(autouse=True)
def _clean_environment() -> Generator[None, None, None]:
    yield
    for variable_name in ENV_VARIABLES:
        os.environ.pop(variable_name, None)


@pytest.fixture
def fake_tools(mocker) -> FakeTools:
    tools = FakeTools()
    mocker.patch("appsports.util.runner.run", side_effect=tools.run)
    return tools


@pytest.fixture
def collector(fake_tools: FakeTools) -> PortCollector:
    return PortCollector(Options())
