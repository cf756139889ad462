# (c) Copyright IBM Corp. 2025

import io
import logging
from typing import TYPE_CHECKING, Generator

import pytest
from rich.console import Console

from appsports import cli
from appsports.actions import ActionResult
from appsports.collector.helpers.docker import IMAGE_FORMAT, IP_FORMAT, PS_FORMAT
from appsports.collector.helpers.ss import SS_ARGS_WITH_PROCESSES
from appsports.log import logger
from appsports.util.process_discovery import ProcessPortRecord

if TYPE_CHECKING:
    from pytest import CaptureFixture

SS_OUTPUT = """State  Recv-Q Send-Q Local Address:Port Peer Address:Port Process
LISTEN 0      511    0.0.0.0:3000       0.0.0.0:*         users:(("node",pid=1234,fd=10))
LISTEN 0      4096   0.0.0.0:8080       0.0.0.0:*         users:(("docker-proxy",pid=200,fd=4))
"""

PROXY_COMMAND = (
    "/usr/bin/docker-proxy -proto tcp -host-ip 0.0.0.0 -host-port 8080 "
    "-container-ip 172.17.0.2 -container-port 80"
)
WEB_ID = "3f4e1c2b9a8d7e6f5a4b3c2d1e0f9a8b7c6d5e4f3a2b1c0d9e8f7a6b5c4d3e2f"


class TestCli:
    @pytest.fixture(autouse=True)
    def _resource(self, fake_tools, mocker, monkeypatch) -> Generator[None, None, None]:
        # keep rich from wrapping table cells
        monkeypatch.setenv("COLUMNS", "400")
        self.tools = fake_tools
        self.kill = mocker.patch(
            "appsports.actions.kill_process", return_value=ActionResult(True)
        )
        self.stop = mocker.patch(
            "appsports.actions.stop_container", return_value=ActionResult(True)
        )
        yield
        logger.setLevel(logging.WARNING)

    def add_host(self) -> None:
        self.tools.add(["ss", *SS_ARGS_WITH_PROCESSES], SS_OUTPUT)
        self.tools.add_ps("1234", "node server.js")
        self.tools.add_ps("200", PROXY_COMMAND)
        self.tools.add(
            ["docker", "ps", "--format", PS_FORMAT, "--no-trunc"], f"{WEB_ID} web\n"
        )
        self.tools.add(["docker", "inspect", "-f", IP_FORMAT, WEB_ID], "172.17.0.2\n")
        self.tools.add(["docker", "inspect", "-f", IMAGE_FORMAT, WEB_ID], "nginx:1.25\n")

    def answer(self, mocker, *lines: str) -> None:
        mocker.patch("sys.stdin", io.StringIO("".join(f"{line}\n" for line in lines)))

    def test_parse_args(self) -> None:
        args = cli.parse_args(["-k", "8080", "--kill-docker-container"])
        assert args.kill == "8080"
        assert args.kill_docker_container is True
        assert args.port is None
        assert args.list is False

        args = cli.parse_args(["--port", "22"])
        assert args.port == "22"

        args = cli.parse_args([])
        assert args.kill is None and args.port is None and args.list is False

    @pytest.mark.parametrize(
        "answer, expected_output",
        [
            ("y", True),
            ("Y", True),
            ("yes", True),
            (" YES ", True),
            ("n", False),
            ("", False),
            ("yep", False),
        ],
    )
    def test_get_user_confirmation(
        self, answer: str, expected_output: bool, mocker, capsys: "CaptureFixture"
    ) -> None:
        self.answer(mocker, answer)
        assert cli.get_user_confirmation("Kill? [y/N]: ") is expected_output
        assert capsys.readouterr().out == "Kill? [y/N]: "

    def test_get_user_confirmation_eof(self, mocker) -> None:
        mocker.patch("sys.stdin", io.StringIO(""))
        assert cli.get_user_confirmation("Kill? [y/N]: ") is False

    def test_render_table(self) -> None:
        buffer = io.StringIO()
        console = Console(file=buffer, width=200)
        records = [
            ProcessPortRecord(
                port="8080",
                pid="200",
                process_name="docker-proxy",
                full_command="docker-proxy [x]",
                docker_container_id=WEB_ID,
                docker_image="nginx:1.25",
            ),
            ProcessPortRecord.degraded("22"),
        ]

        cli.render_table(records, console)

        output = buffer.getvalue()
        for column in ("port", "pid", "process_name", "command", "docker_id", "docker_image"):
            assert column in output
        assert "docker-proxy [x]" in output
        assert "(elevated privileges required)" in output
        assert "hidden" in output

    def test_list_default(self, capsys: "CaptureFixture") -> None:
        self.add_host()

        assert cli.main([]) == 0

        output = capsys.readouterr().out
        assert "node server.js" in output
        assert "nginx:1.25" in output

    def test_list_nothing(self, capsys: "CaptureFixture") -> None:
        assert cli.main(["-l"]) == 0
        assert capsys.readouterr().out == "No processes found using ports.\n"

    def test_port(self, capsys: "CaptureFixture") -> None:
        self.add_host()

        assert cli.main(["-p", "3000"]) == 0

        output = capsys.readouterr().out
        assert "node server.js" in output
        assert "docker-proxy" not in output

    def test_port_not_found(self, capsys: "CaptureFixture") -> None:
        self.add_host()

        assert cli.main(["-p", "9999"]) == 0
        assert capsys.readouterr().out == "No process found using port 9999\n"

    def test_kill_declined(self, mocker, capsys: "CaptureFixture") -> None:
        self.add_host()
        self.answer(mocker, "n")

        assert cli.main(["-k", "3000"]) == 0

        output = capsys.readouterr().out
        assert "Found process(es) using port 3000:" in output
        assert "Skipped killing process node (PID: 1234)" in output
        self.kill.assert_not_called()

    def test_kill_confirmed(self, mocker, capsys: "CaptureFixture") -> None:
        self.add_host()
        self.answer(mocker, "y")

        assert cli.main(["-k", "3000"]) == 0

        self.kill.assert_called_once_with("1234")
        assert "✓ Killed process node (PID: 1234)" in capsys.readouterr().out

    def test_kill_port_not_found(self, capsys: "CaptureFixture") -> None:
        assert cli.main(["-k", "3000"]) == 0
        assert capsys.readouterr().out == "No process found using port 3000\n"

    def test_kill_docker_container(self, mocker, capsys: "CaptureFixture") -> None:
        self.add_host()
        self.answer(mocker, "y", "n")

        assert cli.main(["-k", "8080", "--kill-docker-container"]) == 0

        self.stop.assert_called_once_with(WEB_ID, "docker")
        self.kill.assert_not_called()
        assert f"✓ Successfully stopped Docker container {WEB_ID}" in capsys.readouterr().out

    def test_kill_docker_proxy_without_flag(self, mocker) -> None:
        self.add_host()
        self.answer(mocker, "y")

        cli.main(["-k", "8080"])

        self.stop.assert_not_called()
        self.kill.assert_called_once_with("200")

    def test_kill_docker_container_unresolved(self, mocker, capsys: "CaptureFixture") -> None:
        self.tools.add(["ss", *SS_ARGS_WITH_PROCESSES], SS_OUTPUT)
        self.tools.add_ps("200", PROXY_COMMAND)
        self.answer(mocker, "n")

        outcomes = cli.kill_process_by_port(
            cli.PortCollector(cli.Options()), "8080", kill_docker=True
        )

        assert outcomes == ["skipped"]
        assert (
            "Could not extract container ID from docker-proxy command"
            in capsys.readouterr().out
        )
        self.stop.assert_not_called()

    def test_debug_flag(self) -> None:
        cli.main(["--debug", "-l"])
        assert logger.level == logging.DEBUG
