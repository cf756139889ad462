# (c) Copyright IBM Corp. 2025

"""
Resolves a docker-proxy process to the container it forwards traffic to.

docker-proxy is started per published port with a command line such as:

/usr/bin/docker-proxy -proto tcp -host-ip 0.0.0.0 -host-port 8080 -container-ip 172.17.0.2 -container-port 8080

The container is found by comparing -container-ip with the IP address of
every running container.  Correlation is best effort: any failure yields
empty strings and never aborts discovery.
"""

from typing import Iterator, Optional, Tuple

from appsports.log import logger
from appsports.util.process_discovery import ContainerHandle
from appsports.util import runner

DOCKER_PROXY = "docker-proxy"
CONTAINER_IP_FLAG = "-container-ip "

PS_FORMAT = "{{.ID}} {{.Names}}"
IP_FORMAT = "{{range.NetworkSettings.Networks}}{{.IPAddress}}{{end}}"
IMAGE_FORMAT = "{{.Config.Image}}"

UNKNOWN_IMAGE = "unknown"


def extract_container_ip(full_command: str) -> Optional[str]:
    """
    Returns the value of -container-ip in a docker-proxy command line, or None
    """
    position = full_command.find(CONTAINER_IP_FLAG)
    if position < 0:
        return None

    value = full_command[position + len(CONTAINER_IP_FLAG):].split(" ", 1)[0]
    return value or None


class DockerCorrelator(object):
    """Looks up containers through the docker CLI"""

    def __init__(self, docker_binary: str = "docker", enabled: bool = True) -> None:
        self.docker_binary = docker_binary
        self.enabled = enabled

    def correlate(self, full_command: str) -> Tuple[str, str]:
        """
        @param full_command: the command line of a listening process
        @return: (container_id, image) or ("", "") when the process isn't a
                 docker-proxy or the container can't be found
        """
        if not self.enabled or DOCKER_PROXY not in full_command:
            return "", ""

        try:
            container = self.find_container_for_proxy(full_command)
        except Exception:
            logger.debug("DockerCorrelator.correlate: ", exc_info=True)
            return "", ""

        if container is None:
            return "", ""
        return container.container_id, container.image_name

    def extract_container_id(self, full_command: str) -> Optional[str]:
        """Returns the full id of the container behind a docker-proxy, or None"""
        container_ip = extract_container_ip(full_command)
        if container_ip is None:
            return None
        return self.find_container_by_ip(container_ip)

    def find_container_for_proxy(self, full_command: str) -> Optional[ContainerHandle]:
        container_ip = extract_container_ip(full_command)
        if container_ip is None:
            logger.debug(f"No -container-ip in docker-proxy command: {full_command}")
            return None

        container_id = self.find_container_by_ip(container_ip)
        if container_id is None:
            logger.debug(f"No running container has IP {container_ip}")
            return None

        return ContainerHandle(
            container_id=container_id,
            ip_address=container_ip,
            image_name=self.get_container_image(container_id),
        )

    def list_container_ids(self) -> Iterator[str]:
        args = ["ps", "--format", PS_FORMAT, "--no-trunc"]
        for line in runner.run_lines(self.docker_binary, args):
            parts = line.split()
            if parts:
                yield parts[0]

    def find_container_by_ip(self, container_ip: str) -> Optional[str]:
        for container_id in self.list_container_ids():
            if self.get_container_ip(container_id) == container_ip:
                return container_id
        return None

    def get_container_ip(self, container_id: str) -> Optional[str]:
        ip = self._inspect(container_id, IP_FORMAT)
        return ip or None

    def get_container_image(self, container_id: str) -> str:
        return self._inspect(container_id, IMAGE_FORMAT) or UNKNOWN_IMAGE

    def _inspect(self, container_id: str, template: str) -> str:
        args = ["inspect", "-f", template, container_id]
        return runner.run(self.docker_binary, args).strip()
