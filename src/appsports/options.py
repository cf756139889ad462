# (c) Copyright IBM Corp. 2025

"""
Options for apps-ports.

Settings are resolved with the following precedence:
environment variables > YAML file at APPS_PORTS_CONFIG_PATH >
in-code configuration (appsports.configurator) > defaults
"""

import logging
import os
from typing import Any, Dict

from appsports.configurator import config
from appsports.log import logger
from appsports.util.config import is_truthy, parse_disabled_probes
from appsports.util.config_reader import ConfigReader


class Options(object):
    """Holds the settings used by the collector, the docker correlator and the CLI"""

    def __init__(self, **kwds: Dict[str, Any]) -> None:
        self.debug = False
        self.log_level = logging.WARNING
        self.docker_binary = "docker"
        self.docker_correlation = True
        self.disabled_probes = []

        self.set_from_in_code_config()
        self.set_from_config_file()
        self.set_from_env()

        self.__dict__.update(kwds)

        if self.debug:
            self.log_level = logging.DEBUG

    def set_from_in_code_config(self) -> None:
        docker = config.get("docker")
        if not isinstance(docker, dict):
            return

        if docker.get("binary"):
            self.docker_binary = docker["binary"]
        if "correlation" in docker:
            self.docker_correlation = is_truthy(docker["correlation"])

    def set_from_config_file(self) -> None:
        path = os.environ.get("APPS_PORTS_CONFIG_PATH")
        if not path:
            return

        data = ConfigReader(path).data
        logger.debug(f"Options: read configuration from {path}: {data}")

        if "debug" in data:
            self.debug = is_truthy(data["debug"])
        if data.get("docker_binary"):
            self.docker_binary = str(data["docker_binary"])
        if "docker_correlation" in data:
            self.docker_correlation = is_truthy(data["docker_correlation"])
        if "disabled_probes" in data:
            disabled = data["disabled_probes"]
            if disabled is None or isinstance(disabled, (str, list, tuple)):
                self.disabled_probes = parse_disabled_probes(disabled)
            else:
                logger.error(
                    f"Options: ignoring disabled_probes in {path}, "
                    f"expected a list of probe names: {disabled!r}"
                )

    def set_from_env(self) -> None:
        if "APPS_PORTS_DEBUG" in os.environ:
            self.debug = is_truthy(os.environ["APPS_PORTS_DEBUG"])

        if os.environ.get("APPS_PORTS_DOCKER"):
            self.docker_binary = os.environ["APPS_PORTS_DOCKER"]

        if "APPS_PORTS_DISABLE_DOCKER" in os.environ:
            self.docker_correlation = not is_truthy(
                os.environ["APPS_PORTS_DISABLE_DOCKER"]
            )

        if "APPS_PORTS_DISABLE_PROBES" in os.environ:
            self.disabled_probes = parse_disabled_probes(
                os.environ["APPS_PORTS_DISABLE_PROBES"]
            )
