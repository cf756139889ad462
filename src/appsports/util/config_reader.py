# (c) Copyright IBM Corp. 2025

from typing import Any, Dict

import yaml

from appsports.log import logger

# Top level keys of the apps-ports YAML file.
KNOWN_KEYS = (
    "debug",
    "docker_binary",
    "docker_correlation",
    "disabled_probes",
)


class ConfigReader:
    """
    Reads the apps-ports YAML file.  A missing, unparsable or non-mapping file
    is logged and leaves data empty; unknown keys are logged and dropped.
    """

    def __init__(self, file_path: str) -> None:
        self.file_path = file_path
        self.data: Dict[str, Any] = {}
        if file_path:
            self.data = self.select_known_keys(self.load_file())
        else:
            logger.warning("ConfigReader: No configuration file specified")

    def load_file(self) -> Any:
        try:
            with open(self.file_path, "r") as file:
                return yaml.safe_load(file) or {}
        except FileNotFoundError:
            logger.error(
                f"ConfigReader: Configuration file was not found: {self.file_path}"
            )
        except yaml.YAMLError as e:
            logger.error(f"ConfigReader: Error parsing YAML file: {e}")
        return {}

    def select_known_keys(self, loaded: Any) -> Dict[str, Any]:
        if not isinstance(loaded, dict):
            logger.error(
                f"ConfigReader: Expected a mapping at the top of {self.file_path}"
            )
            return {}

        unknown = sorted(str(key) for key in loaded if key not in KNOWN_KEYS)
        if unknown:
            logger.warning(
                f"ConfigReader: Ignoring unknown keys in {self.file_path}: {', '.join(unknown)}"
            )
        return {key: value for key, value in loaded.items() if key in KNOWN_KEYS}
