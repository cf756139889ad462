# (c) Copyright IBM Corp. 2025

import importlib.metadata
from collections import defaultdict
from typing import Any, DefaultDict

from appsports.log import logger


def nested_dictionary() -> DefaultDict[str, Any]:
    return defaultdict(DictionaryOfStan)


# Simple implementation of a nested dictionary.
DictionaryOfStan: DefaultDict[str, Any] = nested_dictionary


def package_version() -> str:
    """
    Determine the version of the 'apps-ports' package.

    If the package metadata is not found (running from a source checkout),
    it returns 'unknown'.

    :return: A string representing the version of the 'apps-ports' package.
    """
    try:
        version = importlib.metadata.version("apps-ports")
    except importlib.metadata.PackageNotFoundError:
        logger.debug("Not able to identify the apps-ports package version.")
        version = "unknown"

    return version
