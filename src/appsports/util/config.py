# (c) Copyright IBM Corp. 2025

from typing import Any, List

# Names of the discovery probes, in the order the collector runs them.
PROBE_NAMES = [
    "ss",
    "netstat",
    "lsof",
]


def is_truthy(value: Any) -> bool:
    """
    Check if a value is truthy, accepting various formats.

    @param value: The value to check
    @return: True if the value is considered truthy, False otherwise

    Accepts the following as True:
    - True (Python boolean)
    - "True", "true" (case-insensitive string)
    - "1" (string)
    - 1 (integer)
    """
    if value is None:
        return False

    if isinstance(value, bool):
        return value

    if isinstance(value, int):
        return value == 1

    if isinstance(value, str):
        value_lower = value.lower()
        return value_lower == "true" or value == "1"

    return False


def parse_disabled_probes(params: Any) -> List[str]:
    """
    Parses the probes the user wants to skip.

    @param params: Can be either:
        - String: "ss,netstat" or "lsof"
        - List: ["ss", "netstat"]
        Anything else gives an empty list.
    @return: List of known probe names, lower case, in collector order
    """
    if not params:
        return []

    if isinstance(params, str):
        requested = params.split(",")
    elif isinstance(params, (list, tuple)):
        requested = [str(p) for p in params]
    else:
        return []

    requested = {name.strip().lower() for name in requested if name.strip()}
    return [name for name in PROBE_NAMES if name in requested]
