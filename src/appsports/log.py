# (c) Copyright IBM Corp. 2025

import logging
import os

logger = None


def get_standard_logger():
    """
    Retrieves and configures a standard logger for the apps-ports package

    @return: Logger
    """
    standard_logger = logging.getLogger("appsports")

    if not standard_logger.handlers:
        ch = logging.StreamHandler()
        f = logging.Formatter(
            "%(asctime)s: %(process)d %(levelname)s %(name)s: %(message)s"
        )
        ch.setFormatter(f)
        standard_logger.addHandler(ch)

    if os.environ.get("APPS_PORTS_DEBUG", "").lower() in ("true", "1"):
        standard_logger.setLevel(logging.DEBUG)
    else:
        standard_logger.setLevel(logging.WARNING)
    return standard_logger


def set_log_level(level: int) -> None:
    logger.setLevel(level)


logger = get_standard_logger()
