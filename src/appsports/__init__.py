# (c) Copyright IBM Corp. 2025
"""
apps-ports

Find the processes, and the docker containers behind docker-proxy, that are
bound to listening TCP ports on this host, and optionally stop them.
"""

from appsports.version import VERSION

__license__ = "MIT"
__version__ = VERSION
