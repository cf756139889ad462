# (c) Copyright IBM Corp. 2025

"""
This file contains a config object that will hold configuration options for the package.
Defaults are set and can be overridden after package load.
"""

from appsports.util import DictionaryOfStan

# La Protagonista
config = DictionaryOfStan()

# Docker binary used for correlation and for stopping containers.
config["docker"]["binary"] = "docker"

# Resolve docker-proxy processes to the container behind them.
config["docker"]["correlation"] = True
