# (c) Copyright IBM Corp. 2025

"""
This module provides "python -m appsports" functionality.
"""

import sys

from appsports.cli import main

sys.exit(main())
