# (c) Copyright IBM Corp. 2025

# Module version file.  Used by setup.py and snapshot reporting.

VERSION = "1.0.0"
