"""
Entry point kept for deployments that expect app.py.

The actual application code is in Welcome.py.
"""

import os
import sys

sys.path.insert(0, os.path.dirname(__file__))

import Welcome  # noqa: E402,F401
