"""
Pytest configuration for unit tests.

Keeps the host environment's credential out of unit tests.
"""

import os


def pytest_configure(config):
    """Remove ambient credentials so tests control configuration explicitly."""
    for name in ("ROBLOSECURITY", "ANIMATION_ROBLOSECURITY"):
        os.environ.pop(name, None)
