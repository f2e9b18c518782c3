# sail_thrust/debug.py

from .constants import DEBUG_LOG


def dprint(*args, **kwargs):
    """Debug print that can be globally toggled."""
    if DEBUG_LOG:
        print(*args, **kwargs)
