"""Timing utilities"""

import time


def settle(ms):
    """Fixed pause so the remote UI returns to a navigable state"""
    if ms > 0:
        time.sleep(ms / 1000)
