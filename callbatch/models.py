"""Batching models."""

from enum import Enum


class FlushReason(str, Enum):
    """What caused a batch to be delivered to its sink."""

    TIMER = "timer"
    LIMIT = "limit"
    MANUAL = "manual"
