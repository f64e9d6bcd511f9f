"""Batch many calls into one sink call per time window."""

from .batcher import Batcher, batch, batched
from .config import Settings, get_settings
from .errors import InvalidArgument
from .models import FlushReason
from .timer import FlushTimer

__all__ = [
    "Batcher",
    "FlushReason",
    "FlushTimer",
    "InvalidArgument",
    "Settings",
    "batch",
    "batched",
    "get_settings",
]
