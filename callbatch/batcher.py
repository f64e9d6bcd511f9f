"""Call batching for expensive sinks."""

import logging
import math
from numbers import Real
from typing import Any, Callable, Optional

import structlog

from .config import get_settings
from .errors import InvalidArgument
from .models import FlushReason
from .timer import FlushTimer

logger = structlog.wrap_logger(
    logging.getLogger(__name__), wrapper_class=structlog.stdlib.BoundLogger
)

Sink = Callable[[list[tuple]], Any]

# Default for options left to the configured settings
_UNSET: Any = object()


def _is_non_negative_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return math.isfinite(value) and value >= 0


class Batcher:
    """
    Collect the arguments of every call made during a window and hand them
    to a sink as one batch.

    The first call of a cycle arms a timer; when it fires the sink receives a
    list with one argument tuple per call, in call order. A cycle also ends
    early when more than ``limit`` calls have been buffered, or when
    ``flush()`` is called. ``clear()`` drops the cycle without calling the
    sink.

    Usage:
        ```python
        save = Batcher(store.save_many, interval=0.05, limit=100)
        save(1, "a")
        save(2, "b")
        # 50ms later: store.save_many([(1, "a"), (2, "b")])
        ```
    """

    def __init__(
        self,
        sink: Sink,
        interval: Optional[float] = _UNSET,
        *,
        limit: Optional[float] = _UNSET,
    ):
        """
        Initialize the batcher.

        Args:
            sink: Called with the list of buffered argument tuples
            interval: Seconds between the first call of a cycle and its flush.
                Defaults to the configured ``default_interval``.
            limit: Calls accepted per cycle before a forced flush.
                Defaults to the configured ``default_limit``. ``None`` or
                ``math.inf`` means unbounded.

        Raises:
            InvalidArgument: If the sink is not callable, or the interval or
                limit is not a finite non-negative number
        """
        config = get_settings()
        if interval is _UNSET:
            interval = config.default_interval
        if limit is _UNSET:
            limit = config.default_limit
        if limit == math.inf:
            limit = None

        if not callable(sink):
            raise InvalidArgument("expected the sink to be a function")
        if not _is_non_negative_number(interval):
            raise InvalidArgument("expected the interval to be a positive number")
        if limit is not None and not _is_non_negative_number(limit):
            raise InvalidArgument("expected the limit option to be a positive number")

        self._sink = sink
        self._interval = interval
        self._limit = limit
        self._buffer: list[tuple] = []
        self._timer = FlushTimer(interval)

    def __call__(self, *args: Any) -> None:
        """Buffer one call, flushing if the limit is exceeded."""
        self._buffer.append(args)

        if self._limit is not None and len(self._buffer) > self._limit:
            self._flush(FlushReason.LIMIT)
        elif len(self._buffer) == 1:
            try:
                self._timer.start(self._on_timer)
            except RuntimeError:
                # No running loop; the call was not accepted
                self._buffer.pop()
                raise

    def flush(self) -> None:
        """Deliver the current batch now, even if it is empty."""
        self._flush(FlushReason.MANUAL)

    def clear(self) -> None:
        """Drop the current batch without calling the sink."""
        size = len(self._buffer)
        self._timer.cancel()
        self._buffer = []
        logger.debug("batch_cleared", size=size)

    def _flush(self, reason: FlushReason) -> None:
        # Reset before calling the sink so a failure or a re-entrant call
        # starts from a clean cycle
        batch, self._buffer = self._buffer, []
        self._timer.cancel()

        logger.debug("batch_flushed", reason=reason.value, size=len(batch))
        self._sink(batch)

    def _on_timer(self) -> None:
        try:
            self._flush(FlushReason.TIMER)
        except Exception:
            logger.exception("batch_flush_failed", sink=self._sink_name)
            raise

    @property
    def pending(self) -> tuple:
        """Argument tuples buffered in the current cycle."""
        return tuple(self._buffer)

    @property
    def call_count(self) -> int:
        """Calls made since the last flush or clear."""
        return len(self._buffer)

    @property
    def is_armed(self) -> bool:
        """Whether a timed flush is pending."""
        return self._timer.is_running

    @property
    def interval(self) -> float:
        """Seconds from the first call of a cycle to its timed flush."""
        return self._interval

    @property
    def limit(self) -> Optional[float]:
        """Calls accepted per cycle before a forced flush; None is unbounded."""
        return self._limit

    @property
    def _sink_name(self) -> str:
        return getattr(self._sink, "__qualname__", repr(self._sink))

    def __repr__(self) -> str:
        return (
            f"<Batcher sink={self._sink_name} interval={self._interval} "
            f"limit={self._limit} pending={len(self._buffer)}>"
        )


def batch(
    sink: Sink,
    interval: Optional[float] = _UNSET,
    *,
    limit: Optional[float] = _UNSET,
) -> Batcher:
    """Wrap ``sink`` so calls made within ``interval`` seconds reach it as one batch."""
    return Batcher(sink, interval, limit=limit)


def batched(
    interval: Optional[float] = _UNSET,
    *,
    limit: Optional[float] = _UNSET,
) -> Callable[[Sink], Batcher]:
    """Decorator form of :func:`batch`."""

    def decorator(sink: Sink) -> Batcher:
        return Batcher(sink, interval, limit=limit)

    return decorator
