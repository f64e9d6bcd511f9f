#!/usr/bin/env python3
"""Show calls being batched into a slow sink."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import structlog

from callbatch import batch


def configure_logging(verbose: bool) -> None:
    """Route structlog through the console renderer."""
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if verbose else logging.INFO
        ),
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
    )


def commit(rows: list[tuple]) -> None:
    """Stand-in for an expensive write."""
    print(f"  commit {len(rows)} rows: {rows}")


async def run(interval: float, limit: Optional[int], count: int) -> None:
    save = batch(commit, interval, limit=limit)

    print(f"\nIssuing {count} calls (interval={interval}s, limit={limit})")
    for i in range(count):
        save(i, f"row-{i}")
        await asyncio.sleep(interval / 4)

    print("Waiting for the last window...")
    await asyncio.sleep(interval * 2)


def main():
    parser = argparse.ArgumentParser(description="Batch demo")
    parser.add_argument("--interval", type=float, default=0.2, help="Window in seconds")
    parser.add_argument("--limit", type=int, default=None, help="Calls per batch before forced flush (default: unbounded)")
    parser.add_argument("--count", type=int, default=12, help="Calls to issue")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show flush events")
    args = parser.parse_args()

    configure_logging(args.verbose)
    asyncio.run(run(args.interval, args.limit, args.count))


if __name__ == "__main__":
    main()
