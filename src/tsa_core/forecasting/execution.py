"""Bounded worker pool with a per-unit deadline.

ThreadPoolExecutor cannot give up on a running call: a stuck worker keeps
its slot, so every unit queued behind it waits as well, and its threads are
joined at interpreter exit. Forecast units here run on daemon threads
instead. At most `max_workers` units run at a time, each unit's deadline
counts from the moment its own thread starts, and a unit that overruns is
abandoned so its slot goes to the next queued unit.
"""

from __future__ import annotations

import logging
import os
import threading
import time
from collections import deque
from concurrent.futures import FIRST_COMPLETED, Future, wait
from typing import Callable, Dict, Hashable, Iterator, Optional, Tuple

logger = logging.getLogger(__name__)


def default_max_workers() -> int:
    """Same default as ThreadPoolExecutor."""
    return min(32, (os.cpu_count() or 1) + 4)


def _call(future: Future, fn: Callable[[], object]) -> None:
    try:
        result = fn()
    except BaseException as exc:
        future.set_exception(exc)
    else:
        future.set_result(result)


def run_units(
    units: Dict[Hashable, Callable[[], object]],
    max_workers: Optional[int] = None,
    timeout: Optional[float] = None,
    thread_name_prefix: str = "tsa-forecast",
) -> Iterator[Tuple[Hashable, Optional[Future]]]:
    """Run zero-argument callables concurrently, yielding them as they settle.

    Units start in the order of `units`. Each yielded pair is `(key, future)`
    with a completed future, or `(key, None)` when the unit ran for longer
    than `timeout` seconds. A unit that has not started is never timed out.

    Args:
        units: Callables keyed by an identifier of the caller's choice
        max_workers: Units running at the same time. If None, uses the
            ThreadPoolExecutor default.
        timeout: Seconds a single unit may run. If None, no limit.
        thread_name_prefix: Prefix of the worker thread names

    Yields:
        (key, completed Future) or (key, None) for an abandoned unit
    """
    if max_workers is None:
        max_workers = default_max_workers()

    pending = deque(units.items())
    running: Dict[Hashable, Tuple[Future, float]] = {}
    started_count = 0

    while pending or running:
        while pending and len(running) < max_workers:
            key, fn = pending.popleft()
            future: Future = Future()
            future.set_running_or_notify_cancel()
            thread = threading.Thread(
                target=_call,
                args=(future, fn),
                name=f"{thread_name_prefix}_{started_count}",
                daemon=True,
            )
            started_count += 1
            running[key] = (future, time.monotonic())
            thread.start()

        wait_timeout = None
        if timeout is not None:
            earliest = min(started for _, started in running.values())
            wait_timeout = max(0.0, earliest + timeout - time.monotonic())
        wait([future for future, _ in running.values()], timeout=wait_timeout,
             return_when=FIRST_COMPLETED)

        now = time.monotonic()
        for key, (future, started) in list(running.items()):
            if future.done():
                del running[key]
                yield key, future
            elif timeout is not None and now - started >= timeout:
                del running[key]
                logger.debug(f"Abandoning unit {key!r} after {now - started:.2f}s")
                yield key, None
