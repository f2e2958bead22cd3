"""Simple synchronous task utilities."""

from __future__ import annotations

from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Callable, TypeVar

from .logging import get_logger

T = TypeVar("T")

logger = get_logger("helixplot.tasks")


def run_in_thread(func: Callable[[], T], executor: Executor | None = None) -> T:
    """Run ``func`` on a worker thread and wait for its result.

    When no worker can be started (the executor is shut down or the
    interpreter refuses new threads) ``func`` runs inline instead, so callers
    always get the same output.
    """

    try:
        if executor is None:
            with ThreadPoolExecutor(max_workers=1) as pool:
                future = pool.submit(func)
        else:
            future = executor.submit(func)
    except RuntimeError as exc:
        logger.warning("worker unavailable, running inline: %s", exc)
        return func()
    return future.result()


__all__ = ["run_in_thread"]
