"""Last-request-wins coordination for repeated sampling requests.

Every request gets a generation tag. Results are compared against the newest
tag when they are consumed, so an older request that finishes late never
overwrites a newer one.
"""

from __future__ import annotations

import threading
from collections import OrderedDict
from concurrent.futures import Executor
from dataclasses import dataclass
from functools import partial
from typing import Any

from common.logging import get_logger
from common.tasks import run_in_thread

from .program import PlotResult, build_plot
from .settings import HelixPlotSettings

logger = get_logger("helixplot.jobs")


class GenerationGate:
    """Thread-safe monotonically increasing generation counter."""

    def __init__(self) -> None:
        self._latest = 0
        self._lock = threading.Lock()

    @property
    def latest(self) -> int:
        with self._lock:
            return self._latest

    def next(self) -> int:
        with self._lock:
            self._latest += 1
            return self._latest

    def claim(self, generation: int) -> bool:
        """Register a caller-chosen tag; ``False`` when a newer one is already known."""

        with self._lock:
            if generation < self._latest:
                return False
            self._latest = generation
            return True

    def is_current(self, generation: int) -> bool:
        with self._lock:
            return generation == self._latest


@dataclass(frozen=True, slots=True)
class ChannelUpdate:
    generation: int
    result: PlotResult | None
    stale: bool


class PlotChannel:
    """One editing surface: a stream of source texts whose newest result wins."""

    def __init__(self, settings: HelixPlotSettings | None = None, executor: Executor | None = None):
        self.gate = GenerationGate()
        self._settings = settings or HelixPlotSettings()
        self._executor = executor
        self._lock = threading.Lock()
        self._latest: PlotResult | None = None
        self._latest_generation = 0

    @property
    def latest(self) -> PlotResult | None:
        with self._lock:
            return self._latest

    @property
    def latest_generation(self) -> int:
        with self._lock:
            return self._latest_generation

    def submit(self, text: str, *, generation: int | None = None, **options: Any) -> ChannelUpdate:
        """Build a plot for ``text`` and publish it unless a newer request arrived meanwhile."""

        if generation is None:
            generation = self.gate.next()
        elif not self.gate.claim(generation):
            logger.debug("generation %d superseded before sampling", generation)
            return ChannelUpdate(generation=generation, result=None, stale=True)

        result = run_in_thread(partial(build_plot, text, self._settings, **options), self._executor)
        return ChannelUpdate(generation=generation, result=result, stale=not self.publish(generation, result))

    def publish(self, generation: int, result: PlotResult) -> bool:
        with self._lock:
            if not self.gate.is_current(generation):
                logger.debug("discarding stale generation %d", generation)
                return False
            self._latest = result
            self._latest_generation = generation
            return True


class ChannelRegistry:
    """Bounded registry of channels keyed by client-chosen ids; least recently used go first."""

    def __init__(self, max_channels: int = 64) -> None:
        self.max_channels = max_channels
        self._items: OrderedDict[str, PlotChannel] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def get(self, channel_id: str, settings: HelixPlotSettings | None = None) -> PlotChannel:
        with self._lock:
            channel = self._items.get(channel_id)
            if channel is None:
                channel = PlotChannel(settings)
                self._items[channel_id] = channel
            self._items.move_to_end(channel_id)
            while len(self._items) > self.max_channels:
                evicted, _ = self._items.popitem(last=False)
                logger.debug("evicted plot channel %s", evicted)
            return channel

    def clear(self) -> None:
        with self._lock:
            self._items.clear()


_REGISTRY = ChannelRegistry()


def get_channel(channel_id: str, settings: HelixPlotSettings | None = None) -> PlotChannel:
    if settings is not None:
        _REGISTRY.max_channels = settings.max_channels
    return _REGISTRY.get(channel_id, settings)


def reset_channels() -> None:
    _REGISTRY.clear()


__all__ = [
    "ChannelRegistry",
    "ChannelUpdate",
    "GenerationGate",
    "PlotChannel",
    "get_channel",
    "reset_channels",
]
