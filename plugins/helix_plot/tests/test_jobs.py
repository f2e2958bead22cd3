import random
from concurrent.futures import ThreadPoolExecutor

from common.tasks import run_in_thread
from plugins.helix_plot.core import GenerationGate, PlotChannel
from plugins.helix_plot.core.jobs import ChannelRegistry


def test_generation_gate():
    gate = GenerationGate()
    assert gate.next() == 1
    assert gate.next() == 2
    assert gate.claim(5)
    assert not gate.claim(4)
    assert gate.is_current(5)
    assert not gate.is_current(2)
    assert gate.latest == 5


def test_channel_publishes_latest_result():
    channel = PlotChannel()
    update = channel.submit("f(t) = t", count=4)
    assert update.generation == 1
    assert not update.stale
    assert channel.latest is update.result
    assert len(update.result.sample) == 4


def test_older_generation_is_stale():
    channel = PlotChannel()
    newer = channel.submit("f(t) = t", generation=5, count=2)
    older = channel.submit("f(t) = 2*t", generation=3, count=2)
    assert not newer.stale
    assert older.stale
    assert older.result is None
    assert channel.latest_generation == 5
    assert channel.latest is newer.result


def test_result_finishing_after_newer_request_is_discarded():
    channel = PlotChannel()
    first = channel.gate.next()
    channel.gate.next()
    assert not channel.publish(first, object())
    assert channel.latest is None


def test_concurrent_submissions_keep_the_newest():
    channel = PlotChannel()
    generations = list(range(1, 21))
    random.Random(7).shuffle(generations)
    with ThreadPoolExecutor(max_workers=4) as pool:
        list(pool.map(lambda g: channel.submit(f"f(t) = {g}*t", generation=g, count=3), generations))
    assert channel.latest_generation == 20
    assert channel.latest.sample.points[2][1] == 20 * 10.0


def test_registry_evicts_least_recently_used():
    registry = ChannelRegistry(max_channels=2)
    first = registry.get("a")
    registry.get("b")
    assert registry.get("a") is first
    registry.get("c")
    assert len(registry) == 2
    assert registry.get("b") is not None
    assert registry.get("a") is not first


def test_run_in_thread_falls_back_inline_when_executor_is_closed():
    pool = ThreadPoolExecutor(max_workers=1)
    pool.shutdown()
    assert run_in_thread(lambda: 42, pool) == 42
    assert run_in_thread(lambda: "ok") == "ok"
