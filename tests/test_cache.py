import threading
import time

from siteGraph import GraphData, GraphDataCache


def test_generator_runs_once_per_key():
    cache = GraphDataCache()
    calls = []

    def generate():
        calls.append(1)
        return GraphData()

    first = cache.get_cached("post_en", generate)
    second = cache.get_cached("post_en", generate)
    assert first is second
    assert len(calls) == 1
    assert "post_en" in cache
    assert len(cache) == 1


def test_keys_are_independent():
    cache = GraphDataCache()
    a = cache.get_cached("a", GraphData)
    b = cache.get_cached("b", GraphData)
    assert a is not b
    assert len(cache) == 2


def test_invalidate_forces_rebuild():
    cache = GraphDataCache()
    calls = []

    def generate():
        calls.append(1)
        return GraphData()

    cache.get_cached("k", generate)
    cache.invalidate()
    assert "k" not in cache
    cache.get_cached("k", generate)
    assert len(calls) == 2


def test_concurrent_first_population_calls_generator_once():
    cache = GraphDataCache()
    calls = []
    results = []
    barrier = threading.Barrier(8)

    def generate():
        calls.append(1)
        time.sleep(0.01)
        return GraphData()

    def worker():
        barrier.wait()
        results.append(cache.get_cached("shared", generate))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for th in threads:
        th.start()
    for th in threads:
        th.join()

    assert len(calls) == 1
    assert all(r is results[0] for r in results)


def test_generator_may_read_other_keys():
    cache = GraphDataCache()
    inner = GraphData()

    outer = cache.get_cached(
        "outer", lambda: cache.get_cached("inner", lambda: inner),
    )
    assert outer is inner
    assert "inner" in cache and "outer" in cache
