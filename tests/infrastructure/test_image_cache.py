import threading

import pytest
from fakes import FakeClock, FakeImageStrategy, make_image

from provisioning_core.domain.template import ImageNotFoundError
from provisioning_core.infrastructure.template import ImageCache


@pytest.fixture
def listed():
    return [make_image("a"), make_image("b")]


@pytest.fixture
def loads():
    return []


@pytest.fixture
def cache(listed, loads, strategy, clock):
    def supplier():
        loads.append(clock())
        return list(listed)

    return ImageCache(supplier, strategy, ttl_seconds=60, clock=clock)


def test_snapshot_is_memoized(cache, loads, clock):
    assert [image.id for image in cache.get()] == ["a", "b"]
    clock.advance(59)
    cache.get()

    assert loads == [0]


def test_snapshot_reloaded_after_ttl(cache, listed, loads, clock):
    cache.get()
    listed.append(make_image("c"))
    clock.advance(60)

    assert [image.id for image in cache.get()] == ["a", "b", "c"]
    assert loads == [0, 60]


def test_get_returns_a_copy(cache):
    cache.get().clear()

    assert len(cache.get()) == 2


def test_resolve_hit_skips_strategy(cache, strategy):
    assert cache.resolve("a").id == "a"
    assert strategy.requested == []


def test_resolve_miss_merges_fallback_image(cache, strategy):
    strategy.images["hidden"] = make_image("hidden")

    assert cache.resolve("hidden").id == "hidden"
    assert cache.resolve("hidden").id == "hidden"
    assert "hidden" in [image.id for image in cache.get()]
    assert strategy.requested == ["hidden"]


def test_resolve_unknown(cache, strategy):
    with pytest.raises(ImageNotFoundError) as exc:
        cache.resolve("missing")
    assert str(exc.value) == "imageId(missing) not found"
    assert strategy.requested == ["missing"]


def test_merged_image_dropped_on_reload(cache, strategy, clock):
    strategy.images["hidden"] = make_image("hidden")
    cache.resolve("hidden")
    clock.advance(60)

    assert "hidden" not in [image.id for image in cache.get()]


def test_remove_and_invalidate(cache, loads):
    cache.remove_image("a")
    assert [image.id for image in cache.get()] == ["b"]

    cache.invalidate()
    assert [image.id for image in cache.get()] == ["a", "b"]
    assert len(loads) == 2


def test_concurrent_misses_are_all_kept(listed):
    hidden = [make_image(f"hidden-{i}") for i in range(20)]
    barrier = threading.Barrier(len(hidden))

    class SlowStrategy(FakeImageStrategy):
        def get_image(self, image_id):
            barrier.wait(timeout=5)
            return super().get_image(image_id)

    cache = ImageCache(lambda: listed, SlowStrategy(hidden), ttl_seconds=60, clock=FakeClock())
    errors = []

    def resolve(image_id):
        try:
            cache.resolve(image_id)
        except Exception as e:  # collected for the main thread
            errors.append(e)

    threads = [threading.Thread(target=resolve, args=(image.id,)) for image in hidden]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=10)

    assert errors == []
    assert {image.id for image in cache.get()} == {"a", "b"} | {image.id for image in hidden}


def test_fallback_image_found_again_by_requested_id(cache, strategy, clock):
    strategy.images["ami-1"] = make_image("region-1/ami-1")

    assert cache.resolve("ami-1").id == "region-1/ami-1"
    assert cache.resolve("ami-1").id == "region-1/ami-1"
    assert cache.resolve("region-1/ami-1").id == "region-1/ami-1"
    assert strategy.requested == ["ami-1"]
    assert [image.id for image in cache.get()].count("region-1/ami-1") == 1

    clock.advance(60)
    cache.resolve("ami-1")
    assert strategy.requested == ["ami-1", "ami-1"]
