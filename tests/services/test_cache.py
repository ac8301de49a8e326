"""
Tests for services.cache module.
"""

import hashlib
import threading

import pytest

from predictwise.services.cache import (
    InMemoryStore,
    generate_cache_key,
    generate_file_hash,
    invalidate_user,
)


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


class TestInMemoryStore:
    """Tests for InMemoryStore."""

    def test_get_when_missing_then_none(self, clock):
        store = InMemoryStore(clock=clock)

        assert store.get("analysis:u:x:y") is None

    def test_get_when_within_ttl_then_value(self, clock):
        store = InMemoryStore(default_ttl=60, clock=clock)
        store.set("k", "report")

        clock.now += 59

        assert store.get("k") == "report"

    def test_get_when_ttl_elapsed_then_none_and_removed(self, clock):
        store = InMemoryStore(default_ttl=60, clock=clock)
        store.set("k", "report")

        clock.now += 60

        assert store.get("k") is None
        assert store.size == 0

    def test_set_when_explicit_ttl_then_overrides_default(self, clock):
        store = InMemoryStore(default_ttl=60, clock=clock)
        store.set("k", "report", ttl=5)

        clock.now += 10

        assert store.get("k") is None

    def test_set_when_full_then_least_recently_used_evicted(self, clock):
        # Arrange
        store = InMemoryStore(max_entries=2, clock=clock)
        store.set("a", 1)
        store.set("b", 2)
        store.get("a")

        # Act
        store.set("c", 3)

        # Assert
        assert store.get("b") is None
        assert store.get("a") == 1
        assert store.get("c") == 3

    def test_set_when_full_with_expired_then_expired_swept_first(self, clock):
        store = InMemoryStore(max_entries=2, clock=clock)
        store.set("short", 1, ttl=1)
        store.set("long", 2, ttl=100)
        clock.now += 5

        store.set("new", 3)

        assert store.get("long") == 2
        assert store.get("new") == 3
        assert store.size == 2

    def test_set_when_key_exists_then_replaced_without_eviction(self, clock):
        store = InMemoryStore(max_entries=2, clock=clock)
        store.set("a", 1)
        store.set("b", 2)

        store.set("a", 10)

        assert store.get("a") == 10
        assert store.get("b") == 2

    def test_expire_when_present_then_true(self, clock):
        store = InMemoryStore(clock=clock)
        store.set("k", 1)

        assert store.expire("k") is True
        assert store.expire("k") is False

    def test_keys_when_some_expired_then_only_live(self, clock):
        store = InMemoryStore(clock=clock)
        store.set("old", 1, ttl=1)
        store.set("fresh", 2, ttl=100)
        clock.now += 2

        assert store.keys() == ["fresh"]

    def test_clear_when_called_then_empty(self, clock):
        store = InMemoryStore(clock=clock)
        store.set("k", 1)

        store.clear()

        assert store.size == 0

    def test_init_when_max_entries_zero_then_raises_error(self):
        with pytest.raises(ValueError, match="max_entries must be >= 1"):
            InMemoryStore(max_entries=0)

    def test_store_when_used_from_threads_then_bounded(self):
        store = InMemoryStore(max_entries=50)

        def writer(offset: int) -> None:
            for i in range(100):
                store.set(f"k{offset}-{i}", i)
                store.get(f"k{offset}-{i // 2}")

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert store.size <= 50


class TestCacheKeys:
    """Tests for key generation helpers."""

    def test_generate_file_hash_when_bytes_then_md5(self):
        assert generate_file_hash(b"paper") == hashlib.md5(b"paper").hexdigest()

    def test_generate_cache_key_when_built_then_user_scoped_format(self):
        key = generate_cache_key([b"a", b"b"], "Physics", "Finals", "u42")

        prefix, user, hashes, context = key.split(":")
        assert prefix == "analysis"
        assert user == "u42"
        assert len(hashes) == 32
        assert len(context) == 8

    def test_generate_cache_key_when_files_reordered_then_same_key(self):
        assert generate_cache_key([b"a", b"b"], "Physics") == generate_cache_key(
            [b"b", b"a"], "Physics"
        )

    @pytest.mark.parametrize("subject,exam,user", [
        ("Chemistry", "", "anonymous"),
        ("Physics", "Midterm", "anonymous"),
        ("Physics", "", "u1"),
    ])
    def test_generate_cache_key_when_context_differs_then_different_key(self, subject, exam, user):
        base = generate_cache_key([b"a"], "Physics")

        assert generate_cache_key([b"a"], subject, exam, user) != base

    def test_generate_cache_key_when_no_user_then_anonymous(self):
        assert generate_cache_key([b"a"], "Physics").startswith("analysis:anonymous:")


class TestInvalidateUser:
    """Tests for invalidate_user()."""

    def test_invalidate_user_when_entries_exist_then_only_that_user_removed(self, clock):
        # Arrange
        store = InMemoryStore(clock=clock)
        mine = generate_cache_key([b"a"], "Physics", user_id="u1")
        also_mine = generate_cache_key([b"b"], "Physics", user_id="u1")
        theirs = generate_cache_key([b"a"], "Physics", user_id="u10")
        for key in (mine, also_mine, theirs):
            store.set(key, "report")

        # Act
        removed = invalidate_user(store, "u1")

        # Assert
        assert removed == 2
        assert store.keys() == [theirs]

    def test_invalidate_user_when_nothing_cached_then_zero(self, clock):
        assert invalidate_user(InMemoryStore(clock=clock), "u1") == 0
