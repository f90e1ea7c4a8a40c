"""Tests for the in-memory record store."""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone

import pytest

from translateswift.store import RecordStore

T0 = datetime(2026, 1, 1, tzinfo=timezone.utc)


def _ticking_clock(step_seconds: float = 1.0):
    """Clock that advances by step_seconds on every call."""
    calls = {"n": 0}

    def clock() -> datetime:
        value = T0 + timedelta(seconds=step_seconds * calls["n"])
        calls["n"] += 1
        return value

    return clock


class TestCreate:
    """Identifier assignment and timestamping."""

    def test_first_id_is_one(self):
        store = RecordStore()
        record = store.create("Hello", "Hola", "es")
        assert record.id == 1

    def test_ids_strictly_increase(self):
        store = RecordStore()
        ids = [store.create(f"t{i}", f"x{i}", "es").id for i in range(5)]
        assert ids == [1, 2, 3, 4, 5]

    def test_fields_are_stored(self):
        store = RecordStore(clock=lambda: T0)
        record = store.create("Hello", "Hola", "es")
        assert record.source_text == "Hello"
        assert record.translated_text == "Hola"
        assert record.target_language == "es"
        assert record.created_at == T0

    def test_default_clock_is_utc_aware(self):
        record = RecordStore().create("Hello", "Hola", "es")
        assert record.created_at.tzinfo is not None

    def test_records_are_immutable(self):
        record = RecordStore().create("Hello", "Hola", "es")
        with pytest.raises(AttributeError):
            record.translated_text = "changed"

    def test_len_tracks_inserts(self):
        store = RecordStore()
        assert len(store) == 0
        store.create("a", "a", "es")
        store.create("b", "b", "fr")
        assert len(store) == 2


class TestRecent:
    """Recency ordering and limit handling."""

    def test_empty_store_returns_empty(self):
        assert RecordStore().recent(10) == []

    def test_most_recent_first(self):
        store = RecordStore(clock=_ticking_clock())
        store.create("Hello", "Hola", "es")
        store.create("Bye", "Au revoir", "fr")

        result = store.recent(1)
        assert len(result) == 1
        assert result[0].source_text == "Bye"

    def test_descending_order(self):
        store = RecordStore(clock=_ticking_clock())
        for i in range(4):
            store.create(f"t{i}", f"x{i}", "es")
        assert [r.id for r in store.recent(10)] == [4, 3, 2, 1]

    def test_equal_timestamps_break_ties_by_id(self):
        store = RecordStore(clock=lambda: T0)
        for i in range(3):
            store.create(f"t{i}", f"x{i}", "es")
        assert [r.id for r in store.recent(10)] == [3, 2, 1]

    def test_orders_by_timestamp_before_id(self):
        """A later timestamp wins even with a lower identifier."""
        stamps = iter([T0 + timedelta(seconds=5), T0])
        store = RecordStore(clock=lambda: next(stamps))
        store.create("first", "x", "es")
        store.create("second", "y", "es")
        assert [r.id for r in store.recent(10)] == [1, 2]

    @pytest.mark.parametrize("limit", [0, -1, -100])
    def test_non_positive_limit_returns_empty(self, limit):
        store = RecordStore()
        store.create("Hello", "Hola", "es")
        assert store.recent(limit) == []

    def test_limit_larger_than_store_returns_all(self):
        store = RecordStore()
        for i in range(3):
            store.create(f"t{i}", f"x{i}", "es")
        assert len(store.recent(50)) == 3

    def test_limit_bounds_result(self):
        store = RecordStore()
        for i in range(7):
            store.create(f"t{i}", f"x{i}", "es")
        for n in range(1, 10):
            result = store.recent(n)
            assert len(result) == min(n, 7)

    def test_repeated_reads_are_identical(self):
        store = RecordStore(clock=_ticking_clock(0.0))
        for i in range(5):
            store.create(f"t{i}", f"x{i}", "es")
        assert store.recent(3) == store.recent(3)


class TestBoundedStore:
    """Optional eviction when max_records is set."""

    def test_evicts_oldest(self):
        store = RecordStore(max_records=2, clock=_ticking_clock())
        for i in range(4):
            store.create(f"t{i}", f"x{i}", "es")
        assert len(store) == 2
        assert [r.id for r in store.recent(10)] == [4, 3]

    def test_ids_keep_increasing_after_eviction(self):
        store = RecordStore(max_records=1)
        store.create("a", "a", "es")
        store.create("b", "b", "es")
        assert store.create("c", "c", "es").id == 3

    @pytest.mark.parametrize("bad", [0, -5])
    def test_rejects_non_positive_bound(self, bad):
        with pytest.raises(ValueError):
            RecordStore(max_records=bad)


class TestConcurrentCreate:
    """Concurrent creates never duplicate ids or lose inserts."""

    def test_fifty_threads(self):
        store = RecordStore()

        with ThreadPoolExecutor(max_workers=16) as pool:
            records = list(
                pool.map(lambda i: store.create(f"t{i}", f"x{i}", "es"), range(50))
            )

        ids = sorted(r.id for r in records)
        assert len(store) == 50
        assert ids == list(range(1, 51))
        assert sorted(r.id for r in store.recent(100)) == ids
