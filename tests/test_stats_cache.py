import threading
import unittest

from parkstats.records import RunRecord
from parkstats.stats_cache import StatsCache, fingerprint


class _FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def _runs() -> list[RunRecord]:
    return [
        RunRecord(venue="Whiteley parkrun", date="05/07/2025", time="24:24"),
        RunRecord(venue="Bushy parkrun", date="12/07/2025", time="22:10"),
    ]


class TestStatsCache(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = _FakeClock()
        self.cache = StatsCache(ttl_seconds=600, clock=self.clock)
        self.calls = 0

    def _compute(self) -> list[str]:
        self.calls += 1
        return [f"result-{self.calls}"]

    def test_hit_within_ttl(self) -> None:
        first = self.cache.get_or_compute("venue_stats", _runs(), self._compute)
        self.clock.now += 599
        second = self.cache.get_or_compute("venue_stats", _runs(), self._compute)
        self.assertEqual(self.calls, 1)
        self.assertEqual(first, second)
        self.assertEqual(self.cache.stats(), {"entries": 1, "hits": 1, "misses": 1})

    def test_expired_entry_is_recomputed_and_overwritten(self) -> None:
        self.cache.get_or_compute("venue_stats", _runs(), self._compute)
        self.clock.now += 600
        refreshed = self.cache.get_or_compute("venue_stats", _runs(), self._compute)
        self.assertEqual(refreshed, ["result-2"])
        self.assertEqual(len(self.cache), 1)
        self.clock.now += 10
        self.assertEqual(self.cache.get_or_compute("venue_stats", _runs(), self._compute), ["result-2"])

    def test_changed_records_miss(self) -> None:
        self.cache.get_or_compute("venue_stats", _runs(), self._compute)
        changed = _runs()
        changed[1] = RunRecord(venue="Bushy parkrun", date="12/07/2025", time="22:11")
        self.assertEqual(self.cache.get_or_compute("venue_stats", changed, self._compute), ["result-2"])
        self.assertEqual(len(self.cache), 2)

    def test_operation_and_extra_key_parts_are_separate(self) -> None:
        self.cache.get_or_compute("activity_days", _runs(), self._compute, 2024)
        self.cache.get_or_compute("activity_days", _runs(), self._compute, 2025)
        self.cache.get_or_compute("venue_stats", _runs(), self._compute)
        self.assertEqual(self.calls, 3)

    def test_clear_forces_recompute(self) -> None:
        self.cache.get_or_compute("venue_stats", _runs(), self._compute)
        self.cache.clear()
        self.assertEqual(len(self.cache), 0)
        self.assertEqual(self.cache.get_or_compute("venue_stats", _runs(), self._compute), ["result-2"])

    def test_clear_operation_keeps_other_operations(self) -> None:
        self.cache.get_or_compute("venue_stats", _runs(), self._compute)
        self.cache.get_or_compute("activity_days", _runs(), self._compute, 2025)
        self.assertEqual(self.cache.clear_operation("venue_stats"), 1)
        self.assertEqual(len(self.cache), 1)

    def test_fingerprint_is_content_based(self) -> None:
        self.assertEqual(fingerprint(_runs()), fingerprint(_runs()))
        self.assertNotEqual(fingerprint(_runs()), fingerprint(list(reversed(_runs()))))
        self.assertEqual(fingerprint([]), fingerprint([]))

    def test_concurrent_access(self) -> None:
        errors: list[Exception] = []

        def worker() -> None:
            try:
                for _ in range(50):
                    self.cache.get_or_compute("venue_stats", _runs(), lambda: ["value"])
            except Exception as exc:  # pragma: no cover - surfaced through the assertion
                errors.append(exc)

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        self.assertEqual(errors, [])
        self.assertEqual(len(self.cache), 1)


if __name__ == "__main__":
    unittest.main()
