"""Tests for the memo tables and invalidation primitives."""

from __future__ import annotations

from habitengine.services.cache import MISSING, EngineCache, HabitScopedTable, MemoTable


class TestMemoTable:
    def test_missing_is_distinct_from_none(self):
        table = MemoTable("t", max_size=10)
        table.put("a", None)

        assert table.get("a") is None
        assert table.get("b") is MISSING

    def test_flushes_wholesale_past_ceiling(self):
        """Exceeding the ceiling clears everything before the next insert."""
        table = MemoTable("t", max_size=3)
        for key in "abcd":
            table.put(key, key.upper())
        assert len(table) == 4

        table.put("e", "E")

        assert len(table) == 1
        assert table.get("a") is MISSING
        assert table.get("e") == "E"
        assert table.flushes == 1

    def test_discard_ignores_unknown_keys(self):
        table = MemoTable("t", max_size=3)
        table.discard("nope")
        assert len(table) == 0


class TestHabitScopedTable:
    def test_tables_are_per_habit(self):
        scoped = HabitScopedTable("s", max_size=5)
        scoped.table_for("a").put("2024-01-01", 1)
        scoped.table_for("b").put("2024-01-01", 2)

        assert scoped.peek("a", "2024-01-01") == 1
        assert scoped.peek("c", "2024-01-01") is MISSING
        assert len(scoped) == 2

    def test_drop_date_touches_every_habit(self):
        scoped = HabitScopedTable("s", max_size=5)
        scoped.table_for("a").put("2024-01-01", 1)
        scoped.table_for("b").put("2024-01-01", 2)
        scoped.table_for("b").put("2024-01-02", 3)

        scoped.drop_date("2024-01-01")

        assert len(scoped) == 1


class TestEngineCache:
    def _filled(self) -> EngineCache:
        cache = EngineCache(max_size=50)
        for habit_id in ("a", "b"):
            cache.schedules.table_for(habit_id).put("2024-01-01", None)
            cache.appearances.table_for(habit_id).put("2024-01-01", True)
            cache.streaks.table_for(habit_id).put("2024-01-01", 3)
        cache.day_summaries.put("2024-01-01", object())
        cache.active_habits.put("2024-01-01", ())
        return cache

    def test_invalidate_habit_keeps_other_habits(self):
        cache = self._filled()
        cache.invalidate_habit("a")

        stats = cache.stats()
        assert stats["schedules"] == stats["appearances"] == stats["streaks"] == 1
        assert stats["day_summaries"] == 1

    def test_invalidate_date_clears_date_keyed_tables(self):
        cache = self._filled()
        cache.invalidate_date("2024-01-01")

        stats = cache.stats()
        assert stats["day_summaries"] == stats["active_habits"] == 0
        assert stats["streaks"] == 2

    def test_invalidate_date_change_drops_named_streaks(self):
        cache = self._filled()
        cache.invalidate_date_change("2024-01-01", ["b"])

        assert cache.streaks.peek("a", "2024-01-01") == 3
        assert cache.streaks.peek("b", "2024-01-01") is MISSING
        assert cache.stats()["day_summaries"] == 0

    def test_invalidate_all(self):
        cache = self._filled()
        cache.invalidate_all()

        assert all(count == 0 for count in cache.stats().values())

    def test_engines_do_not_share_caches(self, make_engine, habit_factory):
        """Two engines built side by side keep independent tables."""
        habit = habit_factory()
        first = make_engine([habit])
        second = make_engine([habit])

        first.streak(habit, "2024-01-05")

        assert first.cache_stats()["streaks"] == 1
        assert second.cache_stats()["streaks"] == 0


class TestEngineInvalidation:
    def test_schedule_edit_needs_habit_invalidation(self, make_engine, habit_factory):
        """Replacing the habit list starts from a cold cache."""
        habit = habit_factory("h")
        engine = make_engine([habit])
        assert engine.is_due("h", "2024-01-02")

        retired = habit_factory("h", graduated_on="2024-01-02")
        engine.set_habits([retired])

        assert not engine.is_due("h", "2024-01-02")
        assert engine.get_habit("h") is retired

    def test_invalidate_habit_forces_recompute(self, make_engine, habit_factory, store):
        habit = habit_factory("h")
        engine = make_engine([habit])
        assert engine.streak("h", "2024-01-01") == 0

        store.set_status("h", "2024-01-01", "Morning", 1)
        assert engine.streak("h", "2024-01-01") == 0
        engine.invalidate_habit("h")
        assert engine.streak("h", "2024-01-01") == 1

    def test_invalidate_all_resets_every_table(self, make_engine, habit_factory):
        engine = make_engine([habit_factory()])
        engine.summarize("2024-01-03")
        assert any(engine.cache_stats().values())

        engine.invalidate_all()

        assert not any(engine.cache_stats().values())
