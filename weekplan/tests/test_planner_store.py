import threading
import unittest

from weekplan.infra.Calendar_Repository import CalendarRepository
from weekplan.infra.Storage import MemoryStorage
from weekplan.logic.planner.planner import Planner
from weekplan.logic.planner.store import WeekStore
from weekplan.logic.weeks import initialize_weeks


def _planner(storage, **kwargs):
    kwargs.setdefault("debounce", 60)
    return Planner(storage, year=2026, password="Bruno", app_name="family-calendar",
                   purge_year=2025, **kwargs)


class TestWeekStoreLoading(unittest.TestCase):

    def test_fresh_install_generates_defaults(self):
        store = WeekStore(CalendarRepository(MemoryStorage()), 2026)
        weeks = store.load()
        self.assertEqual(weeks, initialize_weeks(2026))
        self.assertEqual(store.calendar.year, 2026)
        self.assertEqual(store.version, 0)

    def test_malformed_data_falls_back_to_defaults(self):
        storage = MemoryStorage({"family-calendar-weeks-2026": "garbage"})
        store = WeekStore(CalendarRepository(storage), 2026)
        self.assertEqual(store.load(), initialize_weeks(2026))

    def test_load_runs_legacy_cleanup(self):
        storage = MemoryStorage({"family-calendar-weeks": [
            {"id": 7, "theme": "Legacy", "dateRange": "Feb 16 - Feb 22", "events": [], "expanded": False}
        ]})
        store = WeekStore(CalendarRepository(storage), 2026, purge_year=2025)
        weeks = store.load()
        self.assertEqual(len(weeks), 52)
        self.assertEqual((weeks[6].theme1, weeks[6].theme2), ("Legacy", ""))
        self.assertTrue(storage.get_item("family-calendar-cleanup-done"))

    def test_mutation_before_load_rejected(self):
        store = WeekStore(CalendarRepository(MemoryStorage()), 2026)
        with self.assertRaises(KeyError):
            store.update_theme(1, "x")
        store.weeks = initialize_weeks(2026)
        with self.assertRaises(RuntimeError):
            store.update_theme(1, "x")


class TestWeekStoreOperations(unittest.TestCase):

    def setUp(self):
        self.store = WeekStore(CalendarRepository(MemoryStorage()), 2026)
        self.store.load()

    def test_theme_survives_reload(self):
        storage = MemoryStorage()
        planner = _planner(storage)
        planner.ensure_loaded().update_theme(1, "Focus", "Health")
        planner.shutdown()
        week = _planner(storage).ensure_loaded().get_week(1)
        self.assertEqual((week.theme1, week.theme2), ("Focus", "Health"))
        self.assertEqual(week.date_range, "Jan 5 - Jan 11")

    def test_each_edit_bumps_version(self):
        self.store.update_theme(1, "A")
        self.store.toggle_expanded(1)
        self.assertEqual(self.store.version, 2)

    def test_add_event_opens_week_and_starts_editing(self):
        event = self.store.add_event(3, now_ms=42)
        self.assertEqual(event.id, 42)
        self.assertTrue(self.store.get_week(3).expanded)
        self.assertEqual(self.store.editing_event, 42)
        self.store.stop_editing_event()
        self.assertIsNone(self.store.editing_event)

    def test_add_then_delete_restores_events(self):
        self.store.add_event(3, now_ms=1)
        before = list(self.store.get_week(3).events)
        event = self.store.add_event(3)
        self.store.delete_event(3, event.id)
        self.assertEqual(self.store.get_week(3).events, before)
        self.assertIsNone(self.store.editing_event)

    def test_update_event_text(self):
        event = self.store.add_event(4, now_ms=5)
        self.store.update_event(4, event.id, "Dentist 9am")
        self.assertEqual(self.store.get_event(4, 5).text, "Dentist 9am")

    def test_concurrent_adds_keep_every_event(self):
        threads = [threading.Thread(target=self.store.add_event, args=(1,)) for _ in range(20)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        events = self.store.get_week(1).events
        self.assertEqual(len(events), 20)
        self.assertEqual(len({e.id for e in events}), 20)
        self.assertEqual(self.store.version, 20)

    def test_start_and_stop_editing_event(self):
        event = self.store.add_event(6, now_ms=77)
        self.store.stop_editing_event()
        self.store.start_editing_event(6, event.id)
        self.assertEqual(self.store.editing_event, 77)
        self.store.stop_editing_event()
        self.assertIsNone(self.store.editing_event)
        with self.assertRaises(KeyError):
            self.store.start_editing_event(6, 999)
        self.assertIsNone(self.store.editing_event)

    def test_unknown_ids_raise_key_error(self):
        with self.assertRaises(KeyError):
            self.store.get_week(53)
        with self.assertRaises(KeyError):
            self.store.update_event(1, 999, "x")
        with self.assertRaises(KeyError):
            self.store.delete_event(1, 999)


class TestThemeEditing(unittest.TestCase):

    def setUp(self):
        self.store = WeekStore(CalendarRepository(MemoryStorage()), 2026)
        self.store.load()
        self.store.update_theme(2, "Old", "Pair")

    def test_start_copies_current_themes(self):
        self.store.start_editing_theme(2)
        self.assertEqual(self.store.editing_week, 2)
        self.assertEqual((self.store.temp_theme1, self.store.temp_theme2), ("Old", "Pair"))

    def test_finish_applies_and_clears(self):
        self.store.start_editing_theme(2)
        self.store.set_temp_themes(theme1="New")
        week = self.store.finish_editing_theme(2)
        self.assertEqual((week.theme1, week.theme2), ("New", "Pair"))
        self.assertIsNone(self.store.editing_week)
        self.assertEqual((self.store.temp_theme1, self.store.temp_theme2), ("", ""))

    def test_cancel_discards_changes(self):
        self.store.start_editing_theme(2)
        self.store.set_temp_themes("Changed", "Also")
        version = self.store.version
        self.store.cancel_editing_theme()
        self.assertEqual(self.store.get_week(2).theme1, "Old")
        self.assertEqual(self.store.version, version)
        self.assertIsNone(self.store.editing_week)

    def test_blur_first_field_waits_for_second_theme(self):
        self.store.start_editing_theme(5)
        self.store.set_temp_themes("Run", "Read")
        self.assertFalse(self.store.blur_theme1(5))
        self.assertEqual(self.store.editing_week, 5)
        self.store.set_temp_themes(theme2="  ")
        self.assertTrue(self.store.blur_theme1(5))
        self.assertEqual(self.store.get_week(5).theme1, "Run")

    def test_finish_other_week_rejected(self):
        self.store.start_editing_theme(2)
        with self.assertRaises(ValueError):
            self.store.finish_editing_theme(3)
        self.store.cancel_editing_theme()
        with self.assertRaises(ValueError):
            self.store.set_temp_themes("x")


if __name__ == '__main__':
    unittest.main()
