import unittest
from datetime import date, timedelta

from weekplan.domain.Week import Week
from weekplan.logic.weeks.generator import (
    first_monday, format_date_range, initialize_weeks, reconcile_weeks
)


class TestWeekGeneration(unittest.TestCase):

    def test_first_monday(self):
        self.assertEqual(first_monday(2026), date(2026, 1, 5))
        # 2024 starts on a Monday
        self.assertEqual(first_monday(2024), date(2024, 1, 1))
        self.assertEqual(first_monday(2023), date(2023, 1, 2))

    def test_52_weeks_with_consecutive_ranges(self):
        for year in range(2000, 2041):
            weeks = initialize_weeks(year)
            self.assertEqual(len(weeks), 52, year)
            self.assertEqual([w.id for w in weeks], list(range(1, 53)))
            start = first_monday(year)
            self.assertEqual(start.weekday(), 0)
            for week in weeks:
                week_start = start + timedelta(days=7 * (week.id - 1))
                self.assertEqual(week.date_range, format_date_range(week_start))
                self.assertEqual(week.year, year)
                self.assertEqual(week.events, [])
                self.assertFalse(week.expanded)
                self.assertEqual((week.theme1, week.theme2), ("", ""))

    def test_2026_labels(self):
        weeks = initialize_weeks(2026)
        self.assertEqual(weeks[0].date_range, "Jan 5 - Jan 11")
        self.assertEqual(weeks[1].date_range, "Jan 12 - Jan 18")
        self.assertEqual(weeks[51].date_range, "Dec 28 - Jan 3")

    def test_generation_is_deterministic(self):
        self.assertEqual(initialize_weeks(2031), initialize_weeks(2031))

    def test_reconcile_fills_missing_and_drops_invalid(self):
        loaded = [
            Week(id=3, year=2026, theme1="Kept", date_range="Jan 19 - Jan 25"),
            Week(id=3, year=2026, theme1="Duplicate"),
            Week(id=60, year=2026, theme1="Out of range"),
            Week(id=1, year=2026, theme1="No label"),
        ]
        weeks = reconcile_weeks(2026, loaded)
        self.assertEqual([w.id for w in weeks], list(range(1, 53)))
        self.assertEqual(weeks[2].theme1, "Kept")
        self.assertEqual(weeks[0].theme1, "No label")
        self.assertEqual(weeks[0].date_range, "Jan 5 - Jan 11")
        self.assertEqual(weeks[1], initialize_weeks(2026)[1])


if __name__ == '__main__':
    unittest.main()
