import unittest

from weekplan.logic.migration.schema import (
    CURRENT_VERSION, detect_version, migrate_record, migrate_records
)


class TestSchemaMigration(unittest.TestCase):

    def test_single_theme_record_is_split(self):
        legacy = {"id": 1, "theme": "Focus", "dateRange": "Jan 5 - Jan 11", "events": [], "expanded": False}
        self.assertEqual(detect_version(legacy), 1)
        migrated = migrate_record(legacy)
        self.assertEqual(migrated["theme1"], "Focus")
        self.assertEqual(migrated["theme2"], "")
        self.assertNotIn("theme", migrated)
        self.assertEqual(detect_version(migrated), CURRENT_VERSION)
        # input left as-is
        self.assertIn("theme", legacy)

    def test_empty_legacy_theme(self):
        self.assertEqual(migrate_record({"id": 2, "theme": None})["theme1"], "")

    def test_current_record_unchanged(self):
        record = {"id": 1, "theme1": "A", "theme2": "B", "events": []}
        self.assertEqual(migrate_record(record), record)

    def test_migrate_records_counts_and_is_idempotent(self):
        records = [{"id": 1, "theme": "Old"}, {"id": 2, "theme1": "New", "theme2": ""}]
        once, changed = migrate_records(records)
        self.assertEqual(changed, 1)
        twice, changed_again = migrate_records(once)
        self.assertEqual(changed_again, 0)
        self.assertEqual(once, twice)

    def test_rejects_non_objects(self):
        with self.assertRaises(ValueError):
            migrate_record(["not", "a", "week"])
        with self.assertRaises(ValueError):
            migrate_records({"id": 1})


if __name__ == '__main__':
    unittest.main()
