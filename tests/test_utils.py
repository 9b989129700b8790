import json
import unittest

from utils import FALLBACK_DESCRIPTION, migrate_achievements, normalize_achievements, parse_tags, format_tags


class TestTags(unittest.TestCase):

    def test_parse_trims_and_drops_empty_entries(self):
        self.assertEqual(parse_tags(" modern, residential,, , glass "), ["modern", "residential", "glass"])

    def test_parse_empty(self):
        self.assertEqual(parse_tags(""), [])
        self.assertEqual(parse_tags(None), [])

    def test_format_keeps_order(self):
        self.assertEqual(format_tags(["b", "a"]), "b, a")


class TestAchievementMigration(unittest.TestCase):

    def test_legacy_strings_get_positional_defaults(self):
        result, migrated = migrate_achievements(["Award Title A", "Award Title B"])

        self.assertTrue(migrated)
        self.assertEqual(result, [
            {"icon": "Award", "title": "Award Title A",
             "description": "Multiple awards for innovative architectural solutions"},
            {"icon": "Users", "title": "Award Title B",
             "description": "Successfully completed projects for diverse clientele"},
        ])

    def test_legacy_entries_past_the_default_table_use_star(self):
        result = normalize_achievements(["a", "b", "c", "d", "e"])
        self.assertEqual([a["icon"] for a in result], ["Award", "Users", "Building", "Palette", "Star"])
        self.assertEqual(result[4]["description"], FALLBACK_DESCRIPTION)

    def test_structured_entries_are_kept(self):
        stored = [{"icon": "Trophy", "title": "Best Interior 2023", "description": "Regional award"}]
        result, migrated = migrate_achievements(stored)
        self.assertFalse(migrated)
        self.assertEqual(result, stored)

    def test_json_encoded_entries_are_decoded(self):
        encoded = json.dumps({"icon": "Heart", "title": "Community work", "description": "Pro bono designs"})
        result, migrated = migrate_achievements([encoded])
        self.assertTrue(migrated)
        self.assertEqual(result[0]["icon"], "Heart")
        self.assertEqual(result[0]["title"], "Community work")

    def test_incomplete_objects_fall_back(self):
        result = normalize_achievements([{"title": "No icon"}, 42])
        self.assertEqual(result[0], {"icon": "Star", "title": "Achievement", "description": FALLBACK_DESCRIPTION})
        self.assertEqual(result[1]["title"], "Achievement")

    def test_empty(self):
        self.assertEqual(migrate_achievements(None), ([], False))


if __name__ == "__main__":
    unittest.main()
