import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_analyzer.core.errors import MalformedResponse  # noqa: E402
from resume_analyzer.normalize.normalize_analysis import (  # noqa: E402
    normalize_analysis,
    normalize_tip,
    parse_analysis_payload,
)
from resume_analyzer.normalize.utils import strip_code_fences  # noqa: E402
from resume_analyzer.schemas.analysis import TIP_CATEGORIES  # noqa: E402


class AnalysisNormalizationTests(unittest.TestCase):
    def test_empty_payload_gets_every_default(self):
        result = normalize_analysis({})
        self.assertEqual(result.match_score, 0)
        self.assertEqual(result.summary, "")
        self.assertEqual(result.actionable_tips, [])
        for buckets in (result.found_keywords, result.missing_keywords):
            self.assertEqual(buckets.hard_skills, [])
            self.assertEqual(buckets.soft_skills, [])
            self.assertEqual(buckets.certifications, [])

    def test_partial_buckets_keep_order_and_duplicates(self):
        result = normalize_analysis(
            {"foundKeywords": {"hardSkills": ["Go", "SQL", "Go", 42, "  "], "softSkills": "Teamwork"}}
        )
        self.assertEqual(result.found_keywords.hard_skills, ["Go", "SQL", "Go"])
        self.assertEqual(result.found_keywords.soft_skills, [])
        self.assertEqual(result.found_keywords.certifications, [])

    def test_invalid_tip_category_is_coerced_to_content(self):
        for category in ("branding", "", None, "Formatting", 7):
            with self.subTest(category=category):
                tip = normalize_tip({"category": category, "suggestion": "x", "priority": "high"})
                self.assertEqual(tip.category, "content")

    def test_valid_tip_categories_pass_through(self):
        for category in TIP_CATEGORIES:
            with self.subTest(category=category):
                self.assertEqual(normalize_tip({"category": category}).category, category)

    def test_tip_priority_and_suggestion_defaults(self):
        tip = normalize_tip({"category": "impact", "priority": "urgent"})
        self.assertEqual(tip.priority, "medium")
        self.assertEqual(tip.suggestion, "")

    def test_non_object_tips_are_skipped(self):
        result = normalize_analysis({"actionableTips": ["just a string", {"category": "keywords"}]})
        self.assertEqual(len(result.actionable_tips), 1)
        self.assertEqual(result.actionable_tips[0].category, "keywords")

    def test_match_score_coercion(self):
        cases = [
            (None, 0),
            ("eighty", 0),
            (True, 0),
            ("85", 85),
            (64.5, 65),
            (140, 100),
            (-3, 0),
            (float("nan"), 0),
            (10**400, 100),
            (-(10**400), 0),
        ]
        for raw, expected in cases:
            with self.subTest(raw=raw):
                self.assertEqual(normalize_analysis({"matchScore": raw}).match_score, expected)

    def test_oversized_integer_score_is_clamped_not_fatal(self):
        payload = parse_analysis_payload('{"matchScore": 1' + "0" * 400 + ', "summary": "ok"}')
        result = normalize_analysis(payload)
        self.assertEqual(result.match_score, 100)
        self.assertEqual(result.summary, "ok")

    def test_parse_rejects_non_json(self):
        with self.assertRaises(MalformedResponse):
            parse_analysis_payload("Sure! Here is your analysis.")

    def test_strip_code_fences(self):
        self.assertEqual(strip_code_fences('```json\n{"a": 1}\n```'), '{"a": 1}')
        self.assertEqual(strip_code_fences('text ```\n{"a": 1}```'), '{"a": 1}')
        self.assertEqual(strip_code_fences('{"a": 1}'), '{"a": 1}')


if __name__ == "__main__":
    unittest.main()
