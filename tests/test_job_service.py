import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_analyzer.core.errors import AnalysisIncomplete, JobSearchUnavailable  # noqa: E402
from resume_analyzer.features.skill_pipeline import SkillSet, extract_skills  # noqa: E402
from resume_analyzer.schemas.analysis import AnalysisResult, KeywordBuckets  # noqa: E402
from resume_analyzer.schemas.jobs import JobListing, RawListing  # noqa: E402
from resume_analyzer.schemas.resume import ResumeRecord  # noqa: E402
from resume_analyzer.services.job_service import (  # noqa: E402
    JobMatcher,
    build_search_query,
    calculate_match_score,
    get_mock_jobs,
    rank_listings,
    require_analysis,
    score_listing,
)

TEXT = "Frontend engineer with React and Node.js experience across four product teams."


def _listing(title, description="", score=None, listing_id=None):
    return JobListing(
        id=listing_id,
        title=title,
        company="Acme",
        location="Remote",
        description=description,
        source="Test",
        match_score=score,
    )


def _record(hard=(), soft=(), certs=()):
    record = ResumeRecord(id="r1", owner_id="u1", original_filename="cv.pdf", extracted_text=TEXT)
    return record.complete(
        AnalysisResult(
            match_score=70,
            found_keywords=KeywordBuckets(
                hard_skills=list(hard), soft_skills=list(soft), certifications=list(certs)
            ),
        )
    )


class FakeSearchClient:
    def __init__(self, results=None, error=None, enabled=True):
        self.results = results or []
        self.error = error
        self._enabled = enabled
        self.calls = []

    @property
    def enabled(self):
        return self._enabled

    def search(self, query, location, page):
        self.calls.append((query, location, page))
        if self.error is not None:
            raise self.error
        return self.results


class MatchScoringTests(unittest.TestCase):
    def test_half_of_skills_present(self):
        skills = SkillSet(hard_skills=["React", "Node.js"])
        listing = _listing("Frontend Developer", "We use React and TypeScript daily.")

        scored = score_listing(listing, skills)
        self.assertEqual(scored.match_score, 50)
        self.assertEqual(scored.matched_skills, ["React"])
        self.assertEqual(scored.missing_skills, ["Node.js"])

    def test_matching_is_case_insensitive_and_covers_title(self):
        skills = SkillSet(hard_skills=["python"], soft_skills=["Leadership"])
        listing = _listing("Senior PYTHON Engineer", "Show LEADERSHIP in design reviews.")
        self.assertEqual(calculate_match_score(listing, skills), 100)

    def test_soft_skills_count_but_are_never_missing(self):
        skills = SkillSet(hard_skills=["Go"], soft_skills=["Mentoring"])
        scored = score_listing(_listing("Backend Engineer", "Go services at scale."), skills)
        self.assertEqual(scored.match_score, 50)
        self.assertEqual(scored.missing_skills, [])

    def test_certifications_are_not_part_of_the_corpus(self):
        skills = SkillSet(hard_skills=["AWS"], certifications=["CKA"])
        self.assertEqual(calculate_match_score(_listing("Cloud Engineer", "AWS and CKA"), skills), 100)

    def test_empty_skills_give_neutral_score(self):
        self.assertEqual(calculate_match_score(_listing("Anything"), SkillSet()), 50)

    def test_score_rounds_half_up(self):
        skills = SkillSet(hard_skills=["a1", "b2", "c3", "d4", "e5", "f6", "g7", "h8"])
        listing = _listing("Role", "a1 b2 c3")
        # 3/8 = 37.5
        self.assertEqual(calculate_match_score(listing, skills), 38)

    def test_ranking_is_stable_for_equal_scores(self):
        listings = [
            _listing("A", score=40, listing_id="a"),
            _listing("B", score=90, listing_id="b"),
            _listing("C", score=40, listing_id="c"),
            _listing("D", score=10, listing_id="d"),
        ]
        ranked = rank_listings(listings)
        self.assertEqual([item.id for item in ranked], ["b", "a", "c", "d"])


class SearchQueryTests(unittest.TestCase):
    def test_uses_first_three_hard_skills(self):
        skills = SkillSet(hard_skills=["React", "Node.js", "GraphQL", "Docker"], soft_skills=["Teamwork"])
        self.assertEqual(build_search_query(skills), "React Node.js GraphQL")

    def test_defaults_when_no_hard_skills(self):
        self.assertEqual(build_search_query(SkillSet(soft_skills=["Teamwork"])), "software developer")

    def test_extract_skills_from_completed_record(self):
        skills = extract_skills(_record(hard=["React"], soft=["Teamwork"], certs=["AWS SAA"]))
        self.assertEqual(skills.all_skills, ["React", "Teamwork"])
        self.assertEqual(skills.certifications, ["AWS SAA"])

    def test_extract_skills_without_analysis_is_empty(self):
        record = ResumeRecord(id="r2", owner_id="u1", original_filename="cv.pdf", extracted_text=TEXT)
        self.assertEqual(extract_skills(record), SkillSet())


class JobMatcherTests(unittest.TestCase):
    def test_mock_catalog_has_three_listings(self):
        mock = get_mock_jobs()
        self.assertEqual(len(mock), 3)
        self.assertTrue(all(item.source == "Mock" for item in mock))
        self.assertEqual(
            [item.title for item in mock],
            ["Frontend Developer", "Full Stack Developer", "Software Engineer"],
        )

    def test_search_failure_falls_back_to_ranked_mock_catalog(self):
        client = FakeSearchClient(error=JobSearchUnavailable("Adzuna returned HTTP 500."))
        matcher = JobMatcher(client, default_location="in")

        ranked = matcher.match(_record(hard=["React", "Node.js"]))

        self.assertEqual(client.calls, [("React Node.js", "in", 1)])
        self.assertEqual(len(ranked), 3)
        self.assertEqual(ranked[0].title, "Full Stack Developer")
        self.assertEqual(ranked[0].match_score, 100)
        self.assertEqual(ranked[1].title, "Frontend Developer")
        self.assertEqual(ranked[1].match_score, 50)
        self.assertEqual(ranked[2].match_score, 0)

    def test_unexpected_client_error_also_falls_back(self):
        matcher = JobMatcher(FakeSearchClient(error=RuntimeError("socket closed")), default_location="in")
        self.assertEqual(len(matcher.match(_record(hard=["Java"]))), 3)

    def test_disabled_client_is_never_called(self):
        client = FakeSearchClient(enabled=False)
        listings = JobMatcher(client, default_location="in").match(_record(hard=["Java"]))
        self.assertEqual(client.calls, [])
        self.assertEqual(len(listings), 3)

    def test_empty_results_fall_back_to_mock(self):
        client = FakeSearchClient(results=[])
        listings = JobMatcher(client, default_location="in").match(_record(hard=["Java"]))
        self.assertEqual({item.source for item in listings}, {"Mock"})

    def test_raw_listings_are_converted_and_scored(self):
        client = FakeSearchClient(
            results=[
                RawListing(
                    id="1",
                    title="Senior React Engineer",
                    company="Globex",
                    location="Pune",
                    description="React and Node.js",
                    url="https://jobs.example/1",
                    salary_min=1200000,
                    salary_max=1800000,
                    category="IT Jobs",
                ),
                RawListing(id="2", title="Junior Developer", description="HTML and CSS"),
            ]
        )
        matcher = JobMatcher(client, default_location="in")

        first, second = matcher.match(_record(hard=["React", "Node.js"]), location="IN", page=2)

        self.assertEqual(client.calls, [("React Node.js", "in", 2)])
        self.assertEqual(first.source, "Adzuna")
        self.assertEqual(first.salary, "₹12.0 - ₹18.0 LPA")
        self.assertFalse(first.salary_estimated)
        self.assertEqual(first.match_score, 100)
        self.assertEqual(second.company, "Company not listed")
        self.assertEqual(second.location, "in")
        self.assertEqual(second.category, "General")
        self.assertEqual(second.salary, "₹3.0 - ₹6.0 LPA (Est.)")
        self.assertTrue(second.salary_estimated)
        self.assertEqual(second.missing_skills, ["React", "Node.js"])

    def test_non_estimating_region_reports_not_specified(self):
        client = FakeSearchClient(results=[RawListing(id="1", title="Engineer", description="Go")])
        (listing,) = JobMatcher(client).match(_record(hard=["Go"]), location="gb")
        self.assertEqual(listing.salary, "Not specified")
        self.assertFalse(listing.salary_estimated)

    def test_require_analysis(self):
        pending = ResumeRecord(id="r3", owner_id="u1", original_filename="cv.pdf", extracted_text=TEXT)
        with self.assertRaises(AnalysisIncomplete):
            require_analysis(pending)
        failed = pending.fail(error_code="ai_quota_exceeded", error_message="quota")
        with self.assertRaises(AnalysisIncomplete):
            require_analysis(failed)
        completed = _record(hard=["Go"])
        self.assertIs(require_analysis(completed), completed)


if __name__ == "__main__":
    unittest.main()
