import sys
import unittest
from pathlib import Path

import httpx

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_analyzer.core.errors import JobSearchUnavailable  # noqa: E402
from resume_analyzer.integrations.adzuna import AdzunaClient, parse_adzuna_result  # noqa: E402

SAMPLE_RESULT = {
    "id": 4411,
    "title": " Frontend Developer ",
    "company": {"display_name": "Globex"},
    "location": {"display_name": "Bangalore, Karnataka"},
    "description": "React, TypeScript and design systems.",
    "redirect_url": "https://www.adzuna.in/details/4411",
    "salary_min": 800000,
    "salary_max": 1200000,
    "created": "2024-05-02T10:00:00Z",
    "category": {"label": "IT Jobs", "tag": "it-jobs"},
}


def _client(handler, **kwargs):
    return AdzunaClient(
        app_id=kwargs.pop("app_id", "abc123"),
        app_key=kwargs.pop("app_key", "secret"),
        base_url="https://api.adzuna.test/v1/api",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


class AdzunaClientTests(unittest.TestCase):
    def test_search_builds_request_and_parses_results(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"count": 1, "results": [SAMPLE_RESULT, "junk"]})

        listings = _client(handler, results_per_page=5).search("React Node.js", "IN", 2)

        request = seen[0]
        self.assertEqual(request.url.path, "/v1/api/jobs/in/search/2")
        self.assertEqual(request.url.params["what"], "React Node.js")
        self.assertEqual(request.url.params["results_per_page"], "5")
        self.assertEqual(request.url.params["sort_by"], "relevance")
        self.assertEqual(request.url.params["salary_include_unknown"], "1")
        self.assertEqual(request.url.params["app_id"], "abc123")

        (listing,) = listings
        self.assertEqual(listing.id, "4411")
        self.assertEqual(listing.title, "Frontend Developer")
        self.assertEqual(listing.company, "Globex")
        self.assertEqual(listing.url, "https://www.adzuna.in/details/4411")
        self.assertEqual(listing.salary_min, 800000.0)
        self.assertEqual(listing.category, "IT Jobs")

    def test_http_error_becomes_unavailable(self):
        client = _client(lambda request: httpx.Response(500, json={"error": "boom"}))
        with self.assertRaises(JobSearchUnavailable) as ctx:
            client.search("Go", "us", 1)
        self.assertIn("500", str(ctx.exception))

    def test_transport_error_becomes_unavailable(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with self.assertRaises(JobSearchUnavailable):
            _client(handler).search("Go", "us", 1)

    def test_unexpected_shape_becomes_unavailable(self):
        with self.assertRaises(JobSearchUnavailable):
            _client(lambda request: httpx.Response(200, json={"items": []})).search("Go", "us", 1)
        with self.assertRaises(JobSearchUnavailable):
            _client(lambda request: httpx.Response(200, text="<html>")).search("Go", "us", 1)

    def test_invalid_location_is_rejected_without_request(self):
        calls = []
        client = _client(lambda request: calls.append(request) or httpx.Response(200, json={"results": []}))
        with self.assertRaises(JobSearchUnavailable):
            client.search("Go", "../etc", 1)
        self.assertEqual(calls, [])

    def test_placeholder_credentials_disable_client(self):
        for app_id, app_key in (("", "key"), ("id", None), ("your_app_id", "key"), ("id", "your_api_key")):
            with self.subTest(app_id=app_id, app_key=app_key):
                client = AdzunaClient(app_id=app_id, app_key=app_key)
                self.assertFalse(client.enabled)
                with self.assertRaises(JobSearchUnavailable):
                    client.search("Go", "us", 1)

    def test_parse_tolerates_missing_fields(self):
        listing = parse_adzuna_result({"title": "Engineer", "salary_min": "lots"})
        self.assertIsNone(listing.id)
        self.assertIsNone(listing.company)
        self.assertIsNone(listing.salary_min)
        self.assertEqual(listing.description, "")


if __name__ == "__main__":
    unittest.main()
