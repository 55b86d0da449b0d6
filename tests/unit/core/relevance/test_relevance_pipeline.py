#!/usr/bin/env python3
"""
Unit tests for the search and match ranking pipeline.
"""

import unittest
from typing import List, Optional

from core.config_loader import RelevanceConfig, SearchConfig
from core.relevance import (
    AuditSink,
    Document,
    DocumentSource,
    JobDocument,
    Recommendation,
    RelevancePipeline,
    RelevanceTier,
    SearchQuery,
    search_scope,
)


class InMemorySource(DocumentSource):
    def __init__(self, documents: List[Document]):
        self.documents = documents
        self.calls = []

    def list_documents(self, owner_id: Optional[int] = None) -> List[Document]:
        self.calls.append(owner_id)
        return [d for d in self.documents if owner_id is None or d.owner_id == owner_id]


class RecordingAudit(AuditSink):
    def __init__(self):
        self.searches = []
        self.matches = []

    def record_search(self, query, results, user_id=None):
        self.searches.append((query, list(results), user_id))

    def record_matches(self, job_id, results):
        self.matches.append((job_id, list(results)))


class FailingAudit(AuditSink):
    def record_search(self, query, results, user_id=None):
        raise RuntimeError("history table unavailable")

    def record_matches(self, job_id, results):
        raise RuntimeError("match table unavailable")


class TestSearch(unittest.TestCase):

    def setUp(self):
        self.documents = [
            Document(id=1, text="Experienced Python developer", owner_id=10, label="a.txt"),
            Document(id=2, text="Java engineer", owner_id=10, label="b.txt"),
            Document(id=3, text="Accountant managing ledgers", owner_id=20, label="c.txt"),
            Document(id=4, text="Python backend work", owner_id=20, label="d.txt"),
        ]
        self.audit = RecordingAudit()
        self.pipeline = RelevancePipeline(InMemorySource(self.documents), audit=self.audit)

    def test_overlapping_resume_ranked_and_unrelated_excluded(self):
        results = self.pipeline.search(SearchQuery("Python developer", k=3))
        ids = [r.document.id for r in results]

        self.assertEqual(ids, [1, 4])
        self.assertNotIn(2, ids)
        self.assertNotIn(3, ids)
        self.assertAlmostEqual(results[0].score, 2 / 3)
        self.assertEqual(results[0].tier, RelevanceTier.HIGH)
        self.assertEqual(results[0].snippets, ["Experienced Python developer"])

    def test_redacted_snippets_cut_from_redacted_text(self):
        text = "Python developer reachable at carol.smith@example.com daily. Phone 555.123.4567 for python roles"
        pipeline = RelevancePipeline(InMemorySource([Document(id=1, text=text)]))

        result = pipeline.search(SearchQuery("python", k=1))[0]

        self.assertEqual(result.redacted_snippets, [
            "Python developer reachable at [EMAIL REDACTED] daily",
            "Phone [PHONE REDACTED] for python roles",
        ])
        joined = " ".join(result.redacted_snippets)
        for fragment in ("carol", "example", "555", "4567"):
            self.assertNotIn(fragment, joined)

    def test_large_k_returns_only_qualifying(self):
        results = self.pipeline.search(SearchQuery("Python developer", k=100))
        self.assertEqual(len(results), 2)

    def test_k_is_bounded(self):
        documents = [Document(id=i, text=f"python developer number{i}") for i in range(1, 16)]
        pipeline = RelevancePipeline(InMemorySource(documents))
        self.assertEqual(len(pipeline.search(SearchQuery("python", k=50))), 10)
        self.assertEqual(len(pipeline.search(SearchQuery("python", k=1))), 1)

    def test_ties_keep_retrieval_order(self):
        documents = [
            Document(id=7, text="python developer"),
            Document(id=3, text="python developer"),
            Document(id=5, text="python developer"),
        ]
        pipeline = RelevancePipeline(InMemorySource(documents))
        results = pipeline.search(SearchQuery("python developer", k=3))
        self.assertEqual([r.document.id for r in results], [7, 3, 5])

    def test_deterministic(self):
        first = self.pipeline.search(SearchQuery("Python developer"))
        second = self.pipeline.search(SearchQuery("Python developer"))
        self.assertEqual(
            [(r.document.id, r.score, r.snippets) for r in first],
            [(r.document.id, r.score, r.snippets) for r in second]
        )

    def test_scores_in_range_and_non_increasing(self):
        results = self.pipeline.search(SearchQuery("python developer backend java", k=10))
        for result in results:
            self.assertGreater(result.score, 0.01)
            self.assertLessEqual(result.score, 1.0)
        for earlier, later in zip(results, results[1:]):
            self.assertGreaterEqual(earlier.score, later.score)

    def test_owner_scope_restricts_candidates(self):
        results = self.pipeline.search(SearchQuery("Python developer"), owner_id=20, user_id=20)
        self.assertEqual([r.document.id for r in results], [4])

    def test_search_scope_by_role(self):
        self.assertEqual(search_scope("user", 5), 5)
        self.assertIsNone(search_scope("recruiter", 5))
        self.assertIsNone(search_scope("admin", 5))

    def test_audit_receives_ranked_results(self):
        results = self.pipeline.search(SearchQuery("Python developer"), user_id=10)
        self.assertEqual(len(self.audit.searches), 1)
        query, recorded, user_id = self.audit.searches[0]
        self.assertEqual(query, "Python developer")
        self.assertEqual(recorded, results)
        self.assertEqual(user_id, 10)

    def test_audit_failure_does_not_fail_search(self):
        pipeline = RelevancePipeline(InMemorySource(self.documents), audit=FailingAudit())
        with self.assertLogs('core.relevance.pipeline', level='ERROR') as logs:
            results = pipeline.search(SearchQuery("Python developer"))
        self.assertEqual([r.document.id for r in results], [1, 4])
        self.assertIn("Failed to record search query", logs.output[0])

    def test_no_candidates(self):
        pipeline = RelevancePipeline(InMemorySource([]))
        self.assertEqual(pipeline.search(SearchQuery("python")), [])

    def test_configurable_floor(self):
        config = RelevanceConfig(search=SearchConfig(relevance_floor=0.5))
        pipeline = RelevancePipeline(InMemorySource(self.documents), config=config)
        results = pipeline.search(SearchQuery("Python developer"))
        self.assertEqual([r.document.id for r in results], [1])

    def test_invalid_k_rejected(self):
        with self.assertRaises(ValueError):
            SearchQuery("python", k=0)


class TestMatch(unittest.TestCase):

    def setUp(self):
        self.job = JobDocument(
            id=1,
            title="Senior Software Engineer",
            description="Build services",
            requirements="5+ years Python Django"
        )
        self.documents = [
            Document(id=1, text="Gardener", label="gardener.txt"),
            Document(id=2, text="4 years Python, Django expert. Built services.", label="dev.txt"),
        ]
        self.audit = RecordingAudit()
        self.pipeline = RelevancePipeline(InMemorySource(self.documents), audit=self.audit)

    def test_match_evidence_and_recommendation(self):
        results = self.pipeline.match(self.job)

        self.assertEqual(len(results), 1)
        match = results[0]
        self.assertEqual(match.document.id, 2)
        self.assertEqual(match.score, 0.5)
        self.assertEqual(match.recommendation, Recommendation.STRONG)
        self.assertEqual(match.evidence, ["services", "years", "python", "django"])
        self.assertEqual(match.missing_requirements, ["senior", "software", "engineer", "build"])

    def test_scores_are_rounded_but_tier_uses_raw_score(self):
        job = JobDocument(id=2, title="alpha bravo", description="charlie")
        pipeline = RelevancePipeline(InMemorySource([Document(id=1, text="alpha")]))
        match = pipeline.match(job)[0]
        self.assertEqual(match.score, 0.33)
        self.assertEqual(match.recommendation, Recommendation.STRONG)

    def test_scores_rounding_to_zero_are_dropped(self):
        keywords = " ".join(f"word{i:03d}" for i in range(201))
        job = JobDocument(id=3, title=keywords, description="")
        pipeline = RelevancePipeline(InMemorySource([Document(id=1, text="word000")]))
        self.assertEqual(pipeline.match(job), [])

    def test_top_n_bounds(self):
        documents = [Document(id=i, text="python django") for i in range(1, 31)]
        pipeline = RelevancePipeline(InMemorySource(documents))
        self.assertEqual(len(pipeline.match(self.job)), 5)
        self.assertEqual(len(pipeline.match(self.job, top_n=2)), 2)
        self.assertEqual(len(pipeline.match(self.job, top_n=100)), 20)

    def test_match_considers_every_resume(self):
        source = InMemorySource(self.documents)
        RelevancePipeline(source).match(self.job)
        self.assertEqual(source.calls, [None])

    def test_matches_recorded(self):
        results = self.pipeline.match(self.job)
        self.assertEqual(self.audit.matches, [(1, results)])

    def test_empty_result_not_recorded(self):
        pipeline = RelevancePipeline(InMemorySource([Document(id=1, text="Gardener")]), audit=self.audit)
        self.assertEqual(pipeline.match(self.job), [])
        self.assertEqual(self.audit.matches, [])

    def test_audit_failure_does_not_fail_match(self):
        pipeline = RelevancePipeline(InMemorySource(self.documents), audit=FailingAudit())
        with self.assertLogs('core.relevance.pipeline', level='ERROR'):
            results = pipeline.match(self.job)
        self.assertEqual(len(results), 1)


if __name__ == '__main__':
    unittest.main()
