"""Relevance Module - tokenize, score, rank, extract evidence and redact."""
from core.relevance.models import (
    Role, Document, JobDocument, SearchQuery, SearchResult,
    KeywordMatch, MatchResult, RelevanceTier, Recommendation
)
from core.relevance.tokenizer import tokenize, keyword_tokens, query_terms, term_frequencies
from core.relevance.similarity import jaccard_similarity, text_similarity, relevance_tier
from core.relevance.keywords import match_keywords, recommendation_for
from core.relevance.snippets import extract_snippets, split_sentences
from core.relevance.redaction import redact_pii, redact_for_role, can_view_pii
from core.relevance.ranking import rank, bounded
from core.relevance.interfaces import DocumentSource, AuditSink, search_scope
from core.relevance.pipeline import RelevancePipeline

__all__ = [
    'RelevancePipeline', 'DocumentSource', 'AuditSink', 'search_scope',
    'Role', 'Document', 'JobDocument', 'SearchQuery', 'SearchResult',
    'KeywordMatch', 'MatchResult', 'RelevanceTier', 'Recommendation',
    'tokenize', 'keyword_tokens', 'query_terms', 'term_frequencies',
    'jaccard_similarity', 'text_similarity', 'relevance_tier',
    'match_keywords', 'recommendation_for',
    'extract_snippets', 'split_sentences',
    'redact_pii', 'redact_for_role', 'can_view_pii',
    'rank', 'bounded',
]
