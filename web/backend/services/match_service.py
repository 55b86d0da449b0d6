#!/usr/bin/env python3
"""
Match service - business logic for job match operations.
"""

import logging
from typing import Optional
from sqlalchemy.orm import Session

from core.config_loader import RelevanceConfig
from core.relevance import RelevancePipeline
from database.repositories import JobRepository, MatchRepository, ResumeRepository
from ..models.responses import (
    MatchItem,
    MatchJobResponse,
    StoredMatchItem,
    StoredMatchListResponse
)
from ..utils import next_offset, safe_datetime_iso, utc_now_iso
from .audit_sink import DatabaseAuditSink, match_result_to_dict
from .job_service import JobService

logger = logging.getLogger(__name__)


class MatchService:
    """Service for ranking resumes against job postings."""

    def __init__(self, db: Session, config: Optional[RelevanceConfig] = None):
        self.db = db
        self.jobs = JobService(db)
        self.matches = MatchRepository(db)
        self.pipeline = RelevancePipeline(
            source=ResumeRepository(db),
            audit=DatabaseAuditSink(db),
            config=config
        )

    def match_job(self, job_id: int, top_n: Optional[int] = None) -> MatchJobResponse:
        """
        Rank every stored resume against a job and store the kept matches.

        Args:
            job_id: Job to match.
            top_n: Requested number of matches (bounded by configuration).

        Returns:
            Ranked matches, best first. Returned even if storing them failed.
        """
        job = self.jobs.get_or_404(job_id)
        job_document = JobRepository.to_document(job)

        results = self.pipeline.match(job_document, top_n=top_n)

        return MatchJobResponse(
            job_id=job_document.id,
            job_title=job_document.title,
            matches=[MatchItem(**match_result_to_dict(result)) for result in results],
            total_matches=len(results),
            matched_at=utc_now_iso()
        )

    def get_matches(self, job_id: int, limit: int, offset: int) -> StoredMatchListResponse:
        """Page through stored matches for a job, best score first."""
        self.jobs.get_or_404(job_id)
        rows, total = self.matches.get_matches_for_job(job_id, limit=limit, offset=offset)

        items = [
            StoredMatchItem(
                id=row.id,
                resume_id=row.resume_id,
                filename=row.resume.original_name if row.resume else None,
                uploader=row.resume.owner.name if row.resume and row.resume.owner else None,
                match_score=row.match_score,
                evidence=row.evidence or [],
                missing_requirements=row.missing_requirements or [],
                matched_at=safe_datetime_iso(row.created_at)
            )
            for row in rows
        ]
        return StoredMatchListResponse(items=items, next_offset=next_offset(offset, limit, total), total=total)
