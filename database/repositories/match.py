import logging
from typing import List, Tuple, Iterable

from sqlalchemy import select, func
from sqlalchemy.orm import joinedload

from database.models import JobMatch, Resume
from database.models.user import utcnow
from database.repositories.base import BaseRepository
from core.relevance import MatchResult

logger = logging.getLogger(__name__)


class MatchRepository(BaseRepository):
    def save_matches(self, job_id: int, results: Iterable[MatchResult]) -> int:
        """
        Insert or overwrite one row per (job, resume) for the given results.

        Returns:
            Number of rows written.
        """
        count = 0
        for result in results:
            stmt = select(JobMatch).where(
                JobMatch.job_id == job_id,
                JobMatch.resume_id == result.document.id
            )
            existing = self.db.execute(stmt).scalar_one_or_none()
            if existing is None:
                existing = JobMatch(job_id=job_id, resume_id=result.document.id)
                self.db.add(existing)

            existing.match_score = result.score
            existing.evidence = list(result.evidence)
            existing.missing_requirements = list(result.missing_requirements)
            existing.created_at = utcnow()
            count += 1

        self.db.flush()
        logger.debug(f"Stored {count} matches for job {job_id}")
        return count

    def get_matches_for_job(self, job_id: int, limit: int, offset: int) -> Tuple[List[JobMatch], int]:
        stmt = (
            select(JobMatch)
            .options(joinedload(JobMatch.resume).joinedload(Resume.owner))
            .where(JobMatch.job_id == job_id)
            .order_by(JobMatch.match_score.desc(), JobMatch.id)
        )
        count_stmt = select(func.count(JobMatch.id)).where(JobMatch.job_id == job_id)
        return self.page(stmt, count_stmt, limit, offset)
