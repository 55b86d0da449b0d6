import logging
from typing import List, Optional, Dict, Any, Tuple

from sqlalchemy import select, func
from sqlalchemy.orm import joinedload

from database.models import Job
from database.repositories.base import BaseRepository
from core.relevance import JobDocument

logger = logging.getLogger(__name__)


class JobRepository(BaseRepository):
    def create_job(self, created_by: int, job_data: Dict[str, Any]) -> Job:
        job = Job(
            title=job_data['title'],
            description=job_data['description'],
            requirements=job_data.get('requirements') or '',
            company=job_data.get('company') or '',
            location=job_data.get('location') or '',
            salary_range=job_data.get('salary_range') or '',
            created_by=created_by
        )
        self.db.add(job)
        self.db.flush()  # Generate ID
        return job

    def get_by_id(self, job_id: int) -> Optional[Job]:
        stmt = select(Job).options(joinedload(Job.creator)).where(Job.id == job_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def list_jobs(
        self,
        limit: int,
        offset: int,
        company: Optional[str] = None,
        location: Optional[str] = None
    ) -> Tuple[List[Job], int]:
        """Page through jobs newest first with substring filters. Returns (rows, total)."""
        conditions = []
        if company:
            conditions.append(Job.company.like(f"%{company}%"))
        if location:
            conditions.append(Job.location.like(f"%{location}%"))

        stmt = (
            select(Job)
            .options(joinedload(Job.creator))
            .where(*conditions)
            .order_by(Job.created_at.desc(), Job.id.desc())
        )
        return self.page(stmt, select(func.count(Job.id)).where(*conditions), limit, offset)

    def update_job(self, job: Job, updates: Dict[str, Any]) -> List[str]:
        """Apply whitelisted field updates; returns the names of fields changed."""
        updated = []
        for field_name in Job.UPDATABLE_FIELDS:
            if field_name in updates and updates[field_name] is not None:
                setattr(job, field_name, updates[field_name])
                updated.append(field_name)
        self.db.flush()
        return updated

    def delete_job(self, job: Job) -> None:
        self.db.delete(job)
        self.db.flush()

    def count(self) -> int:
        return self.db.execute(select(func.count(Job.id))).scalar_one()

    @staticmethod
    def to_document(job: Job) -> JobDocument:
        return JobDocument(
            id=job.id,
            title=job.title,
            description=job.description,
            requirements=job.requirements
        )
