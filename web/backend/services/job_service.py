#!/usr/bin/env python3
"""
Job service - business logic for job posting operations.
"""

import logging
from typing import Optional
from sqlalchemy.orm import Session

from core.auth import TokenClaims
from core.relevance import Role
from database.models import Job
from database.repositories import JobRepository
from ..models.requests import JobCreateRequest, JobUpdateRequest
from ..models.responses import DeleteResponse, JobListResponse, JobResponse, JobUpdateResponse
from ..utils import next_offset, safe_datetime_iso
from ..exceptions import ForbiddenException, NotFoundException, ValidationException
from .auth_service import require_field

logger = logging.getLogger(__name__)


def job_response(job: Job) -> JobResponse:
    return JobResponse(
        id=job.id,
        title=job.title,
        description=job.description,
        requirements=job.requirements,
        company=job.company,
        location=job.location,
        salary_range=job.salary_range,
        created_by=job.created_by,
        created_by_name=job.creator.name if job.creator else None,
        created_at=safe_datetime_iso(job.created_at)
    )


class JobService:
    """Service for managing job postings."""

    def __init__(self, db: Session):
        self.db = db
        self.jobs = JobRepository(db)

    def get_or_404(self, job_id: int) -> Job:
        job = self.jobs.get_by_id(job_id)
        if job is None:
            raise NotFoundException("Job not found")
        return job

    def _check_owner(self, user: TokenClaims, job: Job) -> None:
        if user.role != Role.ADMIN and job.created_by != user.user_id:
            raise ForbiddenException("Only the job creator or an admin can modify this job")

    def create_job(self, user: TokenClaims, request: JobCreateRequest) -> JobResponse:
        title = require_field(request.title, "title")
        description = require_field(request.description, "description")

        job = self.jobs.create_job(user.user_id, {
            'title': title,
            'description': description,
            'requirements': request.requirements,
            'company': request.company,
            'location': request.location,
            'salary_range': request.salary_range,
        })
        self.db.commit()
        logger.info(f"Job {job.id} created by user {user.user_id}")
        return job_response(self.get_or_404(job.id))

    def list_jobs(
        self,
        limit: int,
        offset: int,
        company: Optional[str] = None,
        location: Optional[str] = None
    ) -> JobListResponse:
        rows, total = self.jobs.list_jobs(limit=limit, offset=offset, company=company, location=location)
        return JobListResponse(
            items=[job_response(row) for row in rows],
            next_offset=next_offset(offset, limit, total),
            total=total
        )

    def get_job(self, job_id: int) -> JobResponse:
        return job_response(self.get_or_404(job_id))

    def update_job(self, user: TokenClaims, job_id: int, request: JobUpdateRequest) -> JobUpdateResponse:
        """
        Apply a partial update.

        Raises:
            NotFoundException: Unknown job.
            ForbiddenException: Caller is neither the creator nor an admin.
            ValidationException: No updatable field supplied (NO_UPDATES).
        """
        job = self.get_or_404(job_id)
        self._check_owner(user, job)

        updates = request.model_dump(exclude_none=True)
        if not any(field_name in updates for field_name in Job.UPDATABLE_FIELDS):
            raise ValidationException("No valid fields to update", code="NO_UPDATES")

        updated = self.jobs.update_job(job, updates)
        self.db.commit()
        logger.info(f"Job {job_id} updated: {', '.join(updated)}")
        return JobUpdateResponse(id=job_id, message="Job updated successfully", updated_fields=updated)

    def delete_job(self, user: TokenClaims, job_id: int) -> DeleteResponse:
        job = self.get_or_404(job_id)
        self._check_owner(user, job)
        self.jobs.delete_job(job)
        self.db.commit()
        logger.info(f"Job {job_id} deleted by user {user.user_id}")
        return DeleteResponse(message="Job deleted successfully", id=job_id)
