#!/usr/bin/env python3
"""
Application service - job applications and their review workflow.
"""

import logging
from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.auth import TokenClaims
from core.relevance import Role, redact_for_role
from database.models import Application
from database.repositories import ApplicationRepository, JobRepository, ResumeRepository
from ..models.requests import ApplicationCreateRequest, ApplicationStatusRequest
from ..models.responses import (
    ApplicationCreatedResponse,
    ApplicationDetailResponse,
    ApplicationItem,
    ApplicationListResponse,
    ApplicationStatusResponse,
    MyApplicationItem,
    MyApplicationListResponse
)
from ..utils import next_offset, safe_datetime_iso
from ..exceptions import ConflictException, ForbiddenException, NotFoundException, ValidationException
from .auth_service import require_field

logger = logging.getLogger(__name__)


def check_status(status: Optional[str]) -> None:
    if status is not None and status not in Application.STATUSES:
        raise ValidationException(
            f"Status must be one of: {', '.join(Application.STATUSES)}",
            code="INVALID_STATUS",
            field="status"
        )


def application_item(application: Application) -> ApplicationItem:
    job = application.job
    applicant = application.applicant
    resume = application.resume
    return ApplicationItem(
        id=application.id,
        job_id=application.job_id,
        job_title=job.title if job else None,
        company=job.company if job else None,
        applicant_name=applicant.name if applicant else None,
        applicant_email=applicant.email if applicant else None,
        resume_id=application.resume_id,
        resume_filename=resume.original_name if resume else None,
        cover_letter=application.cover_letter,
        status=application.status,
        applied_at=safe_datetime_iso(application.applied_at),
        updated_at=safe_datetime_iso(application.updated_at)
    )


def my_application_item(application: Application) -> MyApplicationItem:
    job = application.job
    return MyApplicationItem(
        id=application.id,
        job_id=application.job_id,
        job_title=job.title if job else None,
        company=job.company if job else None,
        location=job.location if job else None,
        salary_range=job.salary_range if job else None,
        resume_id=application.resume_id,
        cover_letter=application.cover_letter,
        status=application.status,
        applied_at=safe_datetime_iso(application.applied_at),
        updated_at=safe_datetime_iso(application.updated_at)
    )


class ApplicationService:
    """
    Service for job applications.

    Any account may apply with its own resume. Recruiters review applications
    for the jobs they created; admins review all of them.
    """

    def __init__(self, db: Session):
        self.db = db
        self.applications = ApplicationRepository(db)
        self.jobs = JobRepository(db)
        self.resumes = ResumeRepository(db)

    def apply(self, user: TokenClaims, request: ApplicationCreateRequest) -> ApplicationCreatedResponse:
        """
        Apply to a job.

        Raises:
            ValidationException: job_id or resume_id missing (FIELD_REQUIRED).
            NotFoundException: Unknown job, or resume not owned by the caller.
            ConflictException: Caller already applied to this job (ALREADY_APPLIED).
        """
        if request.job_id is None:
            raise ValidationException("job_id is required", field="job_id")
        if request.resume_id is None:
            raise ValidationException("resume_id is required", field="resume_id")

        if self.resumes.get_resume(request.resume_id, owner_id=user.user_id) is None:
            raise NotFoundException("Resume not found")
        if self.jobs.get_by_id(request.job_id) is None:
            raise NotFoundException("Job not found")

        if self.applications.get_by_job_and_user(request.job_id, user.user_id) is not None:
            raise ConflictException("Already applied to this job", code="ALREADY_APPLIED")

        try:
            application = self.applications.create_application(
                job_id=request.job_id,
                user_id=user.user_id,
                resume_id=request.resume_id,
                cover_letter=request.cover_letter
            )
            self.db.commit()
        except IntegrityError:
            # Concurrent application to the same job
            self.db.rollback()
            raise ConflictException("Already applied to this job", code="ALREADY_APPLIED")

        logger.info(f"User {user.user_id} applied to job {request.job_id} (application {application.id})")
        return ApplicationCreatedResponse(
            id=application.id,
            job_id=application.job_id,
            resume_id=application.resume_id,
            status=application.status,
            applied_at=safe_datetime_iso(application.applied_at),
            message="Application submitted successfully"
        )

    def list_applications(
        self,
        user: TokenClaims,
        limit: int,
        offset: int,
        status: Optional[str] = None,
        job_id: Optional[int] = None
    ) -> ApplicationListResponse:
        """Applications newest first. Recruiters see only those for their own jobs."""
        check_status(status)
        recruiter_id = user.user_id if user.role == Role.RECRUITER else None
        rows, total = self.applications.list_applications(
            limit=limit,
            offset=offset,
            status=status,
            job_id=job_id,
            recruiter_id=recruiter_id
        )
        return ApplicationListResponse(
            items=[application_item(row) for row in rows],
            next_offset=next_offset(offset, limit, total),
            total=total
        )

    def my_applications(
        self,
        user: TokenClaims,
        limit: int,
        offset: int,
        status: Optional[str] = None
    ) -> MyApplicationListResponse:
        check_status(status)
        rows, total = self.applications.list_for_user(user.user_id, limit=limit, offset=offset, status=status)
        return MyApplicationListResponse(
            items=[my_application_item(row) for row in rows],
            next_offset=next_offset(offset, limit, total),
            total=total
        )

    def update_status(
        self,
        user: TokenClaims,
        application_id: int,
        request: ApplicationStatusRequest
    ) -> ApplicationStatusResponse:
        """
        Move an application to a new status, optionally with reviewer notes.

        Raises:
            ValidationException: Status missing (FIELD_REQUIRED) or unknown (INVALID_STATUS).
            NotFoundException: Unknown application, or a recruiter's application
                for a job they did not create.
        """
        status = require_field(request.status, "status")
        check_status(status)

        application = self.applications.get_application(application_id)
        if application is None:
            raise NotFoundException("Application not found")
        if user.role == Role.RECRUITER and application.job.created_by != user.user_id:
            raise NotFoundException("Application not found")

        self.applications.update_status(application, status, notes=request.notes)
        self.db.commit()
        logger.info(f"Application {application_id} moved to {status} by user {user.user_id}")

        return ApplicationStatusResponse(
            id=application.id,
            status=application.status,
            notes=application.notes,
            updated_at=safe_datetime_iso(application.updated_at),
            message="Application status updated successfully"
        )

    def get_application(self, user: TokenClaims, application_id: int) -> ApplicationDetailResponse:
        """
        Full application for the applicant, the job's recruiter or an admin.

        Raises:
            NotFoundException: Unknown application.
            ForbiddenException: Caller is none of the above.
        """
        application = self.applications.get_application(application_id)
        if application is None:
            raise NotFoundException("Application not found")

        allowed = (
            user.role == Role.ADMIN
            or application.user_id == user.user_id
            or (user.role == Role.RECRUITER and application.job.created_by == user.user_id)
        )
        if not allowed:
            raise ForbiddenException("Access denied")

        job = application.job
        applicant = application.applicant
        resume = application.resume
        return ApplicationDetailResponse(
            id=application.id,
            job_id=application.job_id,
            job_title=job.title,
            company=job.company,
            job_description=job.description,
            user_id=application.user_id,
            applicant_name=applicant.name,
            applicant_email=applicant.email,
            resume_id=application.resume_id,
            resume_filename=resume.original_name,
            resume_content=redact_for_role(resume.content, user.role),
            cover_letter=application.cover_letter,
            status=application.status,
            notes=application.notes,
            applied_at=safe_datetime_iso(application.applied_at),
            updated_at=safe_datetime_iso(application.updated_at)
        )
