import logging
from typing import List, Optional, Dict, Tuple

from sqlalchemy import select, func
from sqlalchemy.orm import joinedload

from database.models import Application, Job
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class ApplicationRepository(BaseRepository):
    def create_application(
        self,
        job_id: int,
        user_id: int,
        resume_id: int,
        cover_letter: Optional[str] = None
    ) -> Application:
        application = Application(
            job_id=job_id,
            user_id=user_id,
            resume_id=resume_id,
            cover_letter=cover_letter
        )
        self.db.add(application)
        self.db.flush()  # Generate ID
        return application

    def get_by_job_and_user(self, job_id: int, user_id: int) -> Optional[Application]:
        stmt = select(Application).where(Application.job_id == job_id, Application.user_id == user_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_application(self, application_id: int) -> Optional[Application]:
        stmt = (
            select(Application)
            .options(
                joinedload(Application.job),
                joinedload(Application.applicant),
                joinedload(Application.resume)
            )
            .where(Application.id == application_id)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def list_applications(
        self,
        limit: int,
        offset: int,
        status: Optional[str] = None,
        job_id: Optional[int] = None,
        recruiter_id: Optional[int] = None
    ) -> Tuple[List[Application], int]:
        """
        Page through applications newest first. Returns (rows, total).

        Args:
            recruiter_id: Restrict to applications for jobs this user created.
        """
        conditions = []
        if status:
            conditions.append(Application.status == status)
        if job_id is not None:
            conditions.append(Application.job_id == job_id)
        if recruiter_id is not None:
            conditions.append(Job.created_by == recruiter_id)

        stmt = (
            select(Application)
            .join(Job, Application.job_id == Job.id)
            .options(
                joinedload(Application.job),
                joinedload(Application.applicant),
                joinedload(Application.resume)
            )
            .where(*conditions)
            .order_by(Application.applied_at.desc(), Application.id.desc())
        )
        count_stmt = (
            select(func.count(Application.id))
            .join(Job, Application.job_id == Job.id)
            .where(*conditions)
        )
        return self.page(stmt, count_stmt, limit, offset)

    def list_for_user(
        self,
        user_id: int,
        limit: int,
        offset: int,
        status: Optional[str] = None
    ) -> Tuple[List[Application], int]:
        conditions = [Application.user_id == user_id]
        if status:
            conditions.append(Application.status == status)

        stmt = (
            select(Application)
            .options(joinedload(Application.job))
            .where(*conditions)
            .order_by(Application.applied_at.desc(), Application.id.desc())
        )
        return self.page(stmt, select(func.count(Application.id)).where(*conditions), limit, offset)

    def update_status(self, application: Application, status: str, notes: Optional[str] = None) -> Application:
        application.status = status
        if notes is not None:
            application.notes = notes
        self.db.flush()
        return application

    def count(self) -> int:
        return self.db.execute(select(func.count(Application.id))).scalar_one()

    def status_breakdown(self) -> Dict[str, int]:
        """Application count per status; statuses with no rows are omitted."""
        stmt = (
            select(Application.status, func.count(Application.id))
            .group_by(Application.status)
            .order_by(Application.status)
        )
        return {status: total for status, total in self.db.execute(stmt).all()}
