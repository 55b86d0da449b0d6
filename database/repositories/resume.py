import logging
from typing import List, Optional, Dict, Any, Tuple

from sqlalchemy import select, func, or_
from sqlalchemy.orm import joinedload

from database.models import Resume, User
from database.repositories.base import BaseRepository
from core.relevance import Document, DocumentSource

logger = logging.getLogger(__name__)


class ResumeRepository(BaseRepository, DocumentSource):
    def create_resume(
        self,
        user_id: int,
        original_name: str,
        content: str,
        parsed_data: Dict[str, Any],
        term_profile: Dict[str, float],
        mime_type: Optional[str] = None,
        size_bytes: Optional[int] = None
    ) -> Resume:
        resume = Resume(
            user_id=user_id,
            original_name=original_name,
            content=content,
            parsed_data=parsed_data,
            term_profile=term_profile,
            mime_type=mime_type,
            size_bytes=size_bytes
        )
        self.db.add(resume)
        self.db.flush()
        return resume

    def get_resume(self, resume_id: int, owner_id: Optional[int] = None) -> Optional[Resume]:
        """Fetch a resume, optionally requiring it to belong to owner_id."""
        stmt = select(Resume).options(joinedload(Resume.owner)).where(Resume.id == resume_id)
        if owner_id is not None:
            stmt = stmt.where(Resume.user_id == owner_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def list_resumes(
        self,
        limit: int,
        offset: int,
        owner_id: Optional[int] = None,
        search: Optional[str] = None
    ) -> Tuple[List[Resume], int]:
        """Page through resumes newest first. Returns (rows, total)."""
        conditions = []
        if search:
            pattern = f"%{search}%"
            conditions.append(or_(Resume.content.like(pattern), Resume.original_name.like(pattern)))
        if owner_id is not None:
            conditions.append(Resume.user_id == owner_id)

        stmt = (
            select(Resume)
            .options(joinedload(Resume.owner))
            .where(*conditions)
            .order_by(Resume.created_at.desc(), Resume.id.desc())
        )
        return self.page(stmt, select(func.count(Resume.id)).where(*conditions), limit, offset)

    def delete_resume(self, resume: Resume) -> None:
        self.db.delete(resume)
        self.db.flush()

    def count(self) -> int:
        return self.db.execute(select(func.count(Resume.id))).scalar_one()

    def list_documents(self, owner_id: Optional[int] = None) -> List[Document]:
        """
        Load resumes as relevance-core documents in retrieval (id) order.

        Args:
            owner_id: Restrict to one uploader, or None for every resume.
        """
        stmt = (
            select(Resume.id, Resume.content, Resume.user_id, Resume.original_name,
                   Resume.created_at, User.name)
            .join(User, Resume.user_id == User.id)
            .order_by(Resume.id)
        )
        if owner_id is not None:
            stmt = stmt.where(Resume.user_id == owner_id)

        return [
            Document(
                id=row.id,
                text=row.content or '',
                owner_id=row.user_id,
                label=row.original_name,
                owner_name=row.name,
                uploaded_at=row.created_at
            )
            for row in self.db.execute(stmt).all()
        ]
