#!/usr/bin/env python3
"""
Resume service - upload, listing, retrieval and deletion of resumes.
"""

import logging
from pathlib import Path
from typing import Optional
from sqlalchemy.orm import Session

from core.auth import TokenClaims
from core.relevance import Role, redact_for_role, term_frequencies
from database.models import Resume
from database.repositories import ResumeRepository
from etl.resume import ResumeParser, build_parsed_data
from ..config import UploadConfig
from ..models.responses import (
    DeleteResponse,
    ResumeDetailResponse,
    ResumeListResponse,
    ResumeSummary,
    ResumeUploadResponse
)
from ..utils import next_offset, preview, safe_datetime_iso
from ..exceptions import NotFoundException, UploadException, ValidationException

logger = logging.getLogger(__name__)


def owner_scope(user: TokenClaims) -> Optional[int]:
    """Plain users only see their own resumes."""
    return user.user_id if user.role == Role.USER else None


class ResumeService:
    """Service for managing uploaded resumes."""

    def __init__(self, db: Session, uploads: Optional[UploadConfig] = None, parser: Optional[ResumeParser] = None):
        self.db = db
        self.resumes = ResumeRepository(db)
        self.uploads = uploads or UploadConfig()
        self.parser = parser or ResumeParser()

    def upload(
        self,
        user: TokenClaims,
        filename: Optional[str],
        data: bytes,
        content_type: Optional[str] = None
    ) -> ResumeUploadResponse:
        """
        Extract text from an uploaded file and store it.

        Raises:
            ValidationException: No file (FIELD_REQUIRED) or disallowed extension (INVALID_FILE_TYPE).
            UploadException: File too large or no text could be extracted (UPLOAD_ERROR).
        """
        if not filename:
            raise ValidationException("Resume file is required", field="resume")

        ext = Path(filename).suffix.lower()
        if ext not in self.uploads.allowed_extensions or not self.parser.is_supported(filename):
            allowed = ', '.join(
                allowed_ext.lstrip('.').upper() for allowed_ext in self.uploads.allowed_extensions
                if allowed_ext in self.parser.SUPPORTED_FORMATS
            )
            raise ValidationException(
                f"Invalid file type. Only {allowed} files are allowed.",
                code="INVALID_FILE_TYPE",
                field="resume"
            )

        if len(data) > self.uploads.max_size_bytes:
            raise UploadException(
                f"File exceeds the {self.uploads.max_size_bytes // (1024 * 1024)} MB limit",
                field="resume"
            )

        try:
            parsed = self.parser.parse(filename, data)
        except ValueError as e:
            logger.warning(f"Failed to parse upload {filename}: {e}")
            raise UploadException(str(e), field="resume")

        resume = self.resumes.create_resume(
            user_id=user.user_id,
            original_name=filename,
            content=parsed.text,
            parsed_data=build_parsed_data(parsed),
            term_profile=term_frequencies(parsed.text),
            mime_type=content_type,
            size_bytes=len(data)
        )
        self.db.commit()

        logger.info(f"Stored resume {resume.id} for user {user.user_id} ({parsed.word_count} words)")

        return ResumeUploadResponse(
            id=resume.id,
            filename=filename,
            content=preview(parsed.text),
            word_count=parsed.word_count,
            uploaded_at=safe_datetime_iso(resume.created_at)
        )

    def list_resumes(
        self,
        user: TokenClaims,
        limit: int,
        offset: int,
        search: Optional[str] = None
    ) -> ResumeListResponse:
        rows, total = self.resumes.list_resumes(
            limit=limit,
            offset=offset,
            owner_id=owner_scope(user),
            search=search or None
        )
        items = [
            ResumeSummary(
                id=row.id,
                filename=row.original_name,
                uploader=row.owner.name if row.owner else None,
                uploaded_at=safe_datetime_iso(row.created_at),
                parsed_data=row.parsed_data or {}
            )
            for row in rows
        ]
        return ResumeListResponse(items=items, next_offset=next_offset(offset, limit, total), total=total)

    def _get_visible(self, user: TokenClaims, resume_id: int) -> Resume:
        resume = self.resumes.get_resume(resume_id, owner_id=owner_scope(user))
        if resume is None:
            raise NotFoundException("Resume not found")
        return resume

    def get_resume(self, user: TokenClaims, resume_id: int) -> ResumeDetailResponse:
        """
        Return one resume. Content is PII-redacted unless the caller is a
        recruiter or admin.
        """
        resume = self._get_visible(user, resume_id)
        parsed_data = dict(resume.parsed_data or {})
        if 'content' in parsed_data:
            parsed_data['content'] = redact_for_role(parsed_data['content'], user.role)

        return ResumeDetailResponse(
            id=resume.id,
            filename=resume.original_name,
            content=redact_for_role(resume.content, user.role),
            uploader=resume.owner.name if resume.owner else None,
            uploaded_at=safe_datetime_iso(resume.created_at),
            parsed_data=parsed_data,
            term_profile=resume.term_profile
        )

    def delete_resume(self, user: TokenClaims, resume_id: int) -> DeleteResponse:
        resume = self._get_visible(user, resume_id)
        self.resumes.delete_resume(resume)
        self.db.commit()
        logger.info(f"Deleted resume {resume_id} (requested by user {user.user_id})")
        return DeleteResponse(message="Resume deleted successfully", id=resume_id)
