#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Dict, Any


class UserResponse(BaseModel):
    """Public view of an account."""
    id: int
    email: str
    name: Optional[str] = None
    role: str


class AuthResponse(BaseModel):
    user: UserResponse
    token: str


class MeResponse(BaseModel):
    user: UserResponse


class ResumeUploadResponse(BaseModel):
    """Result of a successful upload."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "filename": "jane_doe.pdf",
                "content": "Jane Doe. Senior Python developer with ten years of...",
                "word_count": 412,
                "uploaded_at": "2026-02-01T12:00:00+00:00"
            }
        }
    )

    id: int
    filename: str
    content: str = Field(description="First 200 characters of the extracted text")
    word_count: int
    uploaded_at: Optional[str]


class ResumeSummary(BaseModel):
    id: int
    filename: str
    uploader: Optional[str]
    uploaded_at: Optional[str]
    parsed_data: Dict[str, Any] = Field(default_factory=dict)


class ResumeListResponse(BaseModel):
    items: List[ResumeSummary]
    next_offset: Optional[int]
    total: int


class ResumeDetailResponse(BaseModel):
    """Full resume; content is redacted for callers without PII access."""
    id: int
    filename: str
    content: str
    uploader: Optional[str]
    uploaded_at: Optional[str]
    parsed_data: Dict[str, Any] = Field(default_factory=dict)
    term_profile: Optional[Dict[str, float]] = None


class DeleteResponse(BaseModel):
    message: str
    id: int


class JobResponse(BaseModel):
    """Job posting."""
    id: int
    title: str
    description: str
    requirements: Optional[str]
    company: Optional[str]
    location: Optional[str]
    salary_range: Optional[str]
    created_by: Optional[int]
    created_by_name: Optional[str] = None
    created_at: Optional[str]


class JobListResponse(BaseModel):
    items: List[JobResponse]
    next_offset: Optional[int]
    total: int


class JobUpdateResponse(BaseModel):
    id: int
    message: str
    updated_fields: List[str]


class MatchItem(BaseModel):
    """One resume ranked against a job."""
    resume_id: int
    filename: str
    uploader: Optional[str]
    match_score: float = Field(ge=0, le=1)
    evidence: List[str]
    missing_requirements: List[str]
    recommendation: str


class MatchJobResponse(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "job_id": 1,
                "job_title": "Senior Software Engineer",
                "matches": [{
                    "resume_id": 3,
                    "filename": "jane_doe.pdf",
                    "uploader": "Jane Doe",
                    "match_score": 0.42,
                    "evidence": ["python", "react", "databases"],
                    "missing_requirements": ["node.js"],
                    "recommendation": "strong"
                }],
                "total_matches": 1,
                "matched_at": "2026-02-01T12:00:00+00:00"
            }
        }
    )

    job_id: int
    job_title: str
    matches: List[MatchItem]
    total_matches: int
    matched_at: str


class StoredMatchItem(BaseModel):
    """A previously computed match."""
    id: int
    resume_id: int
    filename: Optional[str]
    uploader: Optional[str]
    match_score: float
    evidence: List[str]
    missing_requirements: List[str]
    matched_at: Optional[str]


class StoredMatchListResponse(BaseModel):
    items: List[StoredMatchItem]
    next_offset: Optional[int]
    total: int


class SearchResultItem(BaseModel):
    """One resume ranked against a free-text query."""
    resume_id: int
    filename: str
    uploader: Optional[str]
    similarity_score: float = Field(ge=0, le=1)
    snippets: List[str]
    relevance: str


class SearchResponse(BaseModel):
    query: str
    results: List[SearchResultItem]
    total_found: int
    search_timestamp: str


class SearchHistoryItem(BaseModel):
    id: int
    query: str
    results: List[Dict[str, Any]] = Field(default_factory=list)
    user_id: Optional[int]
    searched_at: Optional[str]


class SearchHistoryResponse(BaseModel):
    items: List[SearchHistoryItem]
    next_offset: Optional[int]
    total: int


class TopQuery(BaseModel):
    query: str
    frequency: int


class SearchStatsResponse(BaseModel):
    total_searches: int
    total_resumes: int
    top_queries: List[TopQuery]
    generated_at: str


class ApplicationCreatedResponse(BaseModel):
    id: int
    job_id: int
    resume_id: int
    status: str
    applied_at: Optional[str]
    message: str


class ApplicationItem(BaseModel):
    """An application as seen by the recruiter reviewing it."""
    id: int
    job_id: int
    job_title: Optional[str]
    company: Optional[str]
    applicant_name: Optional[str]
    applicant_email: Optional[str]
    resume_id: int
    resume_filename: Optional[str]
    cover_letter: Optional[str]
    status: str
    applied_at: Optional[str]
    updated_at: Optional[str]


class ApplicationListResponse(BaseModel):
    items: List[ApplicationItem]
    next_offset: Optional[int]
    total: int


class MyApplicationItem(BaseModel):
    """An application as seen by the applicant."""
    id: int
    job_id: int
    job_title: Optional[str]
    company: Optional[str]
    location: Optional[str]
    salary_range: Optional[str]
    resume_id: int
    cover_letter: Optional[str]
    status: str
    applied_at: Optional[str]
    updated_at: Optional[str]


class MyApplicationListResponse(BaseModel):
    items: List[MyApplicationItem]
    next_offset: Optional[int]
    total: int


class ApplicationDetailResponse(BaseModel):
    """Full application; resume_content is redacted for callers without PII access."""
    id: int
    job_id: int
    job_title: Optional[str]
    company: Optional[str]
    job_description: Optional[str]
    user_id: int
    applicant_name: Optional[str]
    applicant_email: Optional[str]
    resume_id: int
    resume_filename: Optional[str]
    resume_content: Optional[str]
    cover_letter: Optional[str]
    status: str
    notes: Optional[str]
    applied_at: Optional[str]
    updated_at: Optional[str]


class ApplicationStatusResponse(BaseModel):
    id: int
    status: str
    notes: Optional[str]
    updated_at: Optional[str]
    message: str


class AdminUserItem(BaseModel):
    id: int
    email: str
    name: Optional[str]
    role: str
    created_at: Optional[str]


class AdminUserListResponse(BaseModel):
    items: List[AdminUserItem]
    next_offset: Optional[int]
    total: int


class AdminUserCreatedResponse(AdminUserItem):
    message: str


class AdminUserUpdateResponse(BaseModel):
    id: int
    message: str
    updated_fields: List[str]


class AdminStatsResponse(BaseModel):
    total_users: int
    total_resumes: int
    total_jobs: int
    total_applications: int
    applications_by_status: Dict[str, int]
    generated_at: str


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    version: str


class MetaResponse(BaseModel):
    name: str
    version: str
    description: str
    endpoints: Dict[str, str]
