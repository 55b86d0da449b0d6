#!/usr/bin/env python3
"""
Request models for API endpoints.

Required text fields are declared optional here and checked by the services,
so that missing and blank values both surface as FIELD_REQUIRED for the
named field.
"""

from typing import Optional
from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    """Account registration."""
    email: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None
    role: Optional[str] = Field(default="user", description="user, recruiter or admin")


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class JobCreateRequest(BaseModel):
    """New job posting."""
    title: Optional[str] = None
    description: Optional[str] = None
    requirements: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    salary_range: Optional[str] = None


class JobUpdateRequest(BaseModel):
    """Partial job update; only provided fields change."""
    title: Optional[str] = None
    description: Optional[str] = None
    requirements: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    salary_range: Optional[str] = None


class MatchRequest(BaseModel):
    top_n: Optional[int] = Field(default=None, ge=1, description="Number of matches to return (max 20)")


class SearchRequest(BaseModel):
    """Free-text question over stored resumes."""
    query: Optional[str] = None
    k: Optional[int] = Field(default=None, ge=1, description="Number of results to return (max 10)")


class ApplicationCreateRequest(BaseModel):
    """Apply to a job with one of the caller's resumes."""
    job_id: Optional[int] = None
    resume_id: Optional[int] = None
    cover_letter: Optional[str] = None


class ApplicationStatusRequest(BaseModel):
    status: Optional[str] = Field(default=None, description="pending, reviewing, accepted or rejected")
    notes: Optional[str] = None


class UserCreateRequest(BaseModel):
    """Account created by an admin."""
    email: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None
    role: Optional[str] = Field(default="user", description="user, recruiter or admin")


class UserUpdateRequest(BaseModel):
    """Partial account update; only provided fields change."""
    email: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None
    role: Optional[str] = None
