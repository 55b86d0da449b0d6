from sqlalchemy import Column, Integer, Float, TIMESTAMP, ForeignKey, JSON, UniqueConstraint, Index
from sqlalchemy.orm import relationship

from .base import Base
from .user import utcnow


class JobMatch(Base):
    """
    Stored keyword-overlap match between a job and a resume.

    One row per (job, resume); re-running a match overwrites the previous row.
    """
    __tablename__ = 'job_matches'

    id = Column(Integer, primary_key=True, autoincrement=True)
    job_id = Column(Integer, ForeignKey('jobs.id', ondelete='CASCADE'), nullable=False)
    resume_id = Column(Integer, ForeignKey('resumes.id', ondelete='CASCADE'), nullable=False)

    match_score = Column(Float, nullable=False)
    evidence = Column(JSON, default=list)
    missing_requirements = Column(JSON, default=list)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)

    job = relationship("Job", back_populates="matches")
    resume = relationship("Resume", back_populates="matches")

    __table_args__ = (
        UniqueConstraint('job_id', 'resume_id', name='uq_job_matches_job_resume'),
        Index('idx_job_matches_job_id', 'job_id'),
        Index('idx_job_matches_resume_id', 'resume_id'),
        Index('idx_job_matches_score', 'match_score'),
    )
