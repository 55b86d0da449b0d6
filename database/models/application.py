from sqlalchemy import Column, Text, Integer, TIMESTAMP, ForeignKey, Enum, UniqueConstraint, Index
from sqlalchemy.orm import relationship

from .base import Base
from .user import utcnow


class Application(Base):
    """
    A user's application to a job, submitted with one of their resumes.

    Recruiters move it through pending -> reviewing -> accepted/rejected.
    """
    __tablename__ = 'applications'

    STATUSES = ('pending', 'reviewing', 'accepted', 'rejected')

    id = Column(Integer, primary_key=True, autoincrement=True)
    job_id = Column(Integer, ForeignKey('jobs.id', ondelete='CASCADE'), nullable=False)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    resume_id = Column(Integer, ForeignKey('resumes.id', ondelete='CASCADE'), nullable=False)
    cover_letter = Column(Text)

    status = Column(
        Enum(*STATUSES, name='application_status'),
        nullable=False,
        default='pending'
    )
    notes = Column(Text)  # recruiter-only

    applied_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    job = relationship("Job", back_populates="applications")
    applicant = relationship("User", back_populates="applications")
    resume = relationship("Resume", back_populates="applications")

    __table_args__ = (
        UniqueConstraint('job_id', 'user_id', name='uq_applications_job_user'),
        Index('idx_applications_job_id', 'job_id'),
        Index('idx_applications_user_id', 'user_id'),
        Index('idx_applications_status', 'status'),
    )
