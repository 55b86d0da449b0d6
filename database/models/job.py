from sqlalchemy import Column, Text, Integer, TIMESTAMP, ForeignKey, Index
from sqlalchemy.orm import relationship

from .base import Base
from .user import utcnow


class Job(Base):
    """
    Job posting created by a recruiter or admin.
    """
    __tablename__ = 'jobs'

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    requirements = Column(Text, default='')
    company = Column(Text, default='')
    location = Column(Text, default='')
    salary_range = Column(Text, default='')

    created_by = Column(Integer, ForeignKey('users.id'), nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)

    creator = relationship("User", back_populates="jobs")
    matches = relationship("JobMatch", back_populates="job", cascade="all, delete-orphan")
    applications = relationship("Application", back_populates="job", cascade="all, delete-orphan")

    __table_args__ = (
        Index('idx_jobs_created_by', 'created_by'),
        Index('idx_jobs_created_at', 'created_at'),
    )

    # Fields a creator may change through PATCH
    UPDATABLE_FIELDS = ('title', 'description', 'requirements', 'company', 'location', 'salary_range')
