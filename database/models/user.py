from datetime import datetime, timezone

from sqlalchemy import Column, Text, Integer, TIMESTAMP, Enum, Index
from sqlalchemy.orm import relationship

from .base import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """
    User account with role-based access.
    """
    __tablename__ = 'users'

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(Text, nullable=False, unique=True)
    password_hash = Column(Text, nullable=False)
    name = Column(Text, nullable=False)

    role = Column(
        Enum('user', 'recruiter', 'admin', name='user_role'),
        nullable=False,
        default='user'
    )

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)

    # Relationships
    resumes = relationship("Resume", back_populates="owner", cascade="all, delete-orphan")
    jobs = relationship("Job", back_populates="creator", cascade="all, delete-orphan")
    applications = relationship("Application", back_populates="applicant", cascade="all, delete-orphan")

    __table_args__ = (
        Index('idx_users_role', 'role'),
    )
