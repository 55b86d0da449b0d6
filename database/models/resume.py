from sqlalchemy import Column, Text, Integer, BigInteger, TIMESTAMP, ForeignKey, JSON, Index
from sqlalchemy.orm import relationship

from .base import Base
from .user import utcnow


class Resume(Base):
    """
    Uploaded resume with its extracted text.

    Only the extracted text is stored; the uploaded binary is processed in
    memory and discarded.
    """
    __tablename__ = 'resumes'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)

    # Display only
    original_name = Column(Text, nullable=False)
    mime_type = Column(Text)
    size_bytes = Column(BigInteger)

    content = Column(Text, nullable=False, default='')
    parsed_data = Column(JSON, default=dict)  # filename, preview, word_count, extracted_at
    term_profile = Column(JSON, default=dict)  # normalized term frequencies

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)

    owner = relationship("User", back_populates="resumes")
    matches = relationship("JobMatch", back_populates="resume", cascade="all, delete-orphan")
    applications = relationship("Application", back_populates="resume", cascade="all, delete-orphan")

    __table_args__ = (
        Index('idx_resumes_user_id', 'user_id'),
        Index('idx_resumes_created_at', 'created_at'),
    )
