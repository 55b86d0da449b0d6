from sqlalchemy import Column, Text, Integer, TIMESTAMP, ForeignKey, JSON, Index

from .base import Base
from .user import utcnow


class SearchQueryLog(Base):
    """
    History of free-text searches and the results returned.
    """
    __tablename__ = 'search_queries'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='SET NULL'), nullable=True)
    query = Column(Text, nullable=False)
    results = Column(JSON, default=list)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        Index('idx_search_queries_user_id', 'user_id'),
        Index('idx_search_queries_created_at', 'created_at'),
    )
