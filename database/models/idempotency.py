from sqlalchemy import Column, Text, Integer, TIMESTAMP

from .base import Base
from .user import utcnow


class IdempotencyKey(Base):
    """
    First successful response stored for a client-supplied Idempotency-Key.

    Keys are scoped: the same header value sent to another endpoint, or by
    another caller, is a different record.
    """
    __tablename__ = 'idempotency_keys'

    key = Column(Text, primary_key=True)
    endpoint = Column(Text, primary_key=True)  # "POST /api/ask"
    scope = Column(Text, primary_key=True)  # "user:<id>" or "anon:<body digest>"
    status_code = Column(Integer, nullable=False, default=200)
    response = Column(Text, nullable=False)  # serialized JSON body
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
