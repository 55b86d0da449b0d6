from .base import Base
from .user import User
from .resume import Resume
from .job import Job
from .match import JobMatch
from .search import SearchQueryLog
from .idempotency import IdempotencyKey
from .application import Application

__all__ = [
    'Base',
    'User',
    'Resume',
    'Job',
    'JobMatch',
    'SearchQueryLog',
    'IdempotencyKey',
    'Application',
]
