from database.repositories.base import BaseRepository
from database.repositories.user import UserRepository
from database.repositories.resume import ResumeRepository
from database.repositories.job_post import JobRepository
from database.repositories.match import MatchRepository
from database.repositories.search import SearchQueryRepository
from database.repositories.idempotency import IdempotencyRepository
from database.repositories.application import ApplicationRepository

__all__ = [
    'BaseRepository',
    'UserRepository',
    'ResumeRepository',
    'JobRepository',
    'MatchRepository',
    'SearchQueryRepository',
    'IdempotencyRepository',
    'ApplicationRepository',
]
