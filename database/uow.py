import contextlib
import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session, sessionmaker

from database.repositories import (
    UserRepository,
    ResumeRepository,
    JobRepository,
    MatchRepository,
    SearchQueryRepository,
    IdempotencyRepository,
    ApplicationRepository,
)

logger = logging.getLogger(__name__)


@dataclass
class Repositories:
    """All repositories bound to one Session."""
    session: Session
    users: UserRepository
    resumes: ResumeRepository
    jobs: JobRepository
    matches: MatchRepository
    searches: SearchQueryRepository
    idempotency: IdempotencyRepository
    applications: ApplicationRepository

    @classmethod
    def for_session(cls, session: Session) -> "Repositories":
        return cls(
            session=session,
            users=UserRepository(session),
            resumes=ResumeRepository(session),
            jobs=JobRepository(session),
            matches=MatchRepository(session),
            searches=SearchQueryRepository(session),
            idempotency=IdempotencyRepository(session),
            applications=ApplicationRepository(session),
        )


@contextlib.contextmanager
def uow(session_factory: sessionmaker):
    """Per-unit-of-work transaction scope.

    Yields Repositories bound to a fresh Session. Commits on success,
    rolls back on exception, always closes.

    Usage:
        with uow(session_factory) as repos:
            job = repos.jobs.get_by_id(job_id)
            # perform operations...
        # commit happens automatically on successful exit
    """
    session = session_factory()
    try:
        yield Repositories.for_session(session)
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
