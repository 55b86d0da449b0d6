"""
Relevance Interfaces - Boundaries between the relevance core and storage.

The core receives a read-only document source and an optional audit sink
instead of reaching for a database session itself.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from core.relevance.models import Document, Role


class DocumentSource(ABC):
    """
    Read-only capability for loading candidate resumes.
    """

    @abstractmethod
    def list_documents(self, owner_id: Optional[int] = None) -> List[Document]:
        """
        Return candidate documents in retrieval order.

        Args:
            owner_id: Restrict to documents uploaded by this user, or None for all
        """
        pass


class AuditSink(ABC):
    """
    Best-effort recorder for ranked result sets.

    Implementations may raise; the pipeline logs and discards the error.
    """

    @abstractmethod
    def record_search(self, query: str, results: list, user_id: Optional[int] = None) -> None:
        pass

    @abstractmethod
    def record_matches(self, job_id: int, results: list) -> None:
        pass


def search_scope(role: Role, user_id: int) -> Optional[int]:
    """Owner filter for search: plain users only search their own resumes."""
    return user_id if role == Role.USER else None
