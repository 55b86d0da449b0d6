import logging
from typing import List, Optional, Dict, Any, Tuple

from sqlalchemy import select, func

from database.models import SearchQueryLog
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class SearchQueryRepository(BaseRepository):
    def log_query(self, query: str, results: List[Dict[str, Any]], user_id: Optional[int] = None) -> SearchQueryLog:
        entry = SearchQueryLog(query=query, results=results, user_id=user_id)
        self.db.add(entry)
        self.db.flush()
        return entry

    def list_history(
        self,
        limit: int,
        offset: int,
        user_id: Optional[int] = None
    ) -> Tuple[List[SearchQueryLog], int]:
        conditions = []
        if user_id is not None:
            conditions.append(SearchQueryLog.user_id == user_id)

        stmt = (
            select(SearchQueryLog)
            .where(*conditions)
            .order_by(SearchQueryLog.created_at.desc(), SearchQueryLog.id.desc())
        )
        return self.page(stmt, select(func.count(SearchQueryLog.id)).where(*conditions), limit, offset)

    def count(self) -> int:
        return self.db.execute(select(func.count(SearchQueryLog.id))).scalar_one()

    def top_queries(self, limit: int = 5) -> List[Tuple[str, int]]:
        frequency = func.count(SearchQueryLog.id).label('frequency')
        stmt = (
            select(SearchQueryLog.query, frequency)
            .group_by(SearchQueryLog.query)
            .order_by(frequency.desc(), SearchQueryLog.query)
            .limit(limit)
        )
        return [(row.query, row.frequency) for row in self.db.execute(stmt).all()]
