from typing import Any, List, Tuple

from sqlalchemy import Select
from sqlalchemy.orm import Session


class BaseRepository:
    def __init__(self, db: Session):
        self.db = db

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()

    def page(self, stmt: Select, count_stmt: Select, limit: int, offset: int) -> Tuple[List[Any], int]:
        """Run stmt for one page of entities and count_stmt for the total. Returns (rows, total)."""
        rows = self.db.execute(stmt.limit(limit).offset(offset)).scalars().all()
        total = self.db.execute(count_stmt).scalar_one()
        return rows, total
