import json
import logging
from typing import Optional, Tuple, Any

from sqlalchemy.exc import IntegrityError

from database.models import IdempotencyKey
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class IdempotencyRepository(BaseRepository):
    def get_response(self, key: str, endpoint: str, scope: str) -> Optional[Tuple[int, Any]]:
        """Return (status_code, body) stored for key on endpoint within scope, or None."""
        record = self.db.get(IdempotencyKey, (key, endpoint, scope))
        if record is None:
            return None
        return record.status_code, json.loads(record.response)

    def save_response(self, key: str, endpoint: str, scope: str, status_code: int, body: Any) -> bool:
        """
        Store and commit the response for (key, endpoint, scope). First write wins.

        Must be called after the request's own work has been committed, since
        a losing race rolls the session back.

        Returns:
            False if another request already stored a response for this key.
        """
        if self.db.get(IdempotencyKey, (key, endpoint, scope)) is not None:
            return False

        self.db.add(IdempotencyKey(
            key=key,
            endpoint=endpoint,
            scope=scope,
            status_code=status_code,
            response=json.dumps(body)
        ))
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.info(f"Idempotency key already stored for {endpoint}, keeping first response: {key[:16]}")
            return False
        return True
