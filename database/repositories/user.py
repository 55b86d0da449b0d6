import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import select, func

from database.models import User
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository):
    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.db.get(User, user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(User.email == email)
        return self.db.execute(stmt).scalar_one_or_none()

    def email_exists(self, email: str) -> bool:
        return self.get_by_email(email) is not None

    def create_user(self, email: str, password_hash: str, name: str, role: str = 'user') -> User:
        user = User(email=email, password_hash=password_hash, name=name, role=role)
        self.db.add(user)
        self.db.flush()  # Generate ID
        logger.info(f"Created {role} account {user.id}")
        return user

    def list_users(self, limit: int, offset: int) -> Tuple[List[User], int]:
        """Page through accounts newest first. Returns (rows, total)."""
        stmt = select(User).order_by(User.created_at.desc(), User.id.desc())
        return self.page(stmt, select(func.count(User.id)), limit, offset)

    def update_user(self, user: User, updates: Dict[str, Any]) -> List[str]:
        """Apply non-None updates for name, email, role and password_hash; returns fields changed."""
        updated = []
        for field_name in ('name', 'email', 'role', 'password_hash'):
            if updates.get(field_name) is not None:
                setattr(user, field_name, updates[field_name])
                updated.append(field_name)
        self.db.flush()
        return updated

    def delete_user(self, user: User) -> None:
        self.db.delete(user)
        self.db.flush()
        logger.info(f"Deleted account {user.id}")

    def count(self) -> int:
        return self.db.execute(select(func.count(User.id))).scalar_one()
