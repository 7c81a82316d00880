"""
SQLAlchemy Implementation of User Repository.
"""

from typing import List, Optional

from sqlalchemy import func, update

from hr_portal.domain.models.note import Note
from hr_portal.domain.models.user import User
from hr_portal.domain.repositories.user_repository import UserRepository
from hr_portal.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyUserRepository(SQLAlchemyRepository[User], UserRepository):
    """User repository implementation using SQLAlchemy."""

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def list_newest_first(self) -> List[User]:
        return self.db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()

    def count_notes(self, user_id: int) -> int:
        return self.db.query(func.count(Note.id)).filter(Note.author_id == user_id).scalar() or 0

    def set_recovery_answer_hash(self, user_id: int, new_hash: str) -> None:
        self.db.execute(
            update(User)
            .where(User.id == user_id)
            .values(recovery_answer_hash=new_hash)
            .execution_options(synchronize_session=False)
        )
        self.db.commit()

    def compare_and_set_recovery_answer_hash(self, user_id: int, expected_hash: str, new_hash: str) -> bool:
        result = self.db.execute(
            update(User)
            .where(User.id == user_id, User.recovery_answer_hash == expected_hash)
            .values(recovery_answer_hash=new_hash)
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        return result.rowcount == 1

    def compare_and_set_password_hash(self, user_id: int, expected_hash: str, new_hash: str) -> bool:
        result = self.db.execute(
            update(User)
            .where(User.id == user_id, User.password_hash == expected_hash)
            .values(password_hash=new_hash)
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        return result.rowcount == 1
