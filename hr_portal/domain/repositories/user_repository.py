"""
User Repository Interface.
The credential store: users by id and by email, plus the conditional
writes the password and recovery flows rely on.
"""

from typing import List, Optional

from hr_portal.domain.repositories.base import BaseRepository
from hr_portal.domain.models.user import User


class UserRepository(BaseRepository[User]):
    """Interface for User-specific operations."""

    def get_by_email(self, email: str) -> Optional[User]:
        """Exact (case-sensitive) email lookup."""
        ...

    def list_newest_first(self) -> List[User]:
        """All users ordered by creation date, newest first."""
        ...

    def count_notes(self, user_id: int) -> int:
        """Number of notes authored by the user."""
        ...

    def set_recovery_answer_hash(self, user_id: int, new_hash: str) -> None:
        """Unconditionally store a recovery-answer hash."""
        ...

    def compare_and_set_recovery_answer_hash(self, user_id: int, expected_hash: str, new_hash: str) -> bool:
        """Replace the recovery-answer hash only if it still equals ``expected_hash``."""
        ...

    def compare_and_set_password_hash(self, user_id: int, expected_hash: str, new_hash: str) -> bool:
        """Replace the password hash only if it still equals ``expected_hash``."""
        ...
