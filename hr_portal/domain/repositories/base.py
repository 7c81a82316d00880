"""
Repository contract shared by every HR record type.
Services depend on these protocols; the SQLAlchemy classes implement them.
"""

from typing import Any, Optional, Protocol, TypeVar

ModelT = TypeVar("ModelT")


class BaseRepository(Protocol[ModelT]):
    """Lookup by primary key plus create, update and delete."""

    def get_by_id(self, id: int) -> Optional[ModelT]:
        ...

    def create(self, obj_in: Any) -> ModelT:
        """Persist a new record from a schema or a dict of column values."""
        ...

    def update(self, db_obj: ModelT, obj_in: Any) -> ModelT:
        """Apply the given fields to ``db_obj`` and commit."""
        ...

    def delete(self, id: int) -> Optional[ModelT]:
        """Remove the record, returning it, or ``None`` when it does not exist."""
        ...
