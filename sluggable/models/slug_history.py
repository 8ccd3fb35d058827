# sluggable/models/slug_history.py

from typing import Any, Optional

from sqlalchemy import Column, Integer, String, or_
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import Session, object_session

from .base import BaseModel
from .capabilities import SlugHistoryCapable
from ..utils.slug import numeric_suffix


class SlugHistory(BaseModel):
    """Slugs previously held by renamed or deleted records."""

    __tablename__ = "slug_history"

    id = Column(Integer, primary_key=True, index=True)
    model = Column(String, nullable=False, index=True)
    field = Column(String, nullable=False)
    slug = Column(String, nullable=False, index=True)
    # Stringified primary key of the record that held the slug
    record_id = Column(String, nullable=True, index=True)


def record_identity(record: Any) -> Optional[str]:
    values = sa_inspect(type(record)).primary_key_from_instance(record)
    if any(value is None for value in values):
        return None
    return ":".join(str(value) for value in values)


class TracksSlugHistory(SlugHistoryCapable):
    """Treat slugs in ``slug_history`` as taken for this model.

    A record's own past slugs are not held against it, so renaming back to an
    earlier title gives the earlier slug back.
    """

    @classmethod
    def slug_history_key(cls) -> str:
        return cls.__name__

    def _history_query(self, session: Session):
        query = session.query(SlugHistory.slug).filter(SlugHistory.model == self.slug_history_key())
        own_id = record_identity(self)
        if own_id is not None:
            query = query.filter(or_(SlugHistory.record_id.is_(None), SlugHistory.record_id != own_id))
        return query

    def slug_exists_in_history(self, slug: str, session: Optional[Session] = None) -> bool:
        session = session if session is not None else object_session(self)
        if session is None:
            return False
        with session.no_autoflush:
            return self._history_query(session).filter(SlugHistory.slug == slug).first() is not None

    def taken_numbers_in_history(
        self, slug: str, separator: str, taken: set[int], session: Optional[Session] = None
    ) -> set[int]:
        session = session if session is not None else object_session(self)
        numbers = set(taken)
        if session is None:
            return numbers
        prefix = f"{slug}{separator}"
        with session.no_autoflush:
            rows = self._history_query(session).filter(SlugHistory.slug.startswith(prefix, autoescape=True)).all()
        for (value,) in rows:
            number = numeric_suffix(value, prefix)
            if number is not None:
                numbers.add(number)
        return numbers


def remember_slug(session: Session, record: TracksSlugHistory, field: str, slug: Optional[str]) -> Optional[SlugHistory]:
    """Archive ``slug`` as formerly held by ``record``; no-op if already stored."""
    if not slug:
        return None
    key = record.slug_history_key()
    record_id = record_identity(record)
    with session.no_autoflush:
        found = (
            session.query(SlugHistory)
            .filter(
                SlugHistory.model == key,
                SlugHistory.field == field,
                SlugHistory.slug == slug,
                SlugHistory.record_id == record_id if record_id is not None else SlugHistory.record_id.is_(None),
            )
            .first()
        )
    if found is not None:
        return found
    entry = SlugHistory(model=key, field=field, slug=slug, record_id=record_id)
    session.add(entry)
    return entry
