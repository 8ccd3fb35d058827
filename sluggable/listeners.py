"""Fill in slugs automatically when a session flushes.

``register_slug_listeners(SessionLocal)`` hooks ``before_flush`` on a session,
session factory or the ``Session`` class; every new or modified ``Sluggable``
object is slugged before its INSERT/UPDATE is emitted. For
``TracksSlugHistory`` models the previous slug is archived when it changes,
and the current one when the record is deleted.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from sqlalchemy import event
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import Session

from sluggable.models.slug_history import TracksSlugHistory, remember_slug
from sluggable.models.sluggable import Sluggable
from sluggable.services.slug_config import iter_sluggable_fields
from sluggable.services.slug_service import SlugService, slug_service

logger = logging.getLogger(__name__)

_registered: dict[int, tuple[Any, Any]] = {}


def _slug_fields(record: Sluggable) -> list[str]:
    return [field for field, _ in iter_sluggable_fields(record.sluggable(), record)]


def _archive_replaced_slugs(session: Session, record: Any) -> None:
    state = sa_inspect(record)
    if not state.has_identity:
        return
    for field in _slug_fields(record):
        for old in state.attrs[field].history.deleted:
            remember_slug(session, record, field, old)


def make_before_flush(service: Optional[SlugService] = None):
    service = service or slug_service

    def before_flush(session: Session, flush_context, instances) -> None:
        for record in list(session.new) + list(session.dirty):
            if not isinstance(record, Sluggable):
                continue
            service.slug(record, session=session)
            if isinstance(record, TracksSlugHistory):
                _archive_replaced_slugs(session, record)

        for record in list(session.deleted):
            if isinstance(record, Sluggable) and isinstance(record, TracksSlugHistory):
                for field in _slug_fields(record):
                    remember_slug(session, record, field, getattr(record, field, None))

    return before_flush


def register_slug_listeners(target: Any = Session, service: Optional[SlugService] = None) -> None:
    """Attach the slugging ``before_flush`` hook to ``target`` once."""
    if id(target) in _registered:
        return
    listener = make_before_flush(service)
    event.listen(target, "before_flush", listener)
    _registered[id(target)] = (target, listener)
    logger.debug("Registered slug listener on %r", target)


def unregister_slug_listeners(target: Any = Session) -> None:
    entry = _registered.pop(id(target), None)
    if entry is not None:
        event.remove(target, "before_flush", entry[1])
