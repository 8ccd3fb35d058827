"""Slug resolution for sluggable records.

For every field a model declares in ``__sluggable__`` the service decides
whether the slug has to be (re)built and, if so, runs

    source text -> candidate slug -> reserved-word check -> unique suffix

and writes the result back onto the record. Persisting it is left to the
caller's session.
"""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any, Optional

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import Session, object_session

from sluggable.database import get_db_session
from sluggable.services.slug_config import ConfigResolver, SluggableFieldConfig, iter_sluggable_fields
from sluggable.services.slug_engine import SlugEngineCache, generate_slug
from sluggable.services.slug_unique import make_slug_unique
from sluggable.utils.errors import config_error
from sluggable.utils.slug import get_slug_source, validate_slug

logger = logging.getLogger(__name__)


def is_dirty(record: Any, field: str) -> bool:
    """Whether ``field`` changed since the record was loaded (or created)."""
    return sa_inspect(record).attrs[field].history.has_changes()


def exists(record: Any) -> bool:
    """Whether the record has been persisted before."""
    return sa_inspect(record).has_identity


class SlugService:
    """Owns the slug defaults and the per-field engine cache.

    Build one per application (``slug_service`` below is the instance the
    flush listener uses); tests can build isolated ones.
    """

    def __init__(self, config_resolver: Optional[ConfigResolver] = None, engine_cache: Optional[SlugEngineCache] = None):
        self.configs = config_resolver or ConfigResolver()
        self.engines = engine_cache or SlugEngineCache()

    def slug(self, record: Any, force: bool = False, session: Optional[Session] = None) -> set[str]:
        """Resolve every declared slug field of ``record``.

        Returns the names of the sluggable fields that are dirty afterwards.
        """
        if session is None:
            session = object_session(record)

        fields = []
        for field, overrides in iter_sluggable_fields(record.sluggable(), record):
            config = self.configs.resolve(overrides, record, field)
            slug = self.build_slug(record, field, config, force=force, session=session)
            if slug != getattr(record, field, None):
                setattr(record, field, slug)
            fields.append(field)

        return {field for field in fields if is_dirty(record, field)}

    def needs_slugging(self, record: Any, field: str, config: SluggableFieldConfig) -> bool:
        """Whether ``field`` has to be (re)built on this call.

        "Empty" means falsy in the Python sense: None or "". A stored "0" is a
        real slug and is kept.
        """
        if not getattr(record, field, None) or config.on_update:
            return True
        # An explicitly assigned slug wins.
        if is_dirty(record, field):
            return False
        return not exists(record)

    def build_slug(
        self,
        record: Any,
        field: str,
        config: SluggableFieldConfig,
        force: bool = False,
        session: Optional[Session] = None,
    ) -> Optional[str]:
        slug = getattr(record, field, None)

        if not (force or self.needs_slugging(record, field, config)):
            return slug

        source = get_slug_source(record, config.source)
        if not source.strip():
            logger.debug("Empty slug source for %s.%s; keeping %r", type(record).__name__, field, slug)
            return slug

        slug = generate_slug(record, field, source, config, self.engines)
        slug = validate_slug(record, field, slug, config)
        slug = make_slug_unique(session, record, field, slug, config)
        logger.debug("Resolved %s.%s to %r", type(record).__name__, field, slug)
        return slug

    def create_slug(
        self,
        model: Any,
        field: str,
        from_string: str,
        config: Optional[Mapping[str, Any]] = None,
        session: Optional[Session] = None,
    ) -> str:
        """Return a unique slug for ``from_string`` without touching a record.

        ``model`` may be a sluggable class (instantiated with no arguments)
        or an instance. With ``config=None`` the model's own declaration for
        ``field`` is used. Without a session (given or owned by the record) the
        uniqueness queries run in a short-lived ``get_db_session()``.
        """
        record = model() if isinstance(model, type) else model

        if config is None:
            config = dict(iter_sluggable_fields(record.sluggable(), record)).get(field)
        elif not isinstance(config, Mapping):
            raise config_error(
                f"create_slug expects a mapping or None as config; {type(config).__name__} given.",
                record,
                field,
            )

        resolved = self.configs.resolve(config, record, field)
        if session is None:
            session = object_session(record)

        slug = generate_slug(record, field, from_string, resolved, self.engines)
        slug = validate_slug(record, field, slug, resolved)
        if session is None and resolved.unique:
            with get_db_session() as db:
                return make_slug_unique(db, record, field, slug, resolved)
        return make_slug_unique(session, record, field, slug, resolved)


slug_service = SlugService()


def create_slug(model: Any, field: str, from_string: str, config: Optional[Mapping[str, Any]] = None, session: Optional[Session] = None) -> str:
    return slug_service.create_slug(model, field, from_string, config=config, session=session)
