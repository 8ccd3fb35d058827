"""Uniqueness enforcement via numeric suffixes.

A colliding slug ``base`` becomes ``base<sep>N`` where ``N`` is the smallest
positive integer not already used by another record in the ``base<sep>*``
family. The scan always starts at 1, so an existing suffix on the record
being re-slugged is not preserved.

Nothing here guards against two writers picking the same free number at the
same time; put a unique index on the slug column (see
``sluggable.db_utils.ensure_slug_index``) and retry on ``IntegrityError``.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from sqlalchemy import inspect as sa_inspect, or_
from sqlalchemy.orm import Session

from sluggable.models.capabilities import SlugHistoryCapable
from sluggable.utils.errors import SluggableError, SlugSuffixExhaustedError
from sluggable.utils.slug import numeric_suffix

logger = logging.getLogger(__name__)

MAX_SUFFIX = 9999


def _identity_attrs(model: type) -> list:
    mapper = sa_inspect(model)
    return [mapper.get_property_by_column(col).class_attribute for col in mapper.primary_key]


def _exclude_self(model: type, record: Any) -> list:
    """Filter clauses that leave the current record out of a query."""
    mapper = sa_inspect(model)
    values = mapper.primary_key_from_instance(record)
    if any(value is None for value in values):
        return []
    attrs = _identity_attrs(model)
    return [or_(*[attr != value for attr, value in zip(attrs, values)])]


def _unflushed_slugs(session: Session, record: Any, model: type, field: str) -> list[str]:
    """Slugs held in memory by other records of ``model`` not yet flushed.

    Lets several new records in one flush avoid colliding with each other.
    """
    slugs = []
    for obj in list(session.new) + list(session.dirty):
        if obj is record or not isinstance(obj, model):
            continue
        value = getattr(obj, field, None)
        if isinstance(value, str) and value:
            slugs.append(value)
    return slugs


def _stale_identities(session: Session, record: Any, model: type, field: str) -> set[tuple]:
    """Identities of other loaded records whose ``field`` changed in memory.

    Their stored value is about to be replaced, so it no longer counts as
    taken; the new value is covered by ``_unflushed_slugs``.
    """
    mapper = sa_inspect(model)
    stale = set()
    for obj in list(session.dirty):
        if obj is record or not isinstance(obj, model):
            continue
        if sa_inspect(obj).attrs[field].history.has_changes():
            stale.add(tuple(mapper.primary_key_from_instance(obj)))
    return stale


def make_slug_unique(session: Optional[Session], record: Any, field: str, slug: str, config) -> str:
    """Return ``slug``, suffixed with the smallest free number if it is taken."""
    if not config.unique:
        return slug

    model = type(record)
    if session is None:
        logger.error("No session to check slug uniqueness model=%s field=%s", model.__name__, field)
        raise SluggableError("A session is required to check slug uniqueness.", model.__name__, field)

    separator = config.separator
    column = getattr(model, field)
    exclude = _exclude_self(model, record)
    pending = _unflushed_slugs(session, record, model, field)
    stale = _stale_identities(session, record, model, field)

    with session.no_autoflush:
        holders = [
            tuple(row)
            for row in session.query(*_identity_attrs(model)).filter(column == slug, *exclude).all()
            if tuple(row) not in stale
        ]

        if not holders and slug not in pending:
            # The history check only runs when no live record holds the slug.
            if not isinstance(record, SlugHistoryCapable) or not record.slug_exists_in_history(slug, session=session):
                return slug

        prefix = f"{slug}{separator}"
        rows = (
            session.query(*_identity_attrs(model), column)
            .filter(column.startswith(prefix, autoescape=True), *exclude)
            .all()
        )

    family = {tuple(row[:-1]): row[-1] for row in rows if tuple(row[:-1]) not in stale}
    taken: set[int] = set()
    for value in list(family.values()) + pending:
        number = numeric_suffix(value, prefix) if isinstance(value, str) else None
        if number is not None:
            taken.add(number)

    if isinstance(record, SlugHistoryCapable):
        taken = {int(n) for n in record.taken_numbers_in_history(slug, separator, taken, session=session)}

    for number in range(1, MAX_SUFFIX + 1):
        if number not in taken:
            logger.debug(
                "Slug %r taken for %s.%s; using suffix %d",
                slug,
                model.__name__,
                field,
                number,
            )
            return f"{prefix}{number}"

    logger.error("No free slug suffix for %r model=%s field=%s", slug, model.__name__, field)
    raise SlugSuffixExhaustedError(
        f"No free numeric suffix for slug {slug!r} below {MAX_SUFFIX + 1}.",
        model.__name__,
        field,
    )
