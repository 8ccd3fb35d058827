from typing import Any, Optional

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import Session

from ..utils.slug import numeric_suffix


def _column(model: type, field: Optional[str]):
    if field is None:
        field = model.slug_field() if hasattr(model, "slug_field") else "slug"
    return getattr(model, field)


def get_by_slug(db: Session, model: type, slug: str, field: Optional[str] = None) -> Any:
    return db.query(model).filter(_column(model, field) == slug).first()


def slug_is_taken(db: Session, model: type, slug: str, field: Optional[str] = None, exclude: Any = None) -> bool:
    """Whether a record other than ``exclude`` holds ``slug``."""
    query = db.query(model).filter(_column(model, field) == slug)
    if exclude is not None:
        mapper = sa_inspect(model)
        for col, value in zip(mapper.primary_key, mapper.primary_key_from_instance(exclude)):
            if value is not None:
                query = query.filter(mapper.get_property_by_column(col).class_attribute != value)
    return db.query(query.exists()).scalar()


def list_slug_family(db: Session, model: type, base: str, separator: str = "-", field: Optional[str] = None) -> list[str]:
    """Return ``base`` and its numbered variants, ordered by suffix."""
    column = _column(model, field)
    prefix = f"{base}{separator}"
    rows = (
        db.query(column)
        .filter((column == base) | column.startswith(prefix, autoescape=True))
        .all()
    )
    family = []
    for (value,) in rows:
        if value == base:
            family.append((0, value))
            continue
        number = numeric_suffix(value, prefix)
        if number is not None:
            family.append((number, value))
    return [value for _, value in sorted(family)]
