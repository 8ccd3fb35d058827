import logging
from typing import Optional

from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from sluggable.services.slug_service import SlugService, slug_service

logger = logging.getLogger(__name__)


def ensure_slug_index(engine: Engine, model: type, field: Optional[str] = None) -> bool:
    """Ensure a unique index exists on ``model``'s slug column.

    Application-level suffixing cannot stop two concurrent writers from
    picking the same slug; the index makes the second INSERT fail instead.
    Returns True if the index was created.
    """
    field = field or model.slug_field()
    table = model.__tablename__
    column = getattr(model, field).property.columns[0].name
    name = f"uq_{table}_{column}"

    inspector = inspect(engine)
    if table not in inspector.get_table_names():
        return False
    existing = {idx.get("name") for idx in inspector.get_indexes(table)}
    if name in existing:
        return False

    quote = engine.dialect.identifier_preparer.quote
    with engine.connect() as conn:
        conn.execute(
            text(
                f"CREATE UNIQUE INDEX {quote(name)} "
                f"ON {quote(table)} ({quote(column)})"
            )
        )
        conn.commit()
    logger.info("Created unique slug index %s", name)
    return True


def backfill_slugs(
    db: Session,
    model: type,
    force: bool = False,
    batch_size: int = 500,
    service: Optional[SlugService] = None,
) -> int:
    """Resolve slugs for existing rows of ``model``.

    Safe to run repeatedly: without ``force`` only rows whose slug is empty
    (or whose fields use ``on_update``) are touched. Changes are flushed every
    ``batch_size`` records; committing is left to the caller. Returns the
    number of records whose slugs changed.
    """
    service = service or slug_service
    mapper = inspect(model)
    order = [mapper.get_property_by_column(col).class_attribute for col in mapper.primary_key]

    changed = 0
    pending = 0
    for record in db.query(model).order_by(*order).all():
        if service.slug(record, force=force, session=db):
            changed += 1
            pending += 1
        if pending >= batch_size:
            db.flush()
            pending = 0
    if pending:
        db.flush()
    logger.info("Backfilled slugs for %d %s record(s)", changed, model.__name__)
    return changed
