from typing import Optional

from sqlalchemy.orm import Query, Session
from sqlalchemy.orm.exc import NoResultFound


class Sluggable:
    """Mixin for declarative models that carry one or more slug fields.

    Declare the fields with ``__sluggable__``, either as a list of field names
    (default options) or as a mapping of field name to option overrides::

        class Post(Sluggable, BaseModel):
            __sluggable__ = {"slug": {"source": "title"}}

    Slugs are filled in on flush once ``register_slug_listeners`` has been
    called for the session (or session factory).
    """

    __sluggable__ = ()

    def sluggable(self):
        return type(self).__sluggable__

    @classmethod
    def slug_field(cls) -> str:
        """The first declared slug field, used by the lookup helpers."""
        from sluggable.services.slug_config import iter_sluggable_fields

        for field, _ in iter_sluggable_fields(cls.__sluggable__, cls):
            return field
        return "slug"

    def resluggify(self, force: bool = False, session: Optional[Session] = None):
        """Re-run slug resolution now instead of waiting for the next flush."""
        from sluggable.services.slug_service import slug_service

        slug_service.slug(self, force=force, session=session)
        return self

    @classmethod
    def where_slug(cls, session: Session, slug: str, field: Optional[str] = None) -> Query:
        column = getattr(cls, field or cls.slug_field())
        return session.query(cls).filter(column == slug)

    @classmethod
    def find_by_slug(cls, session: Session, slug: str, field: Optional[str] = None):
        return cls.where_slug(session, slug, field).first()

    @classmethod
    def find_by_slug_or_fail(cls, session: Session, slug: str, field: Optional[str] = None):
        found = cls.find_by_slug(session, slug, field)
        if found is None:
            raise NoResultFound(f"No {cls.__name__} with slug {slug!r}")
        return found
