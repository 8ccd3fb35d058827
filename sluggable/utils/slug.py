from collections.abc import Mapping, Sequence
import logging
from typing import Any, Iterable, Optional

from .errors import config_error

logger = logging.getLogger(__name__)

_MISSING = object()

# Collections accepted as a reserved-word list. A bare string is rejected so
# "admin" is not silently treated as {"a", "d", "m", "i", "n"}.
_RESERVED_TYPES = (list, tuple, set, frozenset)


def data_get(target: Any, path: str, default: Any = None) -> Any:
    """Resolve a dotted ``path`` against attributes, mapping keys and indexes.

    ``data_get(post, "author.name")`` reads ``post.author.name``;
    ``data_get(post, "tags.0")`` reads ``post.tags[0]``. Any missing segment
    returns ``default``.
    """
    current = target
    for segment in path.split("."):
        if current is None:
            return default
        if isinstance(current, Mapping):
            current = current.get(segment, _MISSING)
        elif isinstance(current, Sequence) and not isinstance(current, str) and segment.isdigit():
            index = int(segment)
            current = current[index] if index < len(current) else _MISSING
        else:
            current = getattr(current, segment, _MISSING)
        if current is _MISSING:
            return default
    return current


def get_slug_source(record: Any, source: Optional[Iterable[str]]) -> str:
    """Return the raw text a slug is built from.

    With no ``source`` the record's ``str()`` is used. Otherwise each field is
    read in order and joined with a single space; missing values keep their
    position as empty strings.
    """
    if source is None:
        return str(record)
    parts = []
    for key in source:
        value = data_get(record, key)
        parts.append("" if value is None else str(value))
    return " ".join(parts)


def validate_slug(record: Any, field: str, slug: str, config) -> str:
    """Return ``slug``, or ``slug + separator + "1"`` if it is a reserved word.

    ``config.reserved`` may be None, a collection of strings, or a callable
    taking the record and returning either of those.
    """
    reserved = config.reserved
    if reserved is None:
        return slug

    if callable(reserved):
        reserved = reserved(record)
        if reserved is None:
            return slug

    if not isinstance(reserved, _RESERVED_TYPES) or not all(isinstance(word, str) for word in reserved):
        raise config_error(
            'Sluggable "reserved" is not None, a collection of strings, '
            "or a callable that returns None or a collection of strings.",
            record,
            field,
        )

    if slug in reserved:
        logger.debug("Slug %r is reserved for %s.%s", slug, type(record).__name__, field)
        return f"{slug}{config.separator}1"
    return slug


def numeric_suffix(value: str, prefix: str) -> Optional[int]:
    """Return N for ``value == prefix + "N"`` (ASCII digits only), else None."""
    if not value.startswith(prefix):
        return None
    remainder = value[len(prefix):]
    if remainder.isascii() and remainder.isdigit():
        return int(remainder)
    return None
