"""Optional hooks a sluggable model may implement.

The slug service checks for these with ``isinstance`` and calls through them;
models that do not inherit from them get the default behavior. They are plain
mixins rather than ABCs so they combine with the declarative metaclass.
"""

from typing import Any, Optional


class SlugHistoryCapable:
    """Slugs used in the past (renamed or deleted records) count as taken."""

    def slug_exists_in_history(self, slug: str, session: Optional[Any] = None) -> bool:
        """Return True if ``slug`` was ever held by another record.

        ``session`` is the one the uniqueness queries run in; the record itself
        may not belong to any session yet.
        """
        raise NotImplementedError

    def taken_numbers_in_history(self, slug: str, separator: str, taken: set[int], session: Optional[Any] = None) -> set[int]:
        """Return ``taken`` extended with suffix numbers used historically."""
        raise NotImplementedError


class SlugEngineCustomizer:
    def customize_slug_engine(self, engine: Any, field: str) -> Any:
        """Return the engine to use for ``field``; may mutate and return ``engine``."""
        raise NotImplementedError
