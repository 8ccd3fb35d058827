"""Slug generation.

``SlugEngine`` wraps python-slugify so a model can tune transliteration per
field (extra replacement rules, stopwords, a custom allowed-character regex)
through ``customize_slug_engine``. Engines are built once per
``(model, field)`` and kept in a ``SlugEngineCache``.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from slugify import slugify

from sluggable.models.capabilities import SlugEngineCustomizer
from sluggable.utils.errors import config_error

logger = logging.getLogger(__name__)


class SlugEngine:
    """Default transliteration engine."""

    def __init__(
        self,
        rules: Optional[dict[str, str]] = None,
        stopwords: Iterable[str] = (),
        regex_pattern: Optional[str] = None,
        lowercase: bool = True,
        allow_unicode: bool = False,
    ):
        self.rules: dict[str, str] = dict(rules or {})
        self.stopwords = tuple(stopwords)
        self.regex_pattern = regex_pattern
        self.lowercase = lowercase
        self.allow_unicode = allow_unicode

    def add_rule(self, old: str, new: str) -> "SlugEngine":
        self.rules[old] = new
        return self

    def add_rules(self, rules: dict[str, str]) -> "SlugEngine":
        self.rules.update(rules)
        return self

    def slugify(self, text: str, separator: str = "-") -> str:
        return slugify(
            text,
            separator=separator,
            stopwords=self.stopwords,
            regex_pattern=self.regex_pattern,
            lowercase=self.lowercase,
            replacements=[[old, new] for old, new in self.rules.items()],
            allow_unicode=self.allow_unicode,
        )


class SlugEngineCache:
    """Engines keyed by ``(model class, field)``, built on first use."""

    def __init__(self):
        self._engines: dict[tuple[type, str], Any] = {}

    def get(self, record: Any, field: str):
        key = (type(record), field)
        engine = self._engines.get(key)
        if engine is None:
            engine = SlugEngine()
            if isinstance(record, SlugEngineCustomizer):
                engine = record.customize_slug_engine(engine, field)
            self._engines[key] = engine
            logger.debug("Built slug engine for %s.%s", key[0].__name__, field)
        return engine

    def clear(self) -> None:
        self._engines.clear()

    def __len__(self) -> int:
        return len(self._engines)


def generate_slug(record: Any, field: str, source: str, config, engines: SlugEngineCache) -> str:
    """Turn ``source`` into a candidate slug.

    ``config.method`` replaces the engine entirely when set; it is called as
    ``method(source, separator)``. ``max_length`` truncates the candidate
    before any uniqueness suffix is added.
    """
    separator = config.separator
    method = config.method

    if method is None:
        slug = engines.get(record, field).slugify(source, separator)
    elif callable(method):
        slug = method(source, separator)
    else:
        raise config_error('Sluggable "method" is not callable nor None.', record, field)

    if isinstance(slug, str) and config.max_length:
        slug = slug[: config.max_length]

    return slug
