"""Unique, human-readable slugs for SQLAlchemy records."""

from .models import (
    SlugEngineCustomizer,
    SlugHistory,
    SlugHistoryCapable,
    Sluggable,
    TracksSlugHistory,
)
from .services.slug_config import ConfigResolver, SluggableFieldConfig
from .services.slug_engine import SlugEngine, SlugEngineCache
from .services.slug_service import SlugService, create_slug, slug_service
from .services.slug_unique import MAX_SUFFIX
from .listeners import register_slug_listeners, unregister_slug_listeners
from .utils.errors import SluggableConfigError, SluggableError, SlugSuffixExhaustedError

__all__ = [
    "ConfigResolver",
    "MAX_SUFFIX",
    "SlugEngine",
    "SlugEngineCache",
    "SlugEngineCustomizer",
    "SlugHistory",
    "SlugHistoryCapable",
    "SlugService",
    "SlugSuffixExhaustedError",
    "Sluggable",
    "SluggableConfigError",
    "SluggableError",
    "SluggableFieldConfig",
    "TracksSlugHistory",
    "create_slug",
    "register_slug_listeners",
    "slug_service",
    "unregister_slug_listeners",
]
