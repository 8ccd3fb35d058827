from .capabilities import SlugEngineCustomizer, SlugHistoryCapable
from .sluggable import Sluggable
from .slug_history import SlugHistory, TracksSlugHistory, remember_slug

__all__ = [
    "SlugEngineCustomizer",
    "SlugHistoryCapable",
    "Sluggable",
    "SlugHistory",
    "TracksSlugHistory",
    "remember_slug",
]
