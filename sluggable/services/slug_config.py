"""Per-field slug configuration.

The process defaults come from ``sluggable.core.config.settings`` and are read
once; each sluggable field may override any of them in the model's
``__sluggable__`` declaration.
"""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any, Callable, Iterator, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from sluggable.core.config import default_slug_config
from sluggable.utils.errors import config_error

logger = logging.getLogger(__name__)

# camelCase spellings accepted in overrides.
_ALIASES = {
    "maxLength": "max_length",
    "onUpdate": "on_update",
}


class SluggableFieldConfig(BaseModel):
    """Effective options for one sluggable field."""

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="ignore", frozen=True)

    source: Optional[tuple[str, ...]] = None
    separator: str = "-"
    max_length: Optional[int] = None
    # Checked where they are used so a bad value fails with the model and
    # field attached.
    method: Any = None
    unique: bool = True
    on_update: bool = False
    reserved: Any = None

    @field_validator("source", mode="before")
    def normalize_source(cls, v: Any) -> Any:
        if v is None or v == "":
            return None
        if isinstance(v, str):
            return (v,)
        return tuple(v)


def _normalize_keys(values: Mapping[str, Any]) -> dict[str, Any]:
    return {_ALIASES.get(key, key): value for key, value in values.items()}


class ConfigResolver:
    """Merge the process defaults with per-field overrides.

    ``defaults_loader`` is called at most once, on first use.
    """

    def __init__(self, defaults_loader: Optional[Callable[[], Mapping[str, Any]]] = None):
        self._loader = defaults_loader or default_slug_config
        self._defaults: Optional[dict[str, Any]] = None

    def defaults(self) -> dict[str, Any]:
        if self._defaults is None:
            self._defaults = _normalize_keys(self._loader())
            logger.debug("Loaded slug defaults: %s", self._defaults)
        return self._defaults

    def resolve(self, overrides: Optional[Mapping[str, Any]] = None, model=None, field: Optional[str] = None) -> SluggableFieldConfig:
        if overrides is None:
            overrides = {}
        elif not isinstance(overrides, Mapping):
            raise config_error(
                f"Sluggable config must be a mapping or None; {type(overrides).__name__} given.",
                model,
                field,
            )
        merged = {**self.defaults(), **_normalize_keys(overrides)}
        try:
            return SluggableFieldConfig(**merged)
        except ValidationError as exc:
            raise config_error(f"Invalid sluggable option: {exc}", model, field) from exc


def iter_sluggable_fields(declaration: Any, model=None) -> Iterator[tuple[str, Optional[Mapping[str, Any]]]]:
    """Yield ``(field, overrides)`` pairs for a sluggable declaration.

    Accepts a single field name, a sequence of names (default options), or a
    mapping of name to partial overrides (``None`` meaning default options).
    """
    if not declaration:
        return
    if isinstance(declaration, str):
        yield declaration, None
    elif isinstance(declaration, Mapping):
        for field, overrides in declaration.items():
            if overrides is not None and not isinstance(overrides, Mapping):
                raise config_error(
                    f"Sluggable declaration for a field must be a mapping or None; {type(overrides).__name__} given.",
                    model,
                    field,
                )
            yield field, overrides
    else:
        for field in declaration:
            yield field, None
