from typing import Optional
import logging

logger = logging.getLogger(__name__)


class SluggableError(Exception):
    """Base error raised while resolving a slug.

    Carries the record type and field so the failing declaration can be found
    without a traceback dig.
    """

    def __init__(self, message: str, model: Optional[str] = None, field: Optional[str] = None):
        self.model = model
        self.field = field
        if model and field:
            message = f"{message} ({model}:{field})"
        super().__init__(message)


class SluggableConfigError(SluggableError, ValueError):
    """A sluggable option has a shape the engine cannot use."""


class SlugSuffixExhaustedError(SluggableError):
    """Every numeric suffix up to the scan bound is already taken."""


def model_name(model) -> str:
    """Return a readable type name for a record instance or class."""
    cls = model if isinstance(model, type) else type(model)
    return cls.__name__


def config_error(message: str, model=None, field: Optional[str] = None) -> SluggableConfigError:
    """Return a SluggableConfigError and log its details."""
    name = model_name(model) if model is not None else None
    logger.error("%s model=%s field=%s", message, name, field)
    return SluggableConfigError(message, name, field)
