from .errors import SluggableError, SluggableConfigError, SlugSuffixExhaustedError
from .slug import data_get, get_slug_source, numeric_suffix, validate_slug
