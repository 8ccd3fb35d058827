from .crud_slug import get_by_slug, list_slug_family, slug_is_taken
