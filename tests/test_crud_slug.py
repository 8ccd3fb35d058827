from sample_models import Post
from sluggable.crud import get_by_slug, list_slug_family, slug_is_taken


def _seed(db, *slugs):
    posts = [Post(slug=slug) for slug in slugs]
    db.add_all(posts)
    db.commit()
    return posts


def test_get_by_slug(db):
    (post,) = _seed(db, "one")
    assert get_by_slug(db, Post, "one") is post
    assert get_by_slug(db, Post, "two") is None


def test_slug_is_taken(db):
    (post,) = _seed(db, "one")
    assert slug_is_taken(db, Post, "one") is True
    assert slug_is_taken(db, Post, "one", exclude=post) is False
    assert slug_is_taken(db, Post, "two") is False


def test_list_slug_family(db):
    _seed(db, "base-10", "base", "base-2", "base-x", "based", "base-1")
    assert list_slug_family(db, Post, "base") == ["base", "base-1", "base-2", "base-10"]
