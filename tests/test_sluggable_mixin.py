import pytest
from sqlalchemy.orm.exc import NoResultFound

from sample_models import Page, Post


def test_slug_field_is_first_declared(monkeypatch):
    assert Post.slug_field() == "slug"
    assert Page.slug_field() == "slug"
    monkeypatch.setattr(Post, "__sluggable__", {"subtitle": None, "slug": None})
    assert Post.slug_field() == "subtitle"


def test_find_by_slug(db):
    post = Post(title="Findable", slug="findable")
    db.add(post)
    db.commit()
    assert Post.find_by_slug(db, "findable") is post
    assert Post.find_by_slug(db, "missing") is None
    assert Post.where_slug(db, "findable").count() == 1


def test_find_by_slug_or_fail(db):
    with pytest.raises(NoResultFound):
        Post.find_by_slug_or_fail(db, "missing")


def test_resluggify_uses_default_service(db):
    post = Post(title="Resluggified Title")
    db.add(post)
    assert post.resluggify() is post
    assert post.slug == "resluggified-title"
