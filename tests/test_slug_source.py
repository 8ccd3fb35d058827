from types import SimpleNamespace

from sample_models import Author, Page, Post
from sluggable.utils.slug import data_get, get_slug_source


def test_data_get_paths():
    target = SimpleNamespace(
        author=SimpleNamespace(name="Ada"),
        meta={"lang": "en", "tags": ["python", "orm"]},
    )
    assert data_get(target, "author.name") == "Ada"
    assert data_get(target, "meta.lang") == "en"
    assert data_get(target, "meta.tags.1") == "orm"
    assert data_get(target, "meta.tags.5") is None
    assert data_get(target, "author.email", "n/a") == "n/a"
    assert data_get(target, "missing.deeper") is None


def test_source_none_uses_string_form():
    assert get_slug_source(Page(name="About Us"), None) == "About Us"


def test_source_fields_joined_in_order():
    post = Post(title="Hello", subtitle="World")
    assert get_slug_source(post, ("subtitle", "title")) == "World Hello"


def test_missing_values_keep_their_position():
    post = Post(title="Hello", subtitle="World")
    assert get_slug_source(post, ("title", "nope", "subtitle")) == "Hello  World"
    assert get_slug_source(Post(subtitle="World"), ("title", "subtitle")) == " World"


def test_source_follows_relationships():
    post = Post(title="Intro", author=Author(name="Ada Lovelace"))
    assert get_slug_source(post, ("author.name", "title")) == "Ada Lovelace Intro"


def test_non_string_values_are_stringified():
    post = Post(title="Top", id=10)
    assert get_slug_source(post, ("title", "id")) == "Top 10"
