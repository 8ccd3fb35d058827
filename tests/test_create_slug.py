import pytest

from sample_models import Article, Post
from sluggable.models import SlugHistory
from sluggable.utils.errors import SluggableConfigError


def test_create_slug_from_class(db, service):
    assert service.create_slug(Post, "slug", "My First Post", session=db) == "my-first-post"


def test_create_slug_is_unique(db, service):
    db.add(Post(title="x", slug="my-first-post"))
    db.commit()
    assert service.create_slug(Post, "slug", "My First Post", session=db) == "my-first-post-1"


def test_create_slug_uses_record_session(db, service):
    db.add(Post(title="x", slug="taken"))
    db.commit()
    post = Post()
    db.add(post)
    assert service.create_slug(post, "slug", "Taken") == "taken-1"


def test_create_slug_with_config(db, service):
    slug = service.create_slug(
        Post,
        "slug",
        "A Rather Long Title",
        config={"separator": "_", "max_length": 8, "unique": False},
    )
    assert slug == "a_rather"


def test_create_slug_uses_declared_config(db, service, monkeypatch):
    monkeypatch.setattr(Post, "__sluggable__", {"slug": {"reserved": ["new"], "unique": False}})
    assert service.create_slug(Post, "slug", "New") == "new-1"


def test_create_slug_skips_regeneration_checks(db, service):
    post = Post(title="Ignored", slug="already-set")
    db.add(post)
    assert service.create_slug(post, "slug", "Something Else") == "something-else"
    assert post.slug == "already-set"


@pytest.mark.parametrize("config", ["separator=_", ["unique"], 5])
def test_create_slug_rejects_bad_config(service, config):
    with pytest.raises(SluggableConfigError) as exc:
        service.create_slug(Post, "slug", "Title", config=config)
    assert exc.value.field == "slug"


def test_create_slug_without_session_uses_local_session(Session, db, service, monkeypatch):
    from sluggable import database

    monkeypatch.setattr(database, "SessionLocal", Session)
    db.add(Post(title="x", slug="hello"))
    db.commit()
    assert service.create_slug(Post, "slug", "Hello") == "hello-1"


def test_create_slug_consults_history_for_detached_model(db, service):
    db.add(SlugHistory(model="Article", field="slug", slug="launch", record_id="99"))
    db.commit()
    assert service.create_slug(Article, "slug", "Launch", session=db) == "launch-1"


def test_slug_for_transient_record_consults_history(db, service):
    db.add(SlugHistory(model="Article", field="slug", slug="launch", record_id="99"))
    db.commit()
    article = Article(title="Launch")
    service.slug(article, session=db)
    assert article.slug == "launch-1"
