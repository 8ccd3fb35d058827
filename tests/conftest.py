from pathlib import Path
from dotenv import load_dotenv
import pytest

# Load environment variables for tests before settings are read
load_dotenv(Path(__file__).resolve().parents[1] / ".env.test")

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from sluggable.database import Base
from sluggable.listeners import register_slug_listeners, unregister_slug_listeners
from sluggable.services.slug_config import ConfigResolver
from sluggable.services.slug_service import SlugService

import sample_models  # noqa: F401  registers the test tables on Base

TEST_DEFAULTS = {
    "source": None,
    "separator": "-",
    "max_length": None,
    "method": None,
    "unique": True,
    "on_update": False,
    "reserved": None,
}


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def Session(engine):
    return sessionmaker(bind=engine, expire_on_commit=False)


@pytest.fixture
def db(Session):
    session = Session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def service():
    return SlugService(ConfigResolver(lambda: dict(TEST_DEFAULTS)))


@pytest.fixture
def slugging_session(Session, service):
    """A session whose flushes fill in slugs."""
    register_slug_listeners(Session, service)
    session = Session()
    try:
        yield session
    finally:
        session.close()
        unregister_slug_listeners(Session)
