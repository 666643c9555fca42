"""Pytest configuration and shared fixtures."""

import os

# Settings are read at import time; point every backend at test doubles first.
os.environ["ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["REDIS_ENABLED"] = "false"
os.environ["ELASTICSEARCH_ENABLED"] = "false"

from collections.abc import Generator  # noqa: E402
from unittest.mock import MagicMock  # noqa: E402

import fakeredis  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy.engine import Engine  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402

from app import models  # noqa: E402,F401
from app.cache.redis import RedisCache  # noqa: E402
from app.db.base import Base  # noqa: E402
from app.db.engine import create_db_engine  # noqa: E402
from app.questions.grammar import GRAMMAR  # noqa: E402
from app.questions.listening import LISTENING  # noqa: E402
from app.questions.reading import READING  # noqa: E402
from app.questions.speaking import SPEAKING  # noqa: E402
from app.questions.updator import QuestionUpdator, create_question_updator  # noqa: E402
from app.questions.writing import WRITING  # noqa: E402
from app.services.grammar_services import GrammarServices, build_grammar_services  # noqa: E402
from app.services.listening_services import ListeningServices, build_listening_services  # noqa: E402
from app.services.reading_services import ReadingServices, build_reading_services  # noqa: E402
from app.services.speaking_services import SpeakingServices, build_speaking_services  # noqa: E402
from app.services.writing_services import WritingServices, build_writing_services  # noqa: E402
from app.system.health import BackendHealth  # noqa: E402


@pytest.fixture(scope="function")
def engine() -> Generator[Engine, None, None]:
    """Fresh in-memory database per test."""
    test_engine = create_db_engine("sqlite+pysqlite:///:memory:")
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture(scope="function")
def db(engine: Engine) -> Generator[Session, None, None]:
    session = Session(bind=engine, autoflush=False, expire_on_commit=False)
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def redis_client() -> fakeredis.FakeRedis:
    return fakeredis.FakeRedis(decode_responses=True)


@pytest.fixture
def cache(redis_client) -> RedisCache:
    return RedisCache(redis_client)


@pytest.fixture
def es_client() -> MagicMock:
    """Elasticsearch stand-in: index exists, searches return nothing unless overridden."""
    client = MagicMock()
    client.indices.exists.return_value = True
    client.search.return_value = {"hits": {"total": {"value": 0, "relation": "eq"}, "hits": []}}
    client.ping.return_value = True
    return client


@pytest.fixture
def health() -> BackendHealth:
    return BackendHealth(cache_usable=True, search_usable=True)


@pytest.fixture
def grammar_updator(cache, es_client, health) -> QuestionUpdator:
    return create_question_updator(GRAMMAR, cache=cache, search_client=es_client, health=health)


@pytest.fixture
def speaking_updator(cache, es_client, health) -> QuestionUpdator:
    return create_question_updator(SPEAKING, cache=cache, search_client=es_client, health=health)


@pytest.fixture
def grammar(grammar_updator) -> GrammarServices:
    return build_grammar_services(grammar_updator)


@pytest.fixture
def speaking(speaking_updator) -> SpeakingServices:
    return build_speaking_services(speaking_updator)


@pytest.fixture
def listening(cache, es_client, health) -> ListeningServices:
    updator = create_question_updator(LISTENING, cache=cache, search_client=es_client, health=health)
    return build_listening_services(updator)


@pytest.fixture
def reading(cache, es_client, health) -> ReadingServices:
    updator = create_question_updator(READING, cache=cache, search_client=es_client, health=health)
    return build_reading_services(updator)


@pytest.fixture
def writing(cache, es_client, health) -> WritingServices:
    updator = create_question_updator(WRITING, cache=cache, search_client=es_client, health=health)
    return build_writing_services(updator)


def _indexed_documents(es_client: MagicMock) -> list[dict]:
    """Every document passed to client.index(), oldest first."""
    return [call.kwargs["document"] for call in es_client.index.call_args_list]


@pytest.fixture
def last_indexed(es_client):
    def _last() -> dict:
        docs = _indexed_documents(es_client)
        assert docs, "nothing was indexed"
        return docs[-1]

    return _last
