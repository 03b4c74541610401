from __future__ import annotations

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobsearch.crawlers.fetchers import FetchFailure, FetchResult
from jobsearch.db.database import Base
from jobsearch.models import job as _job_model  # noqa: F401  register the jobs table


class FakeFetcher:
    """Serves canned markup per URL; unknown URLs fail like a network error."""

    def __init__(self, pages: dict[str, str] | None = None):
        self.pages = pages or {}
        self.calls: list[tuple[str, str]] = []

    def fetch(self, url: str, mode: str = "static") -> FetchResult:
        self.calls.append((url, mode))
        if url in self.pages:
            return FetchResult.success(url, self.pages[url])
        return FetchResult.failed(url, FetchFailure.NETWORK, "unreachable")


@pytest.fixture()
def session_factory():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    engine.dispose()


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def fake_fetcher():
    return FakeFetcher
