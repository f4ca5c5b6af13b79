import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_DEMO_JOBS"] = "false"
os.environ.pop("OPENAI_API_KEY", None)
os.environ.pop("OPENROUTER_API_KEY", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from api.deps import get_analyzer, get_store
from domain.schemas import JobCreate, MatchResult
from domain.services.resume_analyzer import ResumeAnalyzer
from infra.db.session import Base, init_db
from infra.repositories.record_store import RecordStore


class StubAnalyzer(ResumeAnalyzer):
    """Returns a canned result, or raises `error` when one is set."""

    def __init__(self, result=None, error=None):
        self.result = result or MatchResult(
            match_score=90, summary="Great fit", strengths=["exp"])
        self.error = error
        self.calls = []

    async def analyze_resume_against_job(self, job, resume_text):
        self.calls.append((job, resume_text))
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def engine():
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def store(engine):
    return RecordStore(sessionmaker(bind=engine, autoflush=False, autocommit=False))


@pytest.fixture
def analyzer():
    return StubAnalyzer()


@pytest.fixture
def client(store, analyzer):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_analyzer] = lambda: analyzer
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def engineer_job(store):
    return store.create_job(JobCreate(
        title="Engineer", description="Build things", requirements="5 yrs exp"))
