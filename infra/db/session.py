from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from app.settings import settings


def make_engine(url: str) -> Engine:
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, echo=False, future=True, connect_args=connect_args)


engine = make_engine(settings.database_url)
SessionLocal = sessionmaker(
    bind=engine, autoflush=False, autocommit=False, future=True)


class Base(DeclarativeBase):
    pass


def init_db(bind: Engine = engine):
    from infra.db.models import JobRecord, ResumeRecord, AnalysisRecord
    Base.metadata.create_all(bind=bind)
