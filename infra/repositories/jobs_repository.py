from typing import List, Optional
from sqlalchemy import func, select
from sqlalchemy.orm import sessionmaker
from domain.schemas import Job, JobCreate
from infra.db.session import SessionLocal
from infra.db.models import JobRecord


class JobsRepository:
    def __init__(self, session_factory: sessionmaker = SessionLocal):
        self._session_factory = session_factory

    def create(self, data: JobCreate) -> Job:
        with self._session_factory() as s:
            rec = JobRecord(**data.model_dump())
            s.add(rec)
            s.commit()
            s.refresh(rec)
            return Job.model_validate(rec)

    def get(self, job_id: int) -> Optional[Job]:
        with self._session_factory() as s:
            rec = s.get(JobRecord, job_id)
            if not rec:
                return None
            return Job.model_validate(rec)

    def list_all(self) -> List[Job]:
        with self._session_factory() as s:
            rows = s.scalars(
                select(JobRecord).order_by(JobRecord.created_at.desc(), JobRecord.id.desc()))
            return [Job.model_validate(r) for r in rows]

    def count(self) -> int:
        with self._session_factory() as s:
            return s.scalar(select(func.count()).select_from(JobRecord)) or 0
