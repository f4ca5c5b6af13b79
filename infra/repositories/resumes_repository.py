from typing import Optional
from sqlalchemy.orm import sessionmaker
from domain.schemas import Resume, ResumeCreate
from infra.db.session import SessionLocal
from infra.db.models import ResumeRecord


class ResumesRepository:
    def __init__(self, session_factory: sessionmaker = SessionLocal):
        self._session_factory = session_factory

    def create(self, data: ResumeCreate) -> Resume:
        with self._session_factory() as s:
            rec = ResumeRecord(**data.model_dump())
            s.add(rec)
            s.commit()
            s.refresh(rec)
            return Resume.model_validate(rec)

    def get(self, resume_id: int) -> Optional[Resume]:
        with self._session_factory() as s:
            rec = s.get(ResumeRecord, resume_id)
            if not rec:
                return None
            return Resume.model_validate(rec)
