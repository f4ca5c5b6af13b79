from typing import Any, List, Optional
from sqlalchemy import text
from sqlalchemy.orm import sessionmaker
from domain.schemas import (
    Analysis,
    AnalysisCreate,
    AnalysisStatus,
    DashboardStats,
    Job,
    JobCreate,
    Resume,
    ResumeCreate,
)
from infra.db.session import SessionLocal
from infra.repositories.analyses_repository import AnalysesRepository
from infra.repositories.jobs_repository import JobsRepository
from infra.repositories.resumes_repository import ResumesRepository


class RecordStore:
    """Jobs, resumes and analyses behind one object, sharing a session factory."""

    def __init__(self, session_factory: sessionmaker = SessionLocal):
        self._session_factory = session_factory
        self.jobs = JobsRepository(session_factory)
        self.resumes = ResumesRepository(session_factory)
        self.analyses = AnalysesRepository(session_factory)

    def create_job(self, data: JobCreate) -> Job:
        return self.jobs.create(data)

    def get_job(self, job_id: int) -> Optional[Job]:
        return self.jobs.get(job_id)

    def list_jobs(self) -> List[Job]:
        return self.jobs.list_all()

    def create_resume(self, data: ResumeCreate) -> Resume:
        return self.resumes.create(data)

    def get_resume(self, resume_id: int) -> Optional[Resume]:
        return self.resumes.get(resume_id)

    def create_analysis(self, data: AnalysisCreate) -> Analysis:
        return self.analyses.create(data)

    def get_analysis(self, analysis_id: int) -> Optional[Analysis]:
        return self.analyses.get(analysis_id)

    def list_analyses(self) -> List[Analysis]:
        return self.analyses.list_all()

    def update_analysis(self, analysis_id: int, **fields: Any) -> Analysis:
        return self.analyses.update(analysis_id, **fields)

    def analysis_stats(self) -> DashboardStats:
        by_status = self.analyses.count_by_status()
        return DashboardStats(
            total_jobs=self.jobs.count(),
            total_analyses=sum(by_status.values()),
            average_score=self.analyses.average_score(),
            pending_analyses=by_status.get(AnalysisStatus.PENDING.value, 0),
        )

    def ping(self) -> None:
        with self._session_factory() as s:
            s.execute(text("SELECT 1"))
