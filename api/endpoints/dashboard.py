from fastapi import APIRouter, Depends
from api.deps import get_store
from domain.errors import NotFoundError
from domain.schemas import DashboardStats, Resume
from infra.repositories.record_store import RecordStore

router = APIRouter()


@router.get("/resumes/{id}", response_model=Resume)
async def get_resume(id: int, store: RecordStore = Depends(get_store)) -> Resume:
    resume = store.get_resume(id)
    if not resume:
        raise NotFoundError("Resume")
    return resume


@router.get("/stats", response_model=DashboardStats)
async def get_stats(store: RecordStore = Depends(get_store)) -> DashboardStats:
    return store.analysis_stats()
