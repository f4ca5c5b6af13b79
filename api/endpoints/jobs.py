from typing import List
from fastapi import APIRouter, Depends
from api.deps import get_store
from domain.errors import NotFoundError
from domain.schemas import Job, JobCreate
from infra.repositories.record_store import RecordStore

router = APIRouter()


@router.get("/jobs", response_model=List[Job])
async def list_jobs(store: RecordStore = Depends(get_store)) -> List[Job]:
    return store.list_jobs()


@router.post("/jobs", response_model=Job, status_code=201)
async def create_job(body: JobCreate, store: RecordStore = Depends(get_store)) -> Job:
    return store.create_job(body)


@router.get("/jobs/{id}", response_model=Job)
async def get_job(id: int, store: RecordStore = Depends(get_store)) -> Job:
    job = store.get_job(id)
    if not job:
        raise NotFoundError("Job")
    return job
