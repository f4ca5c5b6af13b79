from typing import List
from fastapi import APIRouter, Depends
from api.deps import get_orchestrator, get_store
from domain.errors import NotFoundError
from domain.schemas import Analysis, AnalyzeRequest
from domain.services.analysis_orchestrator import AnalysisOrchestrator
from infra.repositories.record_store import RecordStore

router = APIRouter()


@router.get("/analyses", response_model=List[Analysis])
async def list_analyses(store: RecordStore = Depends(get_store)) -> List[Analysis]:
    return store.list_analyses()


@router.get("/analyses/{id}", response_model=Analysis)
async def get_analysis(id: int, store: RecordStore = Depends(get_store)) -> Analysis:
    analysis = store.get_analysis(id)
    if not analysis:
        raise NotFoundError("Analysis")
    return analysis


@router.post("/analyze", response_model=Analysis, status_code=201)
async def analyze(
    body: AnalyzeRequest,
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
) -> Analysis:
    # runs to completion inside the request; failures surface as AnalysisFailedError
    return await orchestrator.run(body)
