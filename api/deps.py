from functools import lru_cache
from fastapi import Depends
from domain.services.analysis_orchestrator import AnalysisOrchestrator
from domain.services.resume_analyzer import ResumeAnalyzer
from infra.llm.client import ChatCompletionGateway
from infra.repositories.record_store import RecordStore


@lru_cache
def get_store() -> RecordStore:
    return RecordStore()


@lru_cache
def get_analyzer() -> ResumeAnalyzer:
    return ChatCompletionGateway()


def get_orchestrator(
    store: RecordStore = Depends(get_store),
    analyzer: ResumeAnalyzer = Depends(get_analyzer),
) -> AnalysisOrchestrator:
    return AnalysisOrchestrator(store, analyzer)
