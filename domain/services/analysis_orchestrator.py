import logging
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from domain.errors import AIGatewayError, AnalysisFailedError, NotFoundError, ValidationError
from domain.schemas import (
    Analysis,
    AnalysisCreate,
    AnalysisStatus,
    AnalyzeRequest,
    ResumeCreate,
)
from domain.services.resume_analyzer import ResumeAnalyzer
from infra.repositories.record_store import RecordStore

logger = logging.getLogger(__name__)

PENDING_SUMMARY = "Analysis in progress..."
FAILED_SUMMARY = "AI analysis failed. Please try again."


def validate_request(**fields) -> AnalyzeRequest:
    """Build an AnalyzeRequest, reporting the first bad field."""
    try:
        return AnalyzeRequest.model_validate(fields)
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        raise ValidationError(field, first["msg"]) from exc


class AnalysisOrchestrator:
    """Takes one (job, resume) submission from pending to completed or failed.

    The resume and the pending analysis are written before the analyzer is
    called and are never rolled back. If the analyzer fails, the analysis is
    marked failed and AnalysisFailedError is raised; the row stays readable.
    """

    def __init__(self, store: RecordStore, analyzer: ResumeAnalyzer):
        self.store = store
        self.analyzer = analyzer

    async def submit_analysis(
        self,
        job_id: int,
        candidate_name: str,
        resume_text: str,
        file_name: Optional[str] = None,
    ) -> Analysis:
        request = validate_request(
            jobId=job_id,
            candidateName=candidate_name,
            resumeText=resume_text,
            fileName=file_name,
        )
        return await self.run(request)

    async def run(self, request: AnalyzeRequest) -> Analysis:
        job = self.store.get_job(request.job_id)
        if job is None:
            raise NotFoundError("Job")

        resume = self.store.create_resume(ResumeCreate(
            candidate_name=request.candidate_name,
            file_name=request.file_name,
            content=request.resume_text,
        ))
        analysis = self.store.create_analysis(AnalysisCreate(
            job_id=job.id,
            resume_id=resume.id,
            status=AnalysisStatus.PENDING,
            match_score=0,
            summary=PENDING_SUMMARY,
        ))
        logger.info("Analysis %s pending (job=%s resume=%s candidate=%r)",
                    analysis.id, job.id, resume.id, request.candidate_name)

        try:
            result = await self.analyzer.analyze_resume_against_job(job, request.resume_text)
        except Exception as exc:
            if not isinstance(exc, AIGatewayError):
                logger.exception("Analyzer raised unexpected error for analysis %s", analysis.id)
            else:
                logger.error("AI analysis failed for analysis %s: %s", analysis.id, exc)
            self.store.update_analysis(
                analysis.id,
                status=AnalysisStatus.FAILED,
                summary=FAILED_SUMMARY,
            )
            raise AnalysisFailedError(analysis.id) from exc

        analysis = self.store.update_analysis(
            analysis.id,
            match_score=result.match_score,
            summary=result.summary,
            strengths=result.strengths,
            weaknesses=result.weaknesses,
            missing_qualifications=result.missing_qualifications,
            status=AnalysisStatus.COMPLETED,
        )
        logger.info("Analysis %s completed with score %s", analysis.id, analysis.match_score)
        return analysis
