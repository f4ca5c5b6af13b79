import math
from datetime import datetime, timezone
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class AnalysisStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self is not AnalysisStatus.PENDING


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


class StoredModel(CamelModel):
    """Row read back from the store. The database writes UTC without an
    offset, so naive timestamps are tagged as UTC."""

    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def as_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class JobCreate(CamelModel):
    title: str = Field(..., min_length=1)
    department: Optional[str] = None
    description: str = Field(..., min_length=1)
    requirements: Optional[str] = None

    check_blank = field_validator("title", "description")(_not_blank)


class Job(StoredModel):
    id: int
    title: str
    department: Optional[str] = None
    description: str
    requirements: Optional[str] = None


class ResumeCreate(CamelModel):
    candidate_name: str
    file_name: Optional[str] = None
    content: str


class Resume(StoredModel):
    id: int
    candidate_name: str
    file_name: Optional[str] = None
    content: str


class AnalysisCreate(CamelModel):
    job_id: int
    resume_id: int
    status: AnalysisStatus = AnalysisStatus.PENDING
    match_score: Optional[int] = None
    summary: Optional[str] = None
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)
    missing_qualifications: List[str] = Field(default_factory=list)


class Analysis(StoredModel):
    id: int
    job_id: int
    resume_id: int
    match_score: Optional[int] = None
    summary: Optional[str] = None
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)
    missing_qualifications: List[str] = Field(default_factory=list)
    status: AnalysisStatus

    @field_validator("strengths", "weaknesses", "missing_qualifications", mode="before")
    @classmethod
    def null_as_empty(cls, value):
        return [] if value is None else value


class AnalyzeRequest(CamelModel):
    job_id: int = Field(..., strict=True)
    resume_text: str = Field(..., min_length=1)
    candidate_name: str = Field(..., min_length=1)
    file_name: Optional[str] = None

    check_blank = field_validator("resume_text", "candidate_name")(_not_blank)


NO_SUMMARY = "No summary provided."


class MatchResult(CamelModel):
    """Parsed completion reply. Missing or malformed fields fall back to
    defaults so a partially usable reply still produces a result."""

    match_score: int = 0
    summary: str = NO_SUMMARY
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)
    missing_qualifications: List[str] = Field(default_factory=list)

    @field_validator("match_score", mode="before")
    @classmethod
    def coerce_score(cls, value: Any) -> int:
        if isinstance(value, bool) or value is None:
            return 0
        if isinstance(value, str):
            try:
                value = float(value.strip().rstrip("%"))
            except ValueError:
                return 0
        if not isinstance(value, (int, float)) or math.isnan(value):
            return 0
        # clamp before int() so infinities land on the bounds
        if value >= 100:
            return 100
        if value <= 0:
            return 0
        return int(round(value))

    @field_validator("summary", mode="before")
    @classmethod
    def coerce_summary(cls, value: Any) -> str:
        if value is None or (isinstance(value, str) and not value.strip()):
            return NO_SUMMARY
        return str(value)

    @field_validator("strengths", "weaknesses", "missing_qualifications", mode="before")
    @classmethod
    def ensure_list(cls, value: Any) -> List[str]:
        if value is None:
            return []
        if isinstance(value, str):
            return [value] if value.strip() else []
        if isinstance(value, list):
            return [str(item) for item in value if item is not None]
        return []


class DashboardStats(CamelModel):
    total_jobs: int
    total_analyses: int
    average_score: int
    pending_analyses: int
