import math
from typing import Any, Dict, List, Optional
from sqlalchemy import func, select
from sqlalchemy.orm import sessionmaker
from domain.errors import AnalysisStateError, NotFoundError
from domain.schemas import Analysis, AnalysisCreate, AnalysisStatus
from infra.db.session import SessionLocal
from infra.db.models import AnalysisRecord

UPDATABLE_FIELDS = {
    "match_score",
    "summary",
    "strengths",
    "weaknesses",
    "missing_qualifications",
    "status",
}


def _to_column(name: str, value: Any) -> Any:
    if name == "status":
        return AnalysisStatus(value).value
    if name in ("strengths", "weaknesses", "missing_qualifications"):
        return [str(x) for x in (value or [])]
    return value


class AnalysesRepository:
    def __init__(self, session_factory: sessionmaker = SessionLocal):
        self._session_factory = session_factory

    def create(self, data: AnalysisCreate) -> Analysis:
        values = data.model_dump()
        values["status"] = AnalysisStatus(values["status"]).value
        with self._session_factory() as s:
            rec = AnalysisRecord(**values)
            s.add(rec)
            s.commit()
            s.refresh(rec)
            return Analysis.model_validate(rec)

    def get(self, analysis_id: int) -> Optional[Analysis]:
        with self._session_factory() as s:
            rec = s.get(AnalysisRecord, analysis_id)
            if not rec:
                return None
            return Analysis.model_validate(rec)

    def list_all(self) -> List[Analysis]:
        with self._session_factory() as s:
            rows = s.scalars(
                select(AnalysisRecord).order_by(
                    AnalysisRecord.created_at.desc(), AnalysisRecord.id.desc()))
            return [Analysis.model_validate(r) for r in rows]

    def update(self, analysis_id: int, **fields: Any) -> Analysis:
        """Apply a partial update to a pending analysis.

        Terminal rows (completed/failed) are frozen: any further update raises
        AnalysisStateError.
        """
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown analysis fields: {sorted(unknown)}")
        with self._session_factory() as s:
            rec = s.get(AnalysisRecord, analysis_id)
            if not rec:
                raise NotFoundError("Analysis")
            if AnalysisStatus(rec.status).is_terminal:
                raise AnalysisStateError(analysis_id, rec.status)
            for name, value in fields.items():
                setattr(rec, name, _to_column(name, value))
            s.commit()
            s.refresh(rec)
            return Analysis.model_validate(rec)

    def count_by_status(self) -> Dict[str, int]:
        with self._session_factory() as s:
            rows = s.execute(
                select(AnalysisRecord.status, func.count()).group_by(AnalysisRecord.status))
            return {status: n for status, n in rows}

    def average_score(self) -> int:
        # unscored rows count as 0
        with self._session_factory() as s:
            avg = s.scalar(select(func.avg(func.coalesce(AnalysisRecord.match_score, 0))))
        return int(math.floor(float(avg) + 0.5)) if avg is not None else 0
