from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from api.deps import get_store
from infra.repositories.record_store import RecordStore

router = APIRouter()


@router.get("/health")
def health(store: RecordStore = Depends(get_store)):
    try:
        store.ping()
    except SQLAlchemyError as exc:
        raise HTTPException(status_code=503, detail=str(exc))
    return {"status": "ok", "database": "ok"}
