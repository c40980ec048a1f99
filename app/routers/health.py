import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from ..core.database import Database, get_database

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


def _database_reachable(database: Database) -> bool:
    try:
        database.ping()
    except SQLAlchemyError:
        logger.exception("Database ping failed")
        return False
    return True


@router.get("/health")
def health(database: Database = Depends(get_database)):
    if not _database_reachable(database):
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "error", "database": "unreachable"},
        )
    return {"status": "ok", "database": "ok"}


@router.get("/ready")
def ready(database: Database = Depends(get_database)):
    if not _database_reachable(database):
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"status": "not ready"})
    return {"status": "ready"}


@router.get("/live")
def live():
    return {"status": "alive"}
