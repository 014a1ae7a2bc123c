"""Database version endpoint."""
from __future__ import annotations

from fastapi import APIRouter, Depends
from loguru import logger
from sqlalchemy import text
from sqlalchemy.orm import Session

from app.api import deps

router = APIRouter(tags=["meta"])

_VERSION_QUERIES = {
    "sqlite": "SELECT sqlite_version()",
}


@router.get("/version")
def read_database_version(db: Session = Depends(deps.get_db)) -> dict[str, str]:
    """Return the version string reported by the database server."""

    dialect = db.get_bind().dialect.name
    logger.info("Fetching database version", dialect=dialect)
    version = db.execute(text(_VERSION_QUERIES.get(dialect, "SELECT version()"))).scalar_one()
    return {"version": str(version)}
