"""Public API routes: no authentication required."""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from app.infrastructure.database import get_db

router = APIRouter(prefix="/api/public", tags=["Public"])


@router.get("/health")
def health(db: Session = Depends(get_db)):
    db.execute(text("SELECT 1"))
    return {"status": "healthy", "database": "up"}


@router.get("/info")
def info():
    return {"name": "College Event Manager API", "description": "Public information"}
