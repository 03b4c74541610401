from __future__ import annotations
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from jobsearch.db.database import get_db
from jobsearch.schemas.job import JobOut, JobSearchOut
from jobsearch.services.search_service import search_or_scrape

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.get("/search", response_model=JobSearchOut)
def search(
    keyword: str = Query(min_length=1),
    countries: str = Query(default="co", description="comma separated country codes"),
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db),
):
    codes = [c.strip().lower() for c in countries.split(",") if c.strip()]
    if not codes:
        raise HTTPException(status_code=422, detail="at least one country code is required")
    total, rows = search_or_scrape(db, keyword.strip(), codes, limit=limit, offset=offset)
    return {"total": total, "jobs": [JobOut.model_validate(row) for row in rows]}
