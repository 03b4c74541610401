from __future__ import annotations
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel


class JobOut(BaseModel):
    id: int
    title: str
    company_name: str
    description: str
    requirements: str
    salary: str
    salary_min: Decimal | None
    salary_max: Decimal | None
    salary_currency: str
    experience_required: str
    modality: str
    location: str
    creation_date: datetime | None
    deadline_date: datetime | None
    source_url: str
    source_name: str
    country: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class JobSearchOut(BaseModel):
    total: int
    jobs: list[JobOut]
