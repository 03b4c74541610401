from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional
from urllib.parse import urlparse

from sqlalchemy import DateTime, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, validates

from jobsearch.db.database import Base
from jobsearch.utils.text import utcnow


class InvalidSourceUrl(ValueError):
    pass


def is_absolute_url(url: str) -> bool:
    parsed = urlparse(url or "")
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


class Job(Base):
    __tablename__ = "jobs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(512), nullable=False, index=True)
    company_name: Mapped[str] = mapped_column(String(256), default="Confidencial", nullable=False)
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)
    requirements: Mapped[str] = mapped_column(Text, default="", nullable=False)
    salary: Mapped[str] = mapped_column(String(128), default="Confidencial", nullable=False)
    salary_min: Mapped[Optional[Decimal]] = mapped_column(Numeric(14, 2), nullable=True)
    salary_max: Mapped[Optional[Decimal]] = mapped_column(Numeric(14, 2), nullable=True)
    salary_currency: Mapped[str] = mapped_column(String(8), default="", nullable=False)
    experience_required: Mapped[str] = mapped_column(String(128), default="No especificada", nullable=False)
    modality: Mapped[str] = mapped_column(String(64), default="No especificada", nullable=False, index=True)
    location: Mapped[str] = mapped_column(String(256), default="No especificada", nullable=False, index=True)
    creation_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    deadline_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    source_url: Mapped[str] = mapped_column(String(1024), unique=True, nullable=False)
    source_name: Mapped[str] = mapped_column(String(128), nullable=False)
    country: Mapped[str] = mapped_column(String(8), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    @validates("source_url")
    def _validate_source_url(self, _key: str, value: str) -> str:
        if not is_absolute_url(value):
            raise InvalidSourceUrl(f"source_url must be an absolute http(s) URL, got {value!r}")
        return value
