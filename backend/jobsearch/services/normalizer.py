from __future__ import annotations
import logging
from dataclasses import dataclass
from datetime import datetime

from jobsearch.crawlers.base import RawJobRecord
from jobsearch.models.job import is_absolute_url
from jobsearch.utils.text import (
    CONFIDENTIAL,
    UNSPECIFIED,
    Modality,
    Salary,
    clean_text,
    normalize_date,
    normalize_experience,
    normalize_modality,
    parse_salary,
)

logger = logging.getLogger(__name__)


@dataclass
class CanonicalJobRecord:
    title: str
    company: str
    description: str
    requirements: str
    salary: Salary
    experience: str
    modality: Modality
    location: str
    creation_date: datetime | None
    deadline_date: datetime | None
    source_url: str
    source_name: str
    country: str

    def to_row(self) -> dict:
        return {
            "title": self.title,
            "company_name": self.company,
            "description": self.description,
            "requirements": self.requirements,
            "salary": self.salary.text,
            "salary_min": self.salary.low,
            "salary_max": self.salary.high if self.salary.kind == "range" else self.salary.low,
            "salary_currency": self.salary.currency,
            "experience_required": self.experience,
            "modality": self.modality.value,
            "location": self.location,
            "creation_date": self.creation_date,
            "deadline_date": self.deadline_date,
            "source_url": self.source_url,
            "source_name": self.source_name,
            "country": self.country,
        }


def _normalize_location(value: str) -> str:
    location = clean_text(value)
    if not location or location.lower() == "n/a":
        return UNSPECIFIED
    return location


def normalize(record: RawJobRecord | CanonicalJobRecord, now: datetime | None = None) -> CanonicalJobRecord:
    if isinstance(record, CanonicalJobRecord):
        salary, experience, modality = record.salary, record.experience, record.modality
        posted, deadline = record.creation_date, record.deadline_date
    else:
        salary, experience, modality = record.salary_text, record.experience_text, record.modality_text
        posted, deadline = record.posted, record.deadline

    source_url = (record.source_url or "").strip()
    if not is_absolute_url(source_url):
        logger.warning("relative or malformed source_url for %r: %r", record.title, source_url)

    return CanonicalJobRecord(
        title=clean_text(record.title),
        company=clean_text(record.company) or CONFIDENTIAL,
        description=clean_text(record.description),
        requirements=clean_text(record.requirements),
        salary=parse_salary(salary),
        experience=normalize_experience(experience),
        modality=normalize_modality(modality),
        location=_normalize_location(record.location),
        creation_date=normalize_date(posted, now),
        deadline_date=normalize_date(deadline, now),
        source_url=source_url,
        source_name=clean_text(record.source_name),
        country=clean_text(record.country).lower(),
    )


def normalize_jobs(records: list, now: datetime | None = None) -> list[CanonicalJobRecord]:
    logger.info("normalizing %d scraped jobs", len(records))
    return [normalize(record, now) for record in records]
