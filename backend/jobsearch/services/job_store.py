from __future__ import annotations
import json
import logging
from dataclasses import dataclass

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from jobsearch.models.job import InvalidSourceUrl, Job
from jobsearch.services.normalizer import CanonicalJobRecord
from jobsearch.utils.text import utcnow

logger = logging.getLogger(__name__)


@dataclass
class UpsertResult:
    record: Job | None
    created: bool = False
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.record is not None


def _find_existing(db: Session, values: dict, conflict_fields: tuple[str, ...]) -> Job | None:
    query = db.query(Job)
    for name in conflict_fields:
        query = query.filter(getattr(Job, name) == values[name])
    return query.first()


def _apply(job: Job, values: dict) -> None:
    for key, value in values.items():
        setattr(job, key, value)
    job.updated_at = utcnow()


def _write(db: Session, values: dict, conflict_fields: tuple[str, ...]) -> UpsertResult:
    existing = _find_existing(db, values, conflict_fields)
    if existing:
        _apply(existing, values)
        db.commit()
        db.refresh(existing)
        return UpsertResult(record=existing, created=False)

    record = Job(**values)
    db.add(record)
    db.commit()
    db.refresh(record)
    return UpsertResult(record=record, created=True)


def _payload(values: dict) -> str:
    return json.dumps(values, default=str, ensure_ascii=False, indent=2)


def upsert_job(
    db: Session, record: CanonicalJobRecord, conflict_fields: tuple[str, ...] = ("source_url",)
) -> UpsertResult:
    """Insert the record, or overwrite the row sharing its conflict fields.

    The existing row keeps its id and created_at; updated_at is bumped.
    Failures are rolled back and reported in the result, never raised.
    """
    values = record.to_row()
    logger.debug("upserting source_url=%s title=%r country=%s", record.source_url, record.title, record.country)
    try:
        try:
            result = _write(db, values, conflict_fields)
        except IntegrityError:
            # another writer inserted the same key between lookup and insert
            db.rollback()
            result = _write(db, values, conflict_fields)
    except (InvalidSourceUrl, SQLAlchemyError) as exc:
        db.rollback()
        logger.error("upsert failed for source_url=%s: %s", record.source_url, exc)
        logger.error("job payload that failed: %s", _payload(values))
        return UpsertResult(record=None, error=str(exc))

    action = "created" if result.created else "updated"
    logger.info("job %s: %s (%s)", action, result.record.title, result.record.source_name)
    return result


def search_jobs(
    db: Session, keyword: str, countries: list[str], limit: int = 20, offset: int = 0
) -> tuple[int, list[Job]]:
    like = f"%{keyword.lower()}%"
    query = db.query(Job).filter(
        or_(
            func.lower(Job.title).like(like),
            func.lower(Job.description).like(like),
            func.lower(Job.requirements).like(like),
        ),
        Job.country.in_(countries),
    )
    total = query.count()
    rows = query.order_by(Job.created_at.desc(), Job.id.desc()).offset(offset).limit(limit).all()
    return total, rows
