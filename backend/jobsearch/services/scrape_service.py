from __future__ import annotations
import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.orm import Session

from jobsearch.crawlers.base import RawJobRecord
from jobsearch.crawlers.fetchers import Fetcher
from jobsearch.crawlers.registry import ADAPTERS, COUNTRY_ADAPTERS
from jobsearch.services.job_store import upsert_job
from jobsearch.services.normalizer import CanonicalJobRecord, normalize_jobs

logger = logging.getLogger(__name__)


@dataclass
class ScrapeSummary:
    fetched: int = 0
    created: int = 0
    updated: int = 0
    failed: int = 0


def split_countries(countries: list[str]) -> tuple[list[str], list[str]]:
    """Return (supported, unsupported), lower-cased and de-duplicated in order."""
    supported: list[str] = []
    unsupported: list[str] = []
    for raw in countries:
        code = (raw or "").strip().lower()
        if not code or code in supported or code in unsupported:
            continue
        (supported if code in COUNTRY_ADAPTERS else unsupported).append(code)
    return supported, unsupported


def collect_raw_jobs(
    keyword: str, countries: list[str], fetcher: Fetcher, now: datetime | None = None
) -> list[RawJobRecord]:
    raw_jobs: list[RawJobRecord] = []
    for country in countries:
        for name in COUNTRY_ADAPTERS[country]:
            adapter_cls = ADAPTERS.get(name)
            if not adapter_cls:
                logger.error("missing adapter %s for country=%s", name, country)
                continue
            try:
                raw_jobs.extend(adapter_cls(fetcher).fetch(keyword, country, now=now))
            except Exception:  # noqa: BLE001
                logger.exception("adapter %s failed for country=%s", name, country)
    return raw_jobs


def perform_scraping(
    db: Session,
    keyword: str,
    countries: list[str],
    *,
    fetcher: Fetcher | None = None,
    now: datetime | None = None,
) -> list[CanonicalJobRecord]:
    supported, unsupported = split_countries(countries)
    if unsupported:
        logger.warning("countries not supported by any source, ignoring: %s", ", ".join(unsupported))

    fetcher = fetcher or Fetcher()
    summary = ScrapeSummary()

    raw_jobs = collect_raw_jobs(keyword, supported, fetcher, now=now)
    summary.fetched = len(raw_jobs)

    jobs = normalize_jobs(raw_jobs, now=now)
    for job in jobs:
        result = upsert_job(db, job)
        if not result.ok:
            summary.failed += 1
        elif result.created:
            summary.created += 1
        else:
            summary.updated += 1

    logger.info(
        "scrape for keyword=%r countries=%s done: fetched=%d created=%d updated=%d failed=%d",
        keyword,
        supported,
        summary.fetched,
        summary.created,
        summary.updated,
        summary.failed,
    )
    return jobs
