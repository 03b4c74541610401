from __future__ import annotations
import logging

from sqlalchemy.orm import Session

from jobsearch.crawlers.fetchers import Fetcher
from jobsearch.models.job import Job
from jobsearch.services.job_store import search_jobs
from jobsearch.services.scrape_service import perform_scraping

logger = logging.getLogger(__name__)


def search_or_scrape(
    db: Session,
    keyword: str,
    countries: list[str],
    limit: int = 20,
    offset: int = 0,
    fetcher: Fetcher | None = None,
) -> tuple[int, list[Job]]:
    total, rows = search_jobs(db, keyword, countries, limit=limit, offset=offset)
    logger.info("store lookup keyword=%r countries=%s found %d", keyword, countries, total)
    if total:
        return total, rows

    perform_scraping(db, keyword, countries, fetcher=fetcher)
    return search_jobs(db, keyword, countries, limit=limit, offset=offset)
