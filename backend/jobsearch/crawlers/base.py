from __future__ import annotations
import logging
from dataclasses import dataclass, field
from datetime import datetime
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from jobsearch.core.config import settings
from jobsearch.crawlers.fetchers import STATIC, Fetcher
from jobsearch.utils.text import clean_text, resolve_relative_date, utcnow

logger = logging.getLogger(__name__)


@dataclass
class RawJobRecord:
    source_url: str
    title: str
    source_name: str
    country: str
    company: str = "Confidencial"
    description: str = "N/A"
    requirements: str = "N/A"
    salary_text: str = "N/A"
    experience_text: str = "N/A"
    modality_text: str = "N/A"
    location: str = ""
    posted: str | datetime | None = None
    deadline: str | datetime | None = None
    raw_payload: dict = field(default_factory=dict)


def absolute_url(domain: str, href: str) -> str:
    href = (href or "").strip()
    if href.startswith("http"):
        return href
    return urljoin(f"https://{domain}/", href)


def node_text(node: Tag, selector: str) -> str:
    el = node.select_one(selector)
    if not el:
        return ""
    return clean_text(el.get_text(" ", strip=True))


class SiteAdapter:
    """Search one job site for a keyword in one country.

    Subclasses provide the domain table, the search URL and the per-listing
    selectors; fetching, skipping and logging are shared here.
    """

    source_name: str
    fetch_mode: str = STATIC
    domains: dict[str, str] = {}
    listing_selector: str = ""

    def __init__(self, fetcher: Fetcher | None = None, max_listings: int | None = None):
        self.fetcher = fetcher or Fetcher()
        self.max_listings = max_listings or settings.max_listings_per_page

    def supports(self, country: str) -> bool:
        return country in self.domains

    def search_url(self, keyword: str, country: str) -> str:
        raise NotImplementedError

    def select_listings(self, soup: BeautifulSoup) -> list[Tag]:
        return soup.select(self.listing_selector)

    def extract_one(self, node: Tag, country: str, now: datetime) -> RawJobRecord | None:
        raise NotImplementedError

    def resolve_posted(self, text: str, now: datetime) -> datetime | None:
        return resolve_relative_date(text, now) if text else None

    def fetch(self, keyword: str, country: str, now: datetime | None = None) -> list[RawJobRecord]:
        if not self.supports(country):
            logger.warning("%s has no domain for country=%s, skipping", self.source_name, country)
            return []

        url = self.search_url(keyword, country)
        logger.info("scraping %s for keyword=%r country=%s url=%s", self.source_name, keyword, country, url)
        result = self.fetcher.fetch(url, self.fetch_mode)
        if not result.ok:
            logger.warning(
                "no markup from %s country=%s (%s): %s",
                self.source_name,
                country,
                result.failure.value if result.failure else "empty",
                result.detail[:200],
            )
            return []

        jobs = self.extract(result.markup, keyword, country, now=now)
        logger.info("%s finished for country=%s, %d listings", self.source_name, country, len(jobs))
        return jobs

    def extract(self, markup: str, keyword: str, country: str, now: datetime | None = None) -> list[RawJobRecord]:
        now = now or utcnow()
        soup = BeautifulSoup(markup, "html.parser")
        jobs: list[RawJobRecord] = []
        seen: set[str] = set()

        for index, node in enumerate(self.select_listings(soup)):
            try:
                job = self.extract_one(node, country, now)
            except Exception:  # noqa: BLE001
                logger.exception("%s listing %d could not be parsed", self.source_name, index)
                continue

            if job is None or not job.title or not job.source_url:
                logger.warning(
                    "%s listing %d skipped: title %s, url %s",
                    self.source_name,
                    index,
                    "present" if job and job.title else "missing",
                    "present" if job and job.source_url else "missing",
                )
                continue
            if job.source_url in seen:
                continue
            seen.add(job.source_url)
            job.raw_payload.setdefault("keyword", keyword)
            jobs.append(job)

        return jobs[: self.max_listings]
