from __future__ import annotations
from datetime import datetime
from urllib.parse import quote

from bs4 import Tag

from jobsearch.crawlers.base import RawJobRecord, SiteAdapter, absolute_url, node_text
from jobsearch.crawlers.fetchers import RENDERED


class MonsterAdapter(SiteAdapter):
    source_name = "Monster"
    fetch_mode = RENDERED
    listing_selector = ".card-content"
    domains = {"us": "www.monster.com"}

    def search_url(self, keyword: str, country: str) -> str:
        return f"https://{self.domains[country]}/jobs/search?q={quote(keyword, safe='')}&where=United%20States"

    def extract_one(self, node: Tag, country: str, now: datetime) -> RawJobRecord | None:
        link = node.select_one(".title a")
        href = (link.get("href") or "").strip() if link else ""
        posted_text = node_text(node, ".posted-date")

        return RawJobRecord(
            source_url=absolute_url(self.domains[country], href) if href else "",
            title=node_text(node, ".title a"),
            source_name=self.source_name,
            country=country,
            company=node_text(node, ".company"),
            description=node_text(node, ".job-description") or "N/A",
            salary_text=node_text(node, ".salary") or "N/A",
            location=node_text(node, ".location"),
            posted=self.resolve_posted(posted_text, now),
            raw_payload={"site": "monster", "posted_text": posted_text},
        )
