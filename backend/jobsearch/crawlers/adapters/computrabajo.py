from __future__ import annotations
from datetime import datetime
from urllib.parse import quote

from bs4 import Tag

from jobsearch.crawlers.base import RawJobRecord, SiteAdapter, absolute_url, node_text
from jobsearch.crawlers.fetchers import RENDERED


class ComputrabajoAdapter(SiteAdapter):
    source_name = "Computrabajo"
    fetch_mode = RENDERED
    listing_selector = ".box_offer"
    domains = {
        "co": "www.computrabajo.com.co",
        "es": "www.computrabajo.es",
        "mx": "www.computrabajo.com.mx",
        "pe": "www.computrabajo.com.pe",
        "ar": "www.computrabajo.com.ar",
        "cl": "www.computrabajo.cl",
    }

    def search_url(self, keyword: str, country: str) -> str:
        kw = quote(keyword, safe="")
        return f"https://{self.domains[country]}/empleos-de-{kw}?q={kw}"

    def extract_one(self, node: Tag, country: str, now: datetime) -> RawJobRecord | None:
        link = node.select_one(".js-o-link")
        title = node_text(node, ".js-o-link")
        href = (link.get("href") or "").strip() if link else ""
        posted_text = node_text(node, ".posted-date")

        return RawJobRecord(
            source_url=absolute_url(self.domains[country], href) if href else "",
            title=title,
            source_name=self.source_name,
            country=country,
            company=node_text(node, ".badge-tag"),
            description=node_text(node, ".description") or "N/A",
            salary_text=node_text(node, ".salary") or "N/A",
            location=node_text(node, ".location"),
            posted=self.resolve_posted(posted_text, now),
            raw_payload={"site": "computrabajo", "posted_text": posted_text, "href": href},
        )
