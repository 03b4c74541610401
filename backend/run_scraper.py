from __future__ import annotations
import argparse

from jobsearch.core.config import settings
from jobsearch.core.logging import configure_logging
from jobsearch.db.database import SessionLocal
from jobsearch.db.init_db import init_db
from jobsearch.services.scrape_service import perform_scraping


def main() -> None:
    parser = argparse.ArgumentParser(description="Scrape job listings for a keyword and store them.")
    parser.add_argument("keyword")
    parser.add_argument("countries", nargs="+", help="country codes, e.g. co es us")
    args = parser.parse_args()

    configure_logging(settings.log_level)
    init_db()
    db = SessionLocal()
    try:
        jobs = perform_scraping(db, args.keyword, args.countries)
        print(f"{len(jobs)} jobs processed")
        for job in jobs[:5]:
            print(f"- {job.title} | {job.company} | {job.location} | {job.salary} | {job.source_url}")
    finally:
        db.close()


if __name__ == "__main__":
    main()
