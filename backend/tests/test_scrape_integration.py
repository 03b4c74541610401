from __future__ import annotations
from datetime import datetime
from decimal import Decimal

from jobsearch.crawlers import registry
from jobsearch.models.job import Job
from jobsearch.services import scrape_service
from jobsearch.services.job_store import UpsertResult
from jobsearch.services.scrape_service import perform_scraping, split_countries

NOW = datetime(2024, 7, 4)

CO_URL = "https://www.computrabajo.com.co/empleos-de-python?q=python"
MX_URL = "https://www.computrabajo.com.mx/empleos-de-python?q=python"
US_URL = "https://www.monster.com/jobs/search?q=python&where=United%20States"

CO_HTML = """
<div class='box_offer'>
  <a class='js-o-link' href='/ofertas-de-trabajo/oferta-co-1'>Desarrollador Python</a>
  <span class='salary'>$ 5.000.000 COP</span>
  <p class='posted-date'>Hace 2 días</p>
</div>
<div class='box_offer'>
  <a class='js-o-link' href='/ofertas-de-trabajo/oferta-co-2'>Ingeniero de datos Python</a>
  <p class='location'>Medellín</p>
</div>
"""

US_HTML = """
<div class='card-content'>
  <div class='title'><a href='/job-openings/python-dev--1'>Python Developer</a></div>
  <div class='company'>Initech</div>
  <div class='salary'>$90,000 - $120,000 USD</div>
</div>
"""


def test_split_countries_dedupes_and_partitions():
    assert split_countries(["CO", "zz", "co", " us ", "", "zz"]) == (["co", "us"], ["zz"])


def test_unsupported_country_is_never_scraped(db, fake_fetcher, caplog):
    fetcher = fake_fetcher({CO_URL: CO_HTML})

    jobs = perform_scraping(db, "python", ["co", "zz"], fetcher=fetcher, now=NOW)

    assert [url for url, _mode in fetcher.calls] == [CO_URL]
    assert len(jobs) == 2
    assert {j.country for j in jobs} == {"co"}
    assert jobs[0].source_url == "https://www.computrabajo.com.co/ofertas-de-trabajo/oferta-co-1"
    assert jobs[0].creation_date == datetime(2024, 7, 2)
    assert jobs[1].location == "Medellín"
    assert db.query(Job).count() == 2
    assert "zz" in caplog.text


def test_failed_source_does_not_stop_other_countries(db, fake_fetcher):
    fetcher = fake_fetcher({CO_URL: CO_HTML, US_URL: US_HTML})

    jobs = perform_scraping(db, "python", ["mx", "co", "us"], fetcher=fetcher, now=NOW)

    assert [url for url, _mode in fetcher.calls] == [MX_URL, CO_URL, US_URL]
    assert [j.country for j in jobs] == ["co", "co", "us"]
    assert jobs[2].company == "Initech"
    assert jobs[2].salary.kind == "range"
    assert jobs[2].salary.currency == "USD"
    # "," is read as a decimal mark, so comma-grouped amounts keep only the leading group
    assert (jobs[2].salary.low, jobs[2].salary.high) == (Decimal(90), Decimal(120))
    assert jobs[2].salary.text == "90 - 120 USD"
    assert db.query(Job).count() == 3


def test_repeated_scrape_updates_instead_of_duplicating(db, fake_fetcher):
    fetcher = fake_fetcher({CO_URL: CO_HTML})

    perform_scraping(db, "python", ["co"], fetcher=fetcher, now=NOW)
    first_ids = sorted(job.id for job in db.query(Job).all())
    perform_scraping(db, "python", ["co"], fetcher=fetcher, now=NOW)

    assert sorted(job.id for job in db.query(Job).all()) == first_ids


def test_adapter_crash_is_contained(db, fake_fetcher, monkeypatch):
    class ExplodingAdapter:
        def __init__(self, _fetcher):
            pass

        def fetch(self, *_args, **_kwargs):
            raise RuntimeError("selector engine exploded")

    monkeypatch.setitem(registry.ADAPTERS, "monster", ExplodingAdapter)
    fetcher = fake_fetcher({CO_URL: CO_HTML})

    jobs = perform_scraping(db, "python", ["us", "co"], fetcher=fetcher, now=NOW)

    assert {j.country for j in jobs} == {"co"}


def test_persistence_failures_still_return_all_records(db, fake_fetcher, monkeypatch):
    calls = []

    def failing_upsert(_db, record):
        calls.append(record.source_url)
        return UpsertResult(record=None, error="database unavailable")

    monkeypatch.setattr(scrape_service, "upsert_job", failing_upsert)
    fetcher = fake_fetcher({CO_URL: CO_HTML})

    jobs = perform_scraping(db, "python", ["co"], fetcher=fetcher, now=NOW)

    assert len(jobs) == 2
    assert len(calls) == 2
    assert db.query(Job).count() == 0
