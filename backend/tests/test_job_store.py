from __future__ import annotations
from dataclasses import replace
from datetime import datetime

from jobsearch.crawlers.base import RawJobRecord
from jobsearch.models.job import Job
from jobsearch.services.job_store import search_jobs, upsert_job
from jobsearch.services.normalizer import normalize

NOW = datetime(2024, 7, 4)


def _canonical(url="https://www.computrabajo.com.co/ofertas-de-trabajo/oferta-1", **overrides):
    values = dict(
        source_url=url,
        title="Desarrollador Python",
        source_name="Computrabajo",
        country="co",
        company="Acme",
        description="Backend con Django",
        salary_text="$60.000 - $80.000 USD",
        modality_text="Remoto",
        location="Bogotá",
        posted="hace 3 días",
    )
    values.update(overrides)
    return normalize(RawJobRecord(**values), now=NOW)


def test_upsert_creates_then_updates_same_source_url(db):
    first = upsert_job(db, _canonical())
    assert first.ok and first.created
    first_id = first.record.id
    first_created_at = first.record.created_at
    first_updated_at = first.record.updated_at

    second = upsert_job(db, _canonical(title="Desarrollador Python Senior", company="Globex", salary_text=""))
    assert second.ok
    assert second.created is False

    rows = db.query(Job).all()
    assert len(rows) == 1
    row = rows[0]
    assert row.id == first_id
    assert row.created_at == first_created_at
    assert row.updated_at >= first_updated_at
    assert row.title == "Desarrollador Python Senior"
    assert row.company_name == "Globex"
    assert row.salary == "Confidencial"
    assert row.salary_min is None


def test_upsert_persists_normalized_fields(db):
    result = upsert_job(db, _canonical())
    row = result.record
    assert row.salary == "60000 - 80000 USD"
    assert row.salary_currency == "USD"
    assert row.modality == "Remoto"
    assert row.creation_date == datetime(2024, 7, 1)


def test_upsert_failure_is_reported_and_next_record_still_saved(db, caplog):
    bad = replace(_canonical(), source_url="/ofertas-de-trabajo/relativa")

    failed = upsert_job(db, bad)
    ok = upsert_job(db, _canonical(url="https://www.computrabajo.com.co/ofertas-de-trabajo/oferta-2"))

    assert not failed.ok
    assert failed.record is None
    assert "absolute" in failed.error
    assert "job payload that failed" in caplog.text
    assert ok.ok and ok.created
    assert db.query(Job).count() == 1


def test_search_jobs_filters_keyword_and_country(db):
    upsert_job(db, _canonical(url="https://a.example/1", title="Desarrollador Python"))
    upsert_job(db, _canonical(url="https://a.example/2", title="Contador", description="Impuestos"))
    upsert_job(db, _canonical(url="https://a.example/3", title="Python Engineer", country="us"))

    total, rows = search_jobs(db, "PYTHON", ["co"])
    assert total == 1
    assert rows[0].source_url == "https://a.example/1"

    total, rows = search_jobs(db, "python", ["co", "us"], limit=1)
    assert total == 2
    assert len(rows) == 1
