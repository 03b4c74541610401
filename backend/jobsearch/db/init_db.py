from __future__ import annotations
from jobsearch.db.database import Base, engine
from jobsearch.models import job  # noqa: F401


def init_db() -> None:
    Base.metadata.create_all(bind=engine)
