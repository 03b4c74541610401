from __future__ import annotations
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jobsearch.api import health, jobs
from jobsearch.core.config import settings
from jobsearch.core.logging import configure_logging
from jobsearch.db.init_db import init_db

configure_logging(settings.log_level)

app = FastAPI(title=settings.app_name)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def on_startup():
    init_db()


app.include_router(health.router)
app.include_router(jobs.router, prefix=settings.api_prefix)
