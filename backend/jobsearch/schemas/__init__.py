from __future__ import annotations
from jobsearch.schemas.job import JobOut, JobSearchOut

__all__ = ["JobOut", "JobSearchOut"]
