from __future__ import annotations
from jobsearch.models.job import InvalidSourceUrl, Job

__all__ = ["InvalidSourceUrl", "Job"]
