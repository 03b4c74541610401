from __future__ import annotations
from jobsearch.crawlers.adapters.computrabajo import ComputrabajoAdapter
from jobsearch.crawlers.adapters.monster import MonsterAdapter

ADAPTERS = {
    "computrabajo": ComputrabajoAdapter,
    "monster": MonsterAdapter,
}

# Supported countries and the adapters run for each, in order.
COUNTRY_ADAPTERS: dict[str, tuple[str, ...]] = {
    "co": ("computrabajo",),
    "es": ("computrabajo",),
    "mx": ("computrabajo",),
    "ar": ("computrabajo",),
    "cl": ("computrabajo",),
    "pe": ("computrabajo",),
    "us": ("monster",),
}
