"""Populate the backend's topic catalogs with their default content."""
import asyncio
import logging
from typing import Iterable

from interview_tracker.client import CATALOGS, Tracker
from interview_tracker.errors import ValidationError
from interview_tracker.resources import CatalogClient

logger = logging.getLogger(__name__)

SEEDABLE = CATALOGS


async def is_seeded(catalog: CatalogClient) -> bool:
    """Check whether the catalog already holds any records."""
    return len(await catalog.list()) > 0


async def seed_catalog(catalog: CatalogClient, skip_populated: bool = True) -> str:
    if skip_populated and await is_seeded(catalog):
        return "already seeded"
    try:
        result = await catalog.seed()
    except ValidationError as e:
        # The backend refuses to reseed some catalogs that already hold data.
        logger.info("Seed of %s refused: %s", catalog.segment, e)
        return str(e.body) if e.body else str(e)
    return result.message


async def seed_all(
    tracker: Tracker,
    names: Iterable[str] = SEEDABLE,
    skip_populated: bool = True,
) -> dict[str, str]:
    """Seed the named catalogs concurrently; returns each catalog's outcome message.

    Topic catalogs are wiped and reloaded by the backend on seed, so by
    default catalogs that already hold records are left alone.
    """
    names = list(names)
    messages = await asyncio.gather(
        *(seed_catalog(tracker.catalog(n), skip_populated) for n in names)
    )
    return dict(zip(names, messages))
