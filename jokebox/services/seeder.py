"""
Jokebox — Startup Seeder
=========================

What:  Inserts a fixed set of sample jokes when the collection is empty.
When:  Once per process, inside the lifespan, before traffic is accepted.

Known race (accepted):
    count() and insert_many() are two separate calls. Two processes cold
    starting against the same empty collection can both observe zero and
    both insert, leaving duplicate sample jokes. Seeding is a development
    convenience, so this is tolerated. Closing the gap would need an upsert
    keyed on title or a sentinel document.
"""

import logging
from typing import Dict, List

from jokebox.database import JokeStore

logger = logging.getLogger(__name__)

BOOTSTRAP_JOKES: List[Dict[str, str]] = [
    {"title": "Joke 1", "description": "This is a fantastic Joke 1"},
    {"title": "Joke 2", "description": "This is a hilarious Joke 2"},
    {"title": "Joke 3", "description": "This is a super funny Joke 3"},
]


async def seed_if_empty(store: JokeStore) -> int:
    """
    Insert BOOTSTRAP_JOKES if and only if the collection holds zero documents.

    Returns:
        Number of documents inserted (0 when the collection was not empty).

    Raises:
        StoreReadError / StoreWriteError from the store. Startup treats these
        as fatal.
    """
    existing = await store.count()
    if existing != 0:
        logger.info("Collection already has %d jokes; skipping seed", existing)
        return 0

    inserted = await store.insert_many(BOOTSTRAP_JOKES)
    logger.info("Sample jokes inserted (%d)", len(inserted))
    return len(inserted)
