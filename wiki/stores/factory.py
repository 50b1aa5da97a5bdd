"""
Store factory for creating store instances.
"""

import logging

from wiki.stores.db import DbStore
from wiki.stores.file import FileStore
from wiki.stores.types import StoreBase
from wiki.types import StoreConfig

logger = logging.getLogger(__name__)

STORE_TYPES: dict[str, type[StoreBase]] = {
    "file": FileStore,
    "db": DbStore,
}


def create_store(store_config: StoreConfig) -> StoreBase:
    """
    Create a store instance for the configured type.
    """
    store_class = STORE_TYPES.get(store_config.type)
    if store_class is None:
        raise ValueError(
            f"Unknown store type: {store_config.type}. Available types: {list(STORE_TYPES.keys())}"
        )
    store = store_class(store_config)
    logger.debug("Created store=%s", store)
    return store
