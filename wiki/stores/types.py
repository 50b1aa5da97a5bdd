import logging

from wiki.types import Page, StoreConfig
from wiki.validator import validate_name

logger = logging.getLogger(__name__)


class StoreBase:
    """
    Base class for all page stores.

    A store keeps one record per page name. Saves replace the whole record
    atomically: readers see either the old body or the new one, never a mix.
    Loading a page that was never saved returns None.
    """

    config: StoreConfig

    def __init__(self, config: StoreConfig):
        self.config = config

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.config.name}>"

    async def load_page(self, name: str) -> Page | None:
        """
        Load a page from the store.
        """
        raise NotImplementedError(
            f"load_page not implemented in {self.__class__.__name__}"
        )

    async def save_page(self, page: Page) -> None:
        """
        Save a page to the store.
        """
        raise NotImplementedError(
            f"save_page not implemented in {self.__class__.__name__}"
        )

    def clean_name(self, name: str) -> str:
        """
        Validate a page name before it reaches the storage.
        """
        return validate_name(name)
