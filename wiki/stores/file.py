"""
File store implementation.
"""

import asyncio
import logging
import os
import tempfile
from pathlib import Path

from wiki.exceptions import StoreError
from wiki.stores.types import StoreBase
from wiki.types import Page, StoreConfig

logger = logging.getLogger(__name__)


class FileStore(StoreBase):
    """
    File-based store implementation.

    Each page is stored at <path>/<name><extension> with the raw body bytes.
    """

    def __init__(self, config: StoreConfig):
        super().__init__(config)
        self.base_path = Path(config.path) if config.path else Path(".")
        self.extension = config.extension
        self.mode = config.mode
        self.base_path.mkdir(parents=True, exist_ok=True)
        logger.debug("File store at path=%s extension=%s", self.base_path, self.extension)

    def page_path(self, name: str) -> Path:
        return self.base_path / f"{self.clean_name(name)}{self.extension}"

    async def load_page(self, name: str) -> Page | None:
        """
        Load a page from the file store.
        """
        filepath = self.page_path(name)
        try:
            body = await asyncio.to_thread(filepath.read_bytes)
        except FileNotFoundError:
            logger.debug("Page not found name=%s path=%s", name, filepath)
            return None
        except OSError as e:
            raise StoreError(f"Failed to load page {name}: {e}") from e
        return Page(name=name, body=body)

    async def save_page(self, page: Page) -> None:
        """
        Save a page to the file store.
        """
        filepath = self.page_path(page.name)
        try:
            await asyncio.to_thread(self.write_atomic, filepath, page.body)
        except OSError as e:
            raise StoreError(f"Failed to save page {page.name}: {e}") from e
        logger.info("Saved page_id=%s size=%d", page.name, len(page.body))

    def write_atomic(self, filepath: Path, body: bytes) -> None:
        """
        Write to a temporary file next to the target, then rename over it.

        Temporary names start with a dot, so they never look like a page.
        """
        tmp = tempfile.NamedTemporaryFile(
            dir=self.base_path,
            prefix=f".{filepath.name}.",
            suffix=".tmp",
            delete=False,
        )
        tmp_path = Path(tmp.name)
        try:
            with tmp:
                tmp.write(body)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.chmod(tmp_path, self.mode)
            os.replace(tmp_path, filepath)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise
