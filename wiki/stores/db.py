"""
Database store implementation.
"""

import asyncio
import logging
import os
import sqlite3
from pathlib import Path

from wiki.exceptions import StoreError
from wiki.stores.types import StoreBase
from wiki.types import Page, StoreConfig

logger = logging.getLogger(__name__)


class DbStore(StoreBase):
    """
    Database-based store implementation.

    One row per page. Every call opens its own connection, so calls can run in
    worker threads side by side.
    """

    def __init__(self, config: StoreConfig):
        super().__init__(config)
        logger.info("Connecting to database: %s", config.url)
        if not config.url or not config.url.startswith("sqlite://"):
            raise ValueError("Database URL must start with sqlite://")
        self.path = config.url.replace("sqlite://", "")
        # an in-memory database does not outlive its connection
        if not self.path or self.path == ":memory:" or "mode=memory" in self.path:
            raise ValueError(
                "Database URL must name a file, in-memory sqlite is not supported"
            )
        os.makedirs(Path(self.path).parent, exist_ok=True)

        self.make_migrations()

    def connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        return conn

    async def load_page(self, name: str) -> Page | None:
        """
        Load a page from the database store.
        """
        name = self.clean_name(name)
        try:
            body = await asyncio.to_thread(self.select_body, name)
        except sqlite3.Error as e:
            raise StoreError(f"Failed to load page {name}: {e}") from e
        if body is None:
            logger.debug("Page not found name=%s", name)
            return None
        return Page(name=name, body=body)

    async def save_page(self, page: Page) -> None:
        """
        Save a page to the database store.
        """
        name = self.clean_name(page.name)
        try:
            await asyncio.to_thread(self.upsert_body, name, page.body)
        except sqlite3.Error as e:
            raise StoreError(f"Failed to save page {name}: {e}") from e
        logger.info("Saved page_id=%s size=%d", name, len(page.body))

    def select_body(self, name: str) -> bytes | None:
        conn = self.connect()
        try:
            cursor = conn.execute("SELECT body FROM pages WHERE name = ?", (name,))
            result = cursor.fetchone()
        finally:
            conn.close()
        if result:
            return bytes(result["body"])
        return None

    def upsert_body(self, name: str, body: bytes) -> None:
        conn = self.connect()
        try:
            # the connection context manager commits, or rolls back on error
            with conn:
                conn.execute(
                    "INSERT INTO pages (name, body) VALUES (?, ?) "
                    "ON CONFLICT(name) DO UPDATE SET body = excluded.body",
                    (name, sqlite3.Binary(body)),
                )
        finally:
            conn.close()

    def make_migrations(self) -> None:
        """
        Make migrations to the database.
        """
        conn = self.connect()
        try:
            with conn:
                conn.execute(
                    "CREATE TABLE IF NOT EXISTS pages (name TEXT PRIMARY KEY, body BLOB NOT NULL)"
                )
        finally:
            conn.close()
