from dataclasses import dataclass, field
from pathlib import Path
from typing import Self

import yaml

from wiki.types import StoreConfig


@dataclass
class ServerConfig:
    """
    The server configuration.
    """

    port: int = 8000
    host: str = "0.0.0.0"
    reload: bool = False
    log_level: str = "info"

    @staticmethod
    def from_dict(data: dict) -> Self:
        """
        Load the server configuration from a dictionary.
        """
        return ServerConfig(**data)


@dataclass
class TemplateConfig:
    """
    Where the view and edit templates live, and how bodies are shown.

    With no path, the templates bundled with the package are used.
    """

    path: Path | None = None
    markdown: bool = False

    @staticmethod
    def from_dict(data: dict) -> Self:
        path = data.get("path")
        return TemplateConfig(
            path=Path(path) if path else None,
            markdown=data.get("markdown", False),
        )


@dataclass
class Config:
    """
    The configuration for the wiki.
    """

    debug: bool = False
    store: StoreConfig = field(default_factory=StoreConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    templates: TemplateConfig = field(default_factory=TemplateConfig)

    @staticmethod
    def read(path: str | Path) -> Self:
        """
        Read the configuration from a file.
        """
        with open(path, "r", encoding="utf-8") as file:
            data = yaml.safe_load(file)
            return Config.from_dict(data or {})

    @staticmethod
    def from_dict(data: dict) -> Self:
        """
        Load the configuration from a dictionary.
        """
        return Config(
            debug=data.get("debug", False),
            store=StoreConfig.from_dict(data.get("store") or {}),
            server=ServerConfig.from_dict(data.get("server") or {}),
            templates=TemplateConfig.from_dict(data.get("templates") or {}),
        )
