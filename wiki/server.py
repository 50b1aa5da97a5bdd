"""
Command line entry point: serve the wiki with uvicorn.

uvicorn imports the app through app_factory, so reload mode works too. The
config file path travels in the WIKI_CONFIG environment variable.
"""

import argparse
import logging
import os

import uvicorn
import fastapi

from wiki.api import create_app
from wiki.config import Config
from wiki.setup import setup_logging

logger = logging.getLogger(__name__)

CONFIG_ENV = "WIKI_CONFIG"


def prepare_config(path: str | None) -> Config:
    """
    Prepare the config for the server. With no path, defaults are used.
    """
    if not path:
        return Config()
    return Config.read(path)


def app_factory() -> fastapi.FastAPI:
    """
    Create the app from the config file named in the environment.
    """
    config = prepare_config(os.environ.get(CONFIG_ENV))
    setup_logging(logging.DEBUG if config.debug else logging.INFO)
    return create_app(config)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse the arguments.
    """
    parser = argparse.ArgumentParser(description="Serve a wiki using FastAPI.")
    parser.add_argument(
        "--config",
        help="Path to the config file",
        default=os.environ.get(CONFIG_ENV),
    )
    parser.add_argument("--host", help="Host to bind to (default from config)")
    parser.add_argument(
        "--port", type=int, help="Port to bind to (default from config)"
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        default=None,
        help="Enable auto-reload on file changes",
    )
    parser.add_argument("--log-level", help="Log level")
    return parser.parse_args(argv)


def merge_args(config: Config, opts: argparse.Namespace) -> Config:
    """
    Command line values override the config file.
    """
    if opts.host is not None:
        config.server.host = opts.host
    if opts.port is not None:
        config.server.port = opts.port
    if opts.reload is not None:
        config.server.reload = opts.reload
    if opts.log_level is not None:
        config.server.log_level = opts.log_level
    return config


def main(argv: list[str] | None = None):
    opts = parse_args(argv)
    config = merge_args(prepare_config(opts.config), opts)
    setup_logging(config.server.log_level)
    if opts.config:
        os.environ[CONFIG_ENV] = os.path.abspath(opts.config)

    logger.info(
        "Serving wiki on %s:%s store=%s",
        config.server.host,
        config.server.port,
        config.store.type,
    )
    uvicorn.run(
        "wiki.server:app_factory",
        factory=True,
        host=config.server.host,
        port=config.server.port,
        reload=config.server.reload,
        log_level=config.server.log_level,
    )


if __name__ == "__main__":
    main()
