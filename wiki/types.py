"""
Types for the wiki.
"""

from dataclasses import dataclass, field
from typing import Self


@dataclass
class Page:
    """
    A wiki page: its name, and the raw body bytes.
    """

    name: str
    body: bytes = b""

    @property
    def text(self) -> str:
        """
        The body as text, for display only.
        """
        return self.body.decode("utf-8", errors="replace")


@dataclass
class StoreConfig:
    """
    Configuration for a store.

    mode holds permission bits. In YAML write it with a leading 0 (0600), or
    as a string ("600"); both are read as octal.
    """

    name: str = "default"
    type: str = "file"
    path: str | None = "data"
    url: str | None = None
    extension: str = ".txt"
    mode: int = 0o600

    @classmethod
    def from_dict(cls, data: dict) -> Self:
        """
        Load a store configuration from a dictionary.
        """
        return cls(
            name=data.get("name", "default"),
            type=data.get("type", "file"),
            path=data.get("path", "data"),
            url=data.get("url"),
            extension=data.get("extension", ".txt"),
            mode=parse_mode(data.get("mode", 0o600)),
        )


def parse_mode(mode: int | str) -> int:
    """
    Read permission bits. Integers above 0o777 are decimal numbers written
    without the leading 0, and are rejected.
    """
    if isinstance(mode, str):
        mode = int(mode, 8)
    if not 0 <= mode <= 0o777:
        raise ValueError(
            f"Invalid store mode: {mode}. Write it in octal with a leading 0, like 0600"
        )
    return mode


@dataclass
class RequestContext:
    """
    One inbound request, as seen by the dispatcher.

    Form values are raw bytes; no charset is enforced on them.
    """

    path: str
    form: dict[str, bytes] = field(default_factory=dict)
    trace_id: str | None = None


@dataclass
class Response:
    """
    The outcome of a dispatched request.
    """

    response_code: int = 200
    content: bytes = b""
    media_type: str = "text/html; charset=utf-8"
    headers: dict[str, str] = field(default_factory=dict)

    @classmethod
    def rendered(cls, content: bytes) -> Self:
        return cls(response_code=200, content=content)

    @classmethod
    def redirect(cls, location: str) -> Self:
        return cls(
            response_code=302,
            media_type="text/plain; charset=utf-8",
            headers={"Location": location},
        )

    @classmethod
    def not_found(cls) -> Self:
        return cls(
            response_code=404,
            content=b"404 page not found\n",
            media_type="text/plain; charset=utf-8",
        )

    @classmethod
    def server_error(cls, message: str) -> Self:
        return cls(
            response_code=500,
            content=f"{message}\n".encode("utf-8"),
            media_type="text/plain; charset=utf-8",
        )

    @property
    def location(self) -> str | None:
        return self.headers.get("Location")
