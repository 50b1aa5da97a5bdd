"""
HTTP surface of the wiki.

Every request goes through the dispatcher, which decides between render,
redirect, not found and server error.
"""

import logging
import random
import traceback
from urllib.parse import parse_qsl

import fastapi
import fastapi.responses

from wiki.config import Config
from wiki.dispatcher import Dispatcher
from wiki.renderer import Renderer
from wiki.setup import trace_id_var
from wiki.stores.factory import create_store
from wiki.stores.types import StoreBase
from wiki.types import RequestContext

logger = logging.getLogger(__name__)

FORM_URLENCODED = "application/x-www-form-urlencoded"
FORM_MULTIPART = "multipart/form-data"


def create_app(
    config: Config,
    store: StoreBase | None = None,
    renderer: Renderer | None = None,
) -> fastapi.FastAPI:
    """
    Create the FastAPI app.

    Store and renderer are created from the config unless given.
    """
    store = store or create_store(config.store)
    renderer = renderer or Renderer(config)
    dispatcher = Dispatcher(store=store, renderer=renderer, debug=config.debug)

    # no docs or openapi routes: only the page grammar is served
    app = fastapi.FastAPI(
        title="coralwiki",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    @app.middleware("http")
    async def set_trace_id(request: fastapi.Request, call_next):
        def new_trace_id():
            return f"{random.getrandbits(64):016x}"

        trace_id = request.headers.get("x-trace-id") or new_trace_id()
        request.state.trace_id = trace_id
        token = trace_id_var.set(trace_id)
        try:
            response = await call_next(request)
        finally:
            trace_id_var.reset(token)
        response.headers["x-trace-id"] = trace_id
        return response

    @app.api_route(
        "/{path:path}", methods=["GET", "HEAD", "POST"], include_in_schema=False
    )
    async def dispatch(request: fastapi.Request, path: str):
        try:
            form = await read_form(request)
        except Exception:  # pylint: disable=broad-exception-caught
            logger.exception("Failed to read form path=%s", request.url.path)
            content = "Bad Request"
            if config.debug:
                content = f"Bad Request: {traceback.format_exc()}"
            return fastapi.responses.PlainTextResponse(content, status_code=400)

        context = RequestContext(
            path=request.url.path,
            form=form,
            trace_id=request.state.trace_id,
        )
        response = await dispatcher.dispatch(context)
        logger.info(
            "%s %s response_code=%s",
            request.method,
            request.url.path,
            response.response_code,
        )
        return fastapi.responses.Response(
            content=response.content,
            status_code=response.response_code,
            media_type=response.media_type,
            headers=response.headers,
        )

    return app


async def read_form(request: fastapi.Request) -> dict[str, bytes]:
    """
    Read the submitted fields as raw bytes.

    POST body fields come first, then query parameters. The first value of a
    field wins.
    """
    form: dict[str, bytes] = {}
    if request.method == "POST":
        content_type = request.headers.get("content-type", "").lower()
        if content_type.startswith(FORM_URLENCODED):
            parse_urlencoded(await request.body(), form)
        elif content_type.startswith(FORM_MULTIPART):
            form_data = await request.form()
            try:
                for key, value in form_data.multi_items():
                    if key in form:
                        continue
                    if isinstance(value, str):
                        form[key] = value.encode("utf-8")
                    else:
                        form[key] = await value.read()
            finally:
                await form_data.close()
    parse_urlencoded(request.scope.get("query_string", b""), form)
    return form


def parse_urlencoded(data: bytes, form: dict[str, bytes]) -> dict[str, bytes]:
    """
    Percent-decode an urlencoded string into raw bytes values.

    Decoding as latin-1 maps every byte to one character and back, so the
    values keep the exact submitted bytes whatever their charset.
    """
    for key, value in parse_qsl(
        data.decode("latin-1"), keep_blank_values=True, encoding="latin-1"
    ):
        key = key.encode("latin-1").decode("utf-8", errors="replace")
        form.setdefault(key, value.encode("latin-1"))
    return form
