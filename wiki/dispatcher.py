"""
Request dispatcher: path validation, routing and the three page operations.
"""

import logging
import traceback
from types import MappingProxyType
from typing import Awaitable, Callable, Mapping

from wiki.exceptions import InvalidPath, RenderFailure, StoreError
from wiki.renderer import Renderer
from wiki.stores.types import StoreBase
from wiki.types import Page, RequestContext, Response
from wiki.validator import parse_path

logger = logging.getLogger(__name__)

Handler = Callable[[RequestContext, str], Awaitable[Response]]


class Dispatcher:
    """
    Routes a request to the handler of its operation.

    The path is validated once, here, and the page name is passed to the
    handler. Invalid paths never reach the store or the renderer.

    A page that does not exist is not an error: view redirects to edit, and
    edit shows an empty page so it can be created. Store and render failures
    are returned as server errors with their message.
    """

    def __init__(self, *, store: StoreBase, renderer: Renderer, debug: bool = False):
        self.store = store
        self.renderer = renderer
        self.debug = debug
        self.routes: Mapping[str, Handler] = MappingProxyType(
            {
                "view": self.view,
                "edit": self.edit,
                "save": self.save,
            }
        )

    async def dispatch(self, request: RequestContext) -> Response:
        try:
            operation, name = parse_path(request.path)
        except InvalidPath:
            logger.debug(
                "Not found path=%r trace_id=%s", request.path, request.trace_id
            )
            return Response.not_found()

        handler = self.routes[operation]
        logger.debug(
            "Dispatch operation=%s page=%s trace_id=%s", operation, name, request.trace_id
        )
        try:
            return await handler(request, name)
        except (StoreError, RenderFailure) as e:
            logger.error(
                "Failed operation=%s page=%s trace_id=%s: %s",
                operation,
                name,
                request.trace_id,
                e,
            )
            message = str(e)
            if self.debug:
                message = f"{message}\n\n{traceback.format_exc()}"
            return Response.server_error(message)

    async def view(self, request: RequestContext, name: str) -> Response:
        page = await self.store.load_page(name)
        if page is None:
            logger.debug("Page not found page=%s, redirect to edit", name)
            return Response.redirect(f"/edit/{name}")
        return Response.rendered(self.renderer.render("view", page))

    async def edit(self, request: RequestContext, name: str) -> Response:
        page = await self.store.load_page(name)
        if page is None:
            page = Page(name=name)
        return Response.rendered(self.renderer.render("edit", page))

    async def save(self, request: RequestContext, name: str) -> Response:
        page = Page(name=name, body=request.form.get("body", b""))
        await self.store.save_page(page)
        return Response.redirect(f"/view/{name}")
