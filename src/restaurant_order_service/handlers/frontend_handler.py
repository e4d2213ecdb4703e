"""Routes serving the static frontend pages and assets."""

import logging
from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response
from starlette.types import Scope

logger = logging.getLogger(__name__)

INDEX_PAGE = "index.html"
ADMIN_LOGIN_PAGE = "admin-login.html"
ORDERS_PAGE = "orders.html"


class FrontendStaticFiles(StaticFiles):
    """Static files whose unknown paths fall back to the home page.

    The frontend routes on the client, so any path that does not name a file
    in the public directory gets index.html.
    """

    async def get_response(self, path: str, scope: Scope) -> Response:
        try:
            response = await super().get_response(path, scope)
        except StarletteHTTPException as e:
            if e.status_code != 404:
                raise
            return await super().get_response(INDEX_PAGE, scope)

        # html=True answers misses with a custom 404.html when one exists
        if response.status_code == 404:
            return await super().get_response(INDEX_PAGE, scope)
        return response


def register_frontend_routes(app: FastAPI, public_dir: Path) -> None:
    """Register page routes and mount the public directory.

    Must be called after the API routes, since the mount at "/" matches
    every path.

    Args:
        app: Application to add the routes to
        public_dir: Directory holding the static frontend
    """

    def page_response(*candidates: str) -> FileResponse:
        for name in candidates:
            path = public_dir / name
            if path.is_file():
                return FileResponse(path)
        logger.error(f"Frontend page {candidates[-1]} missing from {public_dir}")
        raise HTTPException(status_code=404, detail="Page not found")

    @app.api_route("/admin", methods=["GET", "HEAD"], include_in_schema=False)
    async def admin_login_page() -> FileResponse:
        return page_response(ADMIN_LOGIN_PAGE, INDEX_PAGE)

    @app.api_route("/orders", methods=["GET", "HEAD"], include_in_schema=False)
    async def orders_page() -> FileResponse:
        return page_response(ORDERS_PAGE, INDEX_PAGE)

    if not public_dir.is_dir():
        logger.warning(f"Public directory {public_dir} does not exist, frontend disabled")
        return

    app.mount(
        "/",
        FrontendStaticFiles(directory=public_dir, html=True),
        name="frontend",
    )
