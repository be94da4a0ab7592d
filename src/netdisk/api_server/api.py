# filename: src/netdisk/api_server/api.py
"""
NetDisk - Web File Manager - Main API Module
Copyright (C) 2025 AZHAR ZOUHIR / BYTEDz

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU Affero General Public License as published
by the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
GNU Affero General Public License for more details.

You should have received a copy of the GNU Affero General Public License
along with this program. If not, see <https://www.gnu.org/licenses/>.
"""

import logging
import time
import urllib.parse

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..core import constants
from ..core.classifier import FileClassifier
from ..core.config import AppPaths, Settings
from ..core.exceptions import NetdiskError
from ..core.version import __app_name__, __version__
from ..services.file_service import FileService
from .file_browser import create_file_browser_router

log = logging.getLogger(__name__)


def _wants_json(request: Request) -> bool:
    return "application/json" in request.headers.get("accept", "")


def _back_url(request: Request, default: str) -> str:
    referer = request.headers.get("referer")
    if referer:
        try:
            return urllib.parse.urlsplit(referer).path or default
        except ValueError:
            pass
    return default


# --- FastAPI App Factory ---
def create_app(settings: Settings, paths: AppPaths, classifier: FileClassifier) -> FastAPI:
    app = FastAPI(title=f"{__app_name__} API", version=__version__, docs_url=None, redoc_url=None)
    mount_prefix = settings.normalized_mount_prefix

    templates = Jinja2Templates(directory=str(constants.TEMPLATES_DIR))
    app.state.settings = settings
    app.state.paths = paths
    app.state.templates = templates
    app.state.file_service = FileService(settings, paths, classifier)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.perf_counter()
        response = await call_next(request)
        cost_ms = (time.perf_counter() - start_time) * 1000
        log.info(
            f"url: {request.url.path}, method: {request.method}, "
            f"status: {response.status_code}, cost: {cost_ms:.0f}ms"
        )
        return response

    @app.exception_handler(NetdiskError)
    async def netdisk_error_handler(request: Request, exc: NetdiskError):
        log.warning(f"{request.method} {request.url.path} failed: {exc}")
        if _wants_json(request):
            return JSONResponse(status_code=exc.status_code, content={"err": str(exc)})
        return templates.TemplateResponse(
            request,
            "error.html",
            {"title": exc.title, "message": str(exc), "back": _back_url(request, mount_prefix or "/")},
            status_code=exc.status_code,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404 and not _wants_json(request):
            return templates.TemplateResponse(
                request, "404.html", {"home": mount_prefix or "/"}, status_code=404
            )
        return JSONResponse(status_code=exc.status_code, content={"err": exc.detail}, headers=exc.headers)

    app.mount("/web", StaticFiles(directory=str(constants.STATIC_DIR)), name="web")
    app.include_router(create_file_browser_router(mount_prefix))

    log.info(f"{__app_name__} app created, serving {paths.root} at {mount_prefix or '/'}")
    return app
