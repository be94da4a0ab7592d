# NetDisk - Web File Manager - File Browser API Module
# Copyright (C) 2025 AZHAR ZOUHIR / BYTEDz
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program. If not, see <https://www.gnu.org/licenses/>.


import asyncio
import hmac
import logging
import urllib.parse
from typing import List

from fastapi import (APIRouter, Depends, File, Form, Header, HTTPException,
                     Request, UploadFile)
from fastapi.responses import FileResponse, RedirectResponse

from ..core.exceptions import ValidationError
from ..services.file_service import FileService

log = logging.getLogger(__name__)


# --- Dependencies ---
def get_file_service(request: Request) -> FileService:
    return request.app.state.file_service


def get_referer_path(request: Request) -> str:
    """Returns the path of the page the request was sent from."""
    referer = request.headers.get("referer")
    if not referer:
        raise ValidationError("Referer Path Error: the request has no referer.")
    try:
        path = urllib.parse.urlsplit(referer).path
    except ValueError as e:
        raise ValidationError(f"Referer Path Error: {e}")
    return path or "/"


def verify_admin(request: Request, x_admin_token: str = Header(None)):
    expected = request.app.state.settings.admin_token
    if not expected:
        return True
    if not x_admin_token or not hmac.compare_digest(x_admin_token, expected):
        log.warning(f"Rejected delete request from {request.client.host if request.client else 'unknown'}")
        raise HTTPException(status_code=403, detail="Invalid admin token")
    return True


def _redirect_back(location: str) -> RedirectResponse:
    return RedirectResponse(location, status_code=302)


# --- Router Factory ---
def create_file_browser_router(mount_prefix: str) -> APIRouter:
    router = APIRouter()

    if mount_prefix:
        @router.get("/")
        async def index():
            return _redirect_back(mount_prefix + "/")

    @router.get(mount_prefix or "/")
    @router.get(mount_prefix + "/{path:path}")
    async def home(request: Request, path: str = "", s: str = "", o: str = "",
                   service: FileService = Depends(get_file_service)):
        url_path = f"{mount_prefix}/{path}"
        local_path = service.resolver.ensure_readable(service.resolver.resolve(url_path))
        log.info(f"url path: {url_path}")

        if local_path.is_dir():
            listing = service.browse(url_path, request.url.query, s, o)
            return request.app.state.templates.TemplateResponse(
                request, "index.html", {"listing": listing, "mount_prefix": mount_prefix}
            )

        if not local_path.is_file():
            raise HTTPException(status_code=404, detail="File or directory not found.")
        return FileResponse(local_path, filename=local_path.name)

    @router.post("/new")
    async def new_folder(request: Request, name: str = Form(""),
                         service: FileService = Depends(get_file_service)):
        current = get_referer_path(request)
        await asyncio.to_thread(service.create_folder, current, name)
        return _redirect_back(current)

    @router.post("/upload")
    async def upload(request: Request, files: List[UploadFile] = File(default=[]),
                     service: FileService = Depends(get_file_service)):
        current = get_referer_path(request)
        await service.save_uploads(current, files)
        return _redirect_back(current)

    @router.post("/move")
    async def move(request: Request, frompath: str = Form(""), name: str = Form(""),
                   service: FileService = Depends(get_file_service)):
        current = get_referer_path(request)
        await asyncio.to_thread(service.move, frompath, name)
        return _redirect_back(current)

    @router.post("/delete", dependencies=[Depends(verify_admin)])
    async def delete(request: Request, service: FileService = Depends(get_file_service)):
        body = await request.body()
        results = await asyncio.to_thread(service.delete, body)
        return {
            "err": 0,
            "succeeded": [r.path for r in results if r.success],
            "failed": [{"path": r.path, "reason": r.reason} for r in results if not r.success],
        }

    @router.post("/archive")
    async def archive(name: str = Form(""), pathlist: str = Form(""),
                      service: FileService = Depends(get_file_service)):
        job = await asyncio.to_thread(service.archive, name, pathlist)
        return FileResponse(job.output_path, filename=job.label, media_type="application/octet-stream")

    return router

