# src/netdisk/services/file_service.py
# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025 AZHAR ZOUHIR / BYTEDz

import logging
import os
from pathlib import Path
from typing import List, Optional

import aiofiles
from fastapi import UploadFile
from pydantic import BaseModel

from ..core.classifier import FileClassifier
from ..core.config import AppPaths, Settings
from ..core.exceptions import FileOperationError, NetdiskError, ValidationError
from ..core.validators import validate_filename, validate_path_list
from .archive_service import ArchiveBuilder, ArchiveJob
from .breadcrumbs import BreadcrumbSegment, build_breadcrumbs
from .listing import DirectoryLister, EntryRow
from .path_resolver import PathResolver
from .sorting import sort_rows
from .trash_service import DeletePolicy, DeleteResult, DeleteService
from .unique_path import get_unique_path

log = logging.getLogger(__name__)

UPLOAD_CHUNK_SIZE = 262144  # 256KB


class DirectoryListing(BaseModel):
    title: str
    dir: str
    rows: List[EntryRow]
    nav: List[BreadcrumbSegment]


class FileService:
    """Logic for browsing, uploads, folder creation, moves, deletes and archives."""

    def __init__(self, settings: Settings, paths: AppPaths, classifier: FileClassifier):
        self.settings = settings
        self.paths = paths
        self.resolver = PathResolver(paths.root, settings.mount_prefix)
        self.lister = DirectoryLister(classifier)
        self.archiver = ArchiveBuilder(self.resolver, paths.archive_dir, settings.archive_command)
        self.deleter = DeleteService(
            self.resolver, DeletePolicy(settings.delete_policy), paths.trash_dir
        )

    def browse(self, url_path: str, raw_query: str = "", sort_key: str = "", sort_order: str = "") -> DirectoryListing:
        relative = self.resolver.relative(url_path)
        local_dir = self.resolver.resolve(url_path)
        nav_path = self.resolver.to_url(local_dir)

        rows = self.lister.list(local_dir, nav_path, raw_query)
        sort_rows(rows, sort_key, sort_order)
        return DirectoryListing(
            title="/" + relative,
            dir="/" + relative,
            rows=rows,
            nav=build_breadcrumbs(nav_path, raw_query),
        )

    def _current_dir(self, current_url: str) -> Path:
        # The referer path arrives percent-encoded.
        local_dir = self.resolver.resolve_target(current_url)
        if not local_dir.is_dir():
            raise ValidationError(f"Destination is not a directory: {current_url}")
        return local_dir

    def create_folder(self, current_url: str, name: str) -> Path:
        name = validate_filename(name)
        new_path = self.resolver.ensure_mutable(self._current_dir(current_url) / name)
        try:
            new_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileOperationError(f"Failed to create folder '{name}': {e}") from e
        log.info(f"new folder: {new_path}")
        return new_path

    def move(self, from_url: str, to_url: str) -> Path:
        from_url, to_url = (from_url or "").strip(), (to_url or "").strip()
        if not from_url or not to_url:
            raise ValidationError("File path cannot be empty!")

        source = self.resolver.ensure_mutable(self.resolver.resolve_target(from_url))
        destination = self.resolver.ensure_mutable(self.resolver.resolve_target(to_url))
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            log.info(f"move from: {source}, to: {destination}")
            os.rename(source, destination)
        except OSError as e:
            raise FileOperationError(f"Failed to move '{from_url}': {e}") from e
        return destination

    async def save_upload(self, directory: Path, upload: UploadFile) -> Path:
        # Browsers may send a client-side path; only the last component is kept.
        file_name = validate_filename(os.path.basename((upload.filename or "").replace("\\", "/")), "file name")
        target = self.resolver.ensure_mutable(directory / file_name)
        target = get_unique_path(target, self.settings.max_unique_attempts)
        async with aiofiles.open(target, "wb") as f:
            while chunk := await upload.read(UPLOAD_CHUNK_SIZE):
                await f.write(chunk)
        log.info(f"saved upload: {target}")
        return target

    async def save_uploads(self, current_url: str, uploads: List[UploadFile]) -> List[Path]:
        directory = self._current_dir(current_url)
        saved = []
        for upload in uploads:
            try:
                saved.append(await self.save_upload(directory, upload))
            except (NetdiskError, OSError) as e:
                log.error(f"save file, name: {upload.filename}, err: {e}")
        return saved

    def delete(self, raw_body) -> List[DeleteResult]:
        return self.deleter.delete_many(validate_path_list(raw_body))

    def archive(self, label: Optional[str], raw_path_list: str) -> ArchiveJob:
        label = validate_filename(label or "")
        return self.archiver.archive(validate_path_list(raw_path_list), label)
