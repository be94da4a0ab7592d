# src/netdisk/services/__init__.py
# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025 AZHAR ZOUHIR / BYTEDz

from .archive_service import ArchiveBuilder, ArchiveJob
from .breadcrumbs import BreadcrumbSegment, build_breadcrumbs
from .file_service import DirectoryListing, FileService
from .listing import DirectoryLister, EntryRow, format_size
from .path_resolver import PathResolver
from .sorting import SortKey, SortOrder, sort_rows
from .trash_service import DeletePolicy, DeleteService, TrashMover
from .unique_path import get_unique_path

__all__ = [
    "ArchiveBuilder",
    "ArchiveJob",
    "BreadcrumbSegment",
    "build_breadcrumbs",
    "DirectoryListing",
    "FileService",
    "DirectoryLister",
    "EntryRow",
    "format_size",
    "PathResolver",
    "SortKey",
    "SortOrder",
    "sort_rows",
    "DeletePolicy",
    "DeleteService",
    "TrashMover",
    "get_unique_path",
]
