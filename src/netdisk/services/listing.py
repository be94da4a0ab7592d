# src/netdisk/services/listing.py
# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025 AZHAR ZOUHIR / BYTEDz

import logging
import os
import posixpath
import urllib.parse
from datetime import datetime
from pathlib import Path
from typing import List

from pydantic import BaseModel

from ..core import constants
from ..core.classifier import FileClassifier

log = logging.getLogger(__name__)

_SIZE_UNITS = ["KB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB"]


# --- Pydantic Models ---
class EntryRow(BaseModel):
    name: str
    is_dir: bool
    byte_size: int
    size: str
    modified_at: str
    kind: str
    icon: str
    href: str
    preview_url: str = ""


def format_size(num_bytes: int) -> str:
    """Renders a byte count with the largest 1024-based unit it fills."""
    if num_bytes < 1024:
        return f"{num_bytes} B"
    value = float(num_bytes)
    unit = "B"
    for candidate in _SIZE_UNITS:
        if value < 1024:
            break
        value /= 1024
        unit = candidate
    return f"{value:.2f} {unit}"


def format_timestamp(mtime: float) -> str:
    return datetime.fromtimestamp(mtime).strftime(constants.TIMESTAMP_FORMAT)


class DirectoryLister:
    """Reads one directory level into display rows."""

    def __init__(self, classifier: FileClassifier):
        self.classifier = classifier

    def list(self, directory: Path, nav_prefix: str, raw_query: str = "") -> List[EntryRow]:
        """
        Lists the immediate children of a directory.

        Any failure to read the directory yields an empty list, so an
        unreadable directory looks exactly like an empty one.
        """
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            log.warning(f"Could not read directory {directory}: {e}")
            return []

        rows = []
        for entry in entries:
            try:
                rows.append(self._make_row(entry, nav_prefix, raw_query))
            except OSError as e:
                log.warning(f"Could not access item {entry.path}: {e}")
        return rows

    def _make_row(self, entry: os.DirEntry, nav_prefix: str, raw_query: str) -> EntryRow:
        stat = entry.stat()
        is_dir = entry.is_dir()
        href = posixpath.join(nav_prefix or "/", urllib.parse.quote(entry.name))

        if is_dir:
            byte_size = 0
            size = constants.DIR_SIZE_PLACEHOLDER
            if raw_query:
                href += "?" + raw_query
        else:
            byte_size = stat.st_size
            size = format_size(byte_size)

        kind, icon, preview_url = self.classifier.classify(
            entry.path, byte_size, href=href, is_dir=is_dir
        )
        return EntryRow(
            name=entry.name,
            is_dir=is_dir,
            byte_size=byte_size,
            size=size,
            modified_at=format_timestamp(stat.st_mtime),
            kind=kind,
            icon=icon,
            href=href,
            preview_url=preview_url,
        )
