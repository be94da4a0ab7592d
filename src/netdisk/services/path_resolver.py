# src/netdisk/services/path_resolver.py
# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025 AZHAR ZOUHIR / BYTEDz

import logging
import os
import posixpath
import urllib.parse
from pathlib import Path

from ..core.exceptions import PathResolutionError

log = logging.getLogger(__name__)


class PathResolver:
    """
    Maps public URL paths onto the browsable root.

    Resolution is purely lexical: '.' and '..' segments are collapsed
    against a virtual '/' so the result can never climb above the root,
    whatever the input looks like.
    """

    def __init__(self, root: Path, mount_prefix: str = "/home"):
        self.root = Path(root)
        self.mount_prefix = "/" + mount_prefix.strip("/") if mount_prefix.strip("/") else ""

    @staticmethod
    def decode(raw: str) -> str:
        """Percent-decodes a path, returning the raw string when it is not valid UTF-8."""
        try:
            return urllib.parse.unquote(raw, errors="strict")
        except UnicodeDecodeError:
            log.debug(f"Could not decode path '{raw}', using it verbatim")
            return raw

    def strip_prefix(self, url_path: str) -> str:
        prefix = self.mount_prefix
        if prefix and (url_path == prefix or url_path.startswith(prefix + "/")):
            return url_path[len(prefix):]
        return url_path

    def relative(self, url_path: str) -> str:
        """Returns the clamped root-relative form of a URL path, without a leading slash."""
        if "\x00" in url_path:
            raise PathResolutionError("Path contains a NUL byte.")
        clean = posixpath.normpath("/" + self.strip_prefix(url_path))
        return clean.lstrip("/")

    def resolve(self, url_path: str) -> Path:
        relative = self.relative(url_path)
        local_path = self.root / relative if relative else self.root
        if not self.is_within_root(local_path):
            raise PathResolutionError(f"Access to path denied: {url_path}")
        return local_path

    def resolve_target(self, raw: str) -> Path:
        """Decodes then resolves an operation target (delete/move/archive)."""
        return self.resolve(self.decode(raw))

    def is_within_root(self, path: Path) -> bool:
        path = Path(os.path.normpath(path))
        return path == self.root or self.root in path.parents

    def ensure_mutable(self, path: Path) -> Path:
        """
        Canonicalizes a path ahead of a filesystem mutation.

        The parent is resolved through symlinks so a link inside the root
        cannot be used to reach outside it. The root itself is never mutable.
        """
        path = Path(path)
        canonical = Path(os.path.realpath(path.parent)) / path.name
        real_root = Path(os.path.realpath(self.root))
        if canonical == real_root or path.name in ("", ".", ".."):
            raise PathResolutionError("The home directory itself cannot be modified.")
        if real_root not in canonical.parents:
            raise PathResolutionError(f"Access to path denied: {path}")
        return canonical

    def ensure_readable(self, path: Path) -> Path:
        """Rejects a path whose real location, after following symlinks, is outside the root."""
        real_path = Path(os.path.realpath(path))
        real_root = Path(os.path.realpath(self.root))
        if real_path != real_root and real_root not in real_path.parents:
            raise PathResolutionError(f"Access to path denied: {path}")
        return Path(path)

    def to_url(self, path: Path) -> str:
        relative = Path(path).relative_to(self.root).as_posix()
        if relative == ".":
            relative = ""
        return posixpath.join(self.mount_prefix or "/", relative) if relative else (self.mount_prefix or "/")
