# src/netdisk/core/validators.py
# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025 AZHAR ZOUHIR / BYTEDz

import json
from typing import List

from .exceptions import ValidationError

_FORBIDDEN_CHARS = ("/", "\\", "\x00")


def validate_filename(name: str, field: str = "name") -> str:
    """
    Returns the trimmed name if it is usable as a single path component.

    Raises ValidationError for empty names, dot entries and anything that
    could introduce a directory separator.
    """
    if name is None:
        raise ValidationError(f"The {field} cannot be empty!")
    name = name.strip()
    if not name:
        raise ValidationError(f"The {field} cannot be empty!")
    if name in (".", ".."):
        raise ValidationError(f"Invalid {field}: '{name}'")
    if any(ch in name for ch in _FORBIDDEN_CHARS):
        raise ValidationError(f"Invalid {field}: '{name}' must not contain path separators")
    return name


def validate_path_list(raw) -> List[str]:
    """Parses a JSON array of path strings (request body or form field)."""
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ValidationError(f"Path list is not valid UTF-8: {e}")
    try:
        paths = json.loads(raw) if isinstance(raw, str) else raw
    except json.JSONDecodeError as e:
        raise ValidationError(f"Path list is not valid JSON: {e}")
    if paths is None:
        return []
    if not isinstance(paths, list) or not all(isinstance(p, str) for p in paths):
        raise ValidationError("Path list must be a JSON array of strings.")
    return paths
