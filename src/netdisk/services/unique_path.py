# src/netdisk/services/unique_path.py
# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025 AZHAR ZOUHIR / BYTEDz

import logging
import os
from pathlib import Path

from ..core import constants
from ..core.exceptions import FileOperationError

log = logging.getLogger(__name__)

BACKUP_SUFFIX = "_bak"


def get_unique_path(path: Path, max_attempts: int = constants.MAX_UNIQUE_ATTEMPTS) -> Path:
    """
    Returns a path that does not exist yet, inserting '_bak' before the
    extension until one is free ('x.txt' -> 'x_bak.txt' -> 'x_bak_bak.txt').

    The check is not atomic with the caller's later write.
    """
    candidate = str(path)
    for _ in range(max_attempts):
        if not os.path.lexists(candidate):
            return Path(candidate)
        base, ext = os.path.splitext(candidate)
        candidate = base + BACKUP_SUFFIX + ext
    log.error(f"No free name found for {path} after {max_attempts} attempts")
    raise FileOperationError(f"Could not find a free name for '{Path(path).name}'")
