# src/netdisk/services/trash_service.py
# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025 AZHAR ZOUHIR / BYTEDz

import logging
import os
import shutil
import uuid
from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel

from ..core.exceptions import NetdiskError
from .path_resolver import PathResolver

log = logging.getLogger(__name__)


class DeletePolicy(str, Enum):
    PERMANENT = "permanent"
    QUARANTINE = "quarantine"


class DeleteResult(BaseModel):
    path: str
    success: bool
    reason: str = ""
    destination: Optional[str] = None


class TrashMover:
    """Soft delete: renames targets into the trash directory as '<token>_<name>'."""

    def __init__(self, trash_dir: Path):
        self.trash_dir = Path(trash_dir)

    def remove(self, local_path: Path) -> Optional[Path]:
        trash_path = self.trash_dir / f"{uuid.uuid4().hex.upper()}_{local_path.name}"
        os.rename(local_path, trash_path)
        return trash_path


class PermanentDeleter:
    """Hard delete: files are unlinked, directories removed recursively."""

    def remove(self, local_path: Path) -> Optional[Path]:
        if local_path.is_dir() and not local_path.is_symlink():
            shutil.rmtree(local_path)
        else:
            local_path.unlink()
        return None


class DeleteService:
    """Best-effort batch delete; one item failing never stops the rest."""

    def __init__(self, resolver: PathResolver, policy: DeletePolicy, trash_dir: Path):
        self.resolver = resolver
        self.policy = DeletePolicy(policy)
        if self.policy is DeletePolicy.QUARANTINE:
            self.strategy = TrashMover(trash_dir)
        else:
            self.strategy = PermanentDeleter()

    def delete_one(self, raw_path: str) -> DeleteResult:
        try:
            local_path = self.resolver.ensure_mutable(self.resolver.resolve_target(raw_path))
            destination = self.strategy.remove(local_path)
        except (NetdiskError, OSError) as e:
            log.error(f"Failed to delete '{raw_path}' ({self.policy.value}): {e}")
            return DeleteResult(path=raw_path, success=False, reason=str(e))

        if destination is not None:
            log.info(f"Moved {local_path} to trash as {destination.name}")
            return DeleteResult(path=raw_path, success=True, destination=str(destination))
        log.info(f"Deleted {local_path}")
        return DeleteResult(path=raw_path, success=True)

    def delete_many(self, raw_paths: List[str]) -> List[DeleteResult]:
        return [self.delete_one(raw_path) for raw_path in raw_paths]
