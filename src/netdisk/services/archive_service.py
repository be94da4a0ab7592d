# src/netdisk/services/archive_service.py
# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025 AZHAR ZOUHIR / BYTEDz

import logging
import os
import secrets
import subprocess
import zipfile
from pathlib import Path
from typing import List, Optional, Sequence

from pydantic import BaseModel

from ..core import constants
from ..core.exceptions import ArchiveError, PathResolutionError
from ..core.validators import validate_filename
from .path_resolver import PathResolver

log = logging.getLogger(__name__)


class ArchiveJob(BaseModel):
    label: str
    token: str
    members: List[Path]
    common_directory: Optional[Path] = None
    output_path: Path

    @property
    def output_name(self) -> str:
        return self.output_path.name


def _generate_token() -> str:
    try:
        return secrets.token_hex(16)
    except (OSError, NotImplementedError) as e:
        raise ArchiveError(f"Could not generate a unique archive name: {e}") from e


class ArchiveBuilder:
    """Bundles a selection of paths into one archive via an external tool."""

    def __init__(
        self,
        resolver: PathResolver,
        archive_dir: Path,
        command: Sequence[str] = tuple(constants.DEFAULT_ARCHIVE_COMMAND),
    ):
        self.resolver = resolver
        self.archive_dir = Path(archive_dir)
        self.command = list(command)

    def collect_members(self, selected: List[str]) -> List[Path]:
        """Resolves the selection, dropping duplicates and anything that does not exist."""
        members: List[Path] = []
        seen = set()
        for raw in selected:
            try:
                local_path = self.resolver.ensure_readable(self.resolver.resolve_target(raw))
            except PathResolutionError as e:
                log.warning(f"Skipping archive member '{raw}': {e}")
                continue
            if str(local_path) in seen:
                continue
            if not local_path.exists():
                log.warning(f"Skipping missing archive member: {local_path}")
                continue
            seen.add(str(local_path))
            members.append(local_path)
        return members

    def prepare(self, selected: List[str], label: str) -> ArchiveJob:
        label = validate_filename(label)
        members = self.collect_members(selected)
        token = _generate_token()
        return ArchiveJob(
            label=label,
            token=token,
            members=members,
            common_directory=members[0].parent if members else None,
            output_path=self.archive_dir / f"{token}_{label}",
        )

    def _member_args(self, job: ArchiveJob) -> List[str]:
        args = []
        for member in job.members:
            name = os.path.relpath(member, job.common_directory)
            if name.startswith("-"):
                name = os.path.join(".", name)
            args.append(name)
        return args

    def run(self, job: ArchiveJob) -> Path:
        if not job.members:
            log.info(f"No archive members survived, writing empty archive {job.output_path}")
            with zipfile.ZipFile(job.output_path, "w"):
                pass
            return job.output_path

        args = self.command + [str(job.output_path)] + self._member_args(job)
        log.info(f"archive command: {args} (cwd={job.common_directory})")
        try:
            result = subprocess.run(
                args, cwd=str(job.common_directory), capture_output=True, text=True
            )
        except OSError as e:
            log.error(f"Failed to start archive command {self.command[0]}: {e}")
            raise ArchiveError(f"Exec command failed: {e}") from e

        if result.returncode != 0:
            detail = (result.stderr or result.stdout or "").strip()
            log.error(f"Archive command exited with status {result.returncode}: {detail}")
            raise ArchiveError(f"{self.command[0]} exited with status {result.returncode}: {detail}")

        # zip appends '.zip' to an output name that has no extension.
        appended = Path(f"{job.output_path}.zip")
        if not job.output_path.exists() and appended.exists():
            os.replace(appended, job.output_path)
        if not job.output_path.exists():
            raise ArchiveError(f"Archive was not created: {job.output_name}")
        return job.output_path

    def archive(self, selected: List[str], label: str) -> ArchiveJob:
        job = self.prepare(selected, label)
        log.info(f"archive list: {[str(m) for m in job.members]}")
        self.run(job)
        return job
