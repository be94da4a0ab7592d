# src/netdisk/core/config.py
"""
NetDisk - Web File Manager - Configuration Management
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

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from . import constants
from .exceptions import ConfigurationError

log = logging.getLogger(__name__)

# --- Default Configuration Values ---
# Central source of truth for all application settings and their defaults.

DEFAULT_SETTINGS: Dict[str, Any] = {
    # Filesystem layout
    "root_dir": "",
    "run_dir": "",
    "mount_prefix": constants.DEFAULT_MOUNT_PREFIX,

    # Server settings
    "host": constants.DEFAULT_HOST,
    "port": constants.DEFAULT_PORT,
    "log_level": "INFO",

    # File operations
    "delete_policy": "quarantine",
    "admin_token": "",
    "filetypes_file": "",
    "archive_command": list(constants.DEFAULT_ARCHIVE_COMMAND),
    "max_unique_attempts": constants.MAX_UNIQUE_ATTEMPTS,
}


class Settings(BaseModel):
    """Immutable process-wide configuration, built once at startup."""

    model_config = ConfigDict(frozen=True)

    root_dir: str = ""
    run_dir: str = ""
    mount_prefix: str = constants.DEFAULT_MOUNT_PREFIX
    host: str = constants.DEFAULT_HOST
    port: int = Field(constants.DEFAULT_PORT, ge=1, le=65535)
    log_level: str = "INFO"
    delete_policy: Literal["quarantine", "permanent"] = "quarantine"
    admin_token: str = ""
    filetypes_file: str = ""
    archive_command: List[str] = Field(
        default_factory=lambda: list(constants.DEFAULT_ARCHIVE_COMMAND), min_length=1
    )
    max_unique_attempts: int = Field(constants.MAX_UNIQUE_ATTEMPTS, ge=1)

    @property
    def normalized_mount_prefix(self) -> str:
        prefix = "/" + self.mount_prefix.strip("/")
        return prefix if prefix != "/" else ""


class AppPaths(BaseModel):
    """Absolute directories resolved from the settings."""

    model_config = ConfigDict(frozen=True)

    root: Path
    run_dir: Path
    archive_dir: Path
    trash_dir: Path
    log_dir: Path


def load_settings(config_file: Optional[Path] = None, **overrides: Any) -> Settings:
    """
    Loads settings from an optional JSON file, then applies overrides.

    Overrides whose value is None are ignored so that unset CLI flags do
    not mask values from the file.
    """
    values = DEFAULT_SETTINGS.copy()

    if config_file is not None:
        config_file = Path(config_file)
        try:
            with config_file.open("r", encoding="utf-8") as f:
                user_config = json.load(f)
        except (IOError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Cannot read configuration file {config_file}: {e}")
        if not isinstance(user_config, dict):
            raise ConfigurationError(f"Configuration file {config_file} must contain a JSON object")

        for key in user_config:
            if key not in DEFAULT_SETTINGS:
                log.warning(f"Ignoring unknown configuration key: '{key}'")
        values.update({k: v for k, v in user_config.items() if k in DEFAULT_SETTINGS})
        log.info(f"Configuration loaded from {config_file}")

    values.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return Settings(**values)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}")


def _is_within(path: Path, parent: Path) -> bool:
    return path == parent or parent in path.parents


def initialize_directories(settings: Settings) -> AppPaths:
    """
    Resolves and prepares the directory layout.

    The browsable root must already exist. The archive, trash and log
    directories are created under the run directory when missing.
    """
    run_dir = Path(settings.run_dir or Path.cwd()).expanduser().resolve()
    if not run_dir.is_dir():
        raise ConfigurationError(f"Run directory does not exist: {run_dir}")

    root = Path(settings.root_dir).expanduser() if settings.root_dir else run_dir / "home"
    root = root.resolve()
    if not root.is_dir():
        raise ConfigurationError(f"Home directory does not exist: {root}")

    # The served tree must never expose the application's own files.
    if _is_within(run_dir, root):
        raise ConfigurationError(f"Home dir conflict: {root} contains run dir {run_dir}")

    managed = {}
    for name in (constants.ARCHIVE_DIRNAME, constants.TRASH_DIRNAME, constants.LOG_DIRNAME):
        directory = run_dir / name
        if _is_within(directory, root):
            raise ConfigurationError(f"Home dir conflict: {directory} lies inside {root}")
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigurationError(f"Cannot create directory {directory}: {e}")
        managed[name] = directory

    paths = AppPaths(
        root=root,
        run_dir=run_dir,
        archive_dir=managed[constants.ARCHIVE_DIRNAME],
        trash_dir=managed[constants.TRASH_DIRNAME],
        log_dir=managed[constants.LOG_DIRNAME],
    )
    log.info(f"run dir: {paths.run_dir}")
    log.info(f"home dir: {paths.root}")
    log.info(f"archive dir: {paths.archive_dir}")
    log.info(f"trash dir: {paths.trash_dir}")
    return paths
