# filename: src/netdisk/core/constants.py
"""
NetDisk - Web File Manager - Constants Module
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

from pathlib import Path

from .version import __app_name__

# --- Application Metadata ---
APP_NAME = __app_name__

# --- Core Application Settings ---
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080
DEFAULT_MOUNT_PREFIX = "/home"
# -y stores symlinks as links instead of following them.
DEFAULT_ARCHIVE_COMMAND = ["zip", "-r", "-q", "-y"]
MAX_UNIQUE_ATTEMPTS = 100

# --- Listing Presentation ---
DIR_SIZE_PLACEHOLDER = "--"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# --- Directory Names (under the run directory) ---
ARCHIVE_DIRNAME = "archive"
TRASH_DIRNAME = "trash"
LOG_DIRNAME = "log"
LOG_FILENAME = "netdisk.log"

# --- Package Resources ---
PACKAGE_DIR = Path(__file__).resolve().parent.parent
WEB_DIR = PACKAGE_DIR / "web"
TEMPLATES_DIR = WEB_DIR / "templates"
STATIC_DIR = WEB_DIR / "static"
DEFAULT_FILETYPES_FILE = PACKAGE_DIR / "data" / "filetypes.json"

# --- Header Names ---
ADMIN_TOKEN_HEADER = "X-Admin-Token"
