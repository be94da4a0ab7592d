# filename: src/netdisk/main.py
#!/usr/bin/env python3
"""
NetDisk - Web File Manager
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

import argparse
import logging
import sys
from pathlib import Path

import uvicorn

from .api_server.api import create_app
from .core import constants
from .core.classifier import FileClassifier
from .core.config import initialize_directories, load_settings
from .core.exceptions import ConfigurationError
from .core.logging_config import setup_logging
from .core.version import __app_name__, __version__


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="netdisk", description=f"{__app_name__} v{__version__} - browse a directory tree over HTTP"
    )
    parser.add_argument("-c", "--config", type=Path, help="JSON configuration file")
    parser.add_argument("-r", "--root", dest="root_dir", help="directory to serve")
    parser.add_argument("--run-dir", dest="run_dir", help="directory holding archive/, trash/ and log/")
    parser.add_argument("--host", help=f"bind address (default {constants.DEFAULT_HOST})")
    parser.add_argument("-p", "--port", type=int, help=f"bind port (default {constants.DEFAULT_PORT})")
    parser.add_argument("--mount-prefix", dest="mount_prefix", help="URL prefix of the browsable tree")
    parser.add_argument("--delete-policy", dest="delete_policy", choices=["quarantine", "permanent"])
    parser.add_argument("--log-level", dest="log_level", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main entry point for NetDisk."""
    args = parse_args(argv)
    overrides = {k: v for k, v in vars(args).items() if k != "config"}

    try:
        settings = load_settings(args.config, **overrides)
        paths = initialize_directories(settings)
        setup_logging(paths.log_dir, getattr(logging, settings.log_level.upper(), logging.INFO))
        log = logging.getLogger(__name__)
        log.info(f"Starting {__app_name__} v{__version__}")

        filetypes_file = Path(settings.filetypes_file) if settings.filetypes_file else constants.DEFAULT_FILETYPES_FILE
        classifier = FileClassifier.from_file(filetypes_file)
        app = create_app(settings, paths, classifier)
    except ConfigurationError as e:
        logging.getLogger(__name__).critical(f"Failed to start {__app_name__}: {e}")
        print(f"ERROR: Could not start {__app_name__}: {e}", file=sys.stderr)
        return 1

    uvicorn.run(app, host=settings.host, port=settings.port, log_level="warning")
    return 0


if __name__ == "__main__":
    sys.exit(main())
