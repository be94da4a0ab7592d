# Shared fixtures for NetDisk tests.

import pytest
from fastapi.testclient import TestClient

from netdisk.api_server.api import create_app
from netdisk.core import constants
from netdisk.core.classifier import FileClassifier
from netdisk.core.config import initialize_directories, load_settings
from netdisk.services.path_resolver import PathResolver


@pytest.fixture
def home(tmp_path):
    root = tmp_path / "home"
    root.mkdir()
    return root.resolve()


@pytest.fixture
def settings(tmp_path, home):
    run_dir = tmp_path / "run"
    run_dir.mkdir()
    return load_settings(root_dir=str(home), run_dir=str(run_dir))


@pytest.fixture
def paths(settings):
    return initialize_directories(settings)


@pytest.fixture
def classifier():
    return FileClassifier.from_file(constants.DEFAULT_FILETYPES_FILE)


@pytest.fixture
def resolver(home):
    return PathResolver(home, "/home")


@pytest.fixture
def make_client(paths, classifier):
    def _make(settings):
        return TestClient(create_app(settings, paths, classifier))

    return _make


@pytest.fixture
def client(make_client, settings):
    return make_client(settings)
