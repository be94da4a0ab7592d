# Tests for collision-free destination names.

import pytest

from netdisk.core.exceptions import FileOperationError
from netdisk.services.unique_path import get_unique_path


class TestGetUniquePath:
    def test_free_path_unchanged(self, tmp_path):
        target = tmp_path / "x.txt"
        assert get_unique_path(target) == target

    def test_suffix_inserted_before_extension(self, tmp_path):
        (tmp_path / "x.txt").write_text("1")
        assert get_unique_path(tmp_path / "x.txt") == tmp_path / "x_bak.txt"

    def test_repeated_collisions(self, tmp_path):
        (tmp_path / "x.txt").write_text("1")
        (tmp_path / "x_bak.txt").write_text("2")
        assert get_unique_path(tmp_path / "x.txt") == tmp_path / "x_bak_bak.txt"

    def test_no_extension(self, tmp_path):
        (tmp_path / "README").write_text("1")
        assert get_unique_path(tmp_path / "README") == tmp_path / "README_bak"

    def test_directories_count_as_taken(self, tmp_path):
        (tmp_path / "folder").mkdir()
        assert get_unique_path(tmp_path / "folder") == tmp_path / "folder_bak"

    def test_gives_up_after_max_attempts(self, tmp_path):
        (tmp_path / "x.txt").write_text("1")
        (tmp_path / "x_bak.txt").write_text("2")
        with pytest.raises(FileOperationError):
            get_unique_path(tmp_path / "x.txt", max_attempts=2)
