# Tests for directory listing rows and size formatting.

import logging
import os
import re
from unittest.mock import patch

import pytest

from netdisk.services.listing import DirectoryLister, format_size, format_timestamp


@pytest.fixture
def lister(classifier):
    return DirectoryLister(classifier)


class TestFormatSize:
    @pytest.mark.parametrize(
        "num_bytes, expected",
        [
            (0, "0 B"),
            (1023, "1023 B"),
            (1024, "1.00 KB"),
            (1536, "1.50 KB"),
            (1 << 20, "1.00 MB"),
            (1 << 30, "1.00 GB"),
            (5 * (1 << 40), "5.00 TB"),
        ],
    )
    def test_binary_units(self, num_bytes, expected):
        assert format_size(num_bytes) == expected


class TestFormatTimestamp:
    def test_fixed_second_precision_format(self):
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}", format_timestamp(1700000000.75))


class TestDirectoryLister:
    def test_missing_directory_is_empty(self, lister, home):
        assert lister.list(home / "nope", "/home/nope") == []

    def test_file_instead_of_directory_is_empty(self, lister, home):
        (home / "plain.txt").write_text("x")
        assert lister.list(home / "plain.txt", "/home/plain.txt") == []

    def test_permission_denied_is_empty(self, lister, home, caplog):
        (home / "locked").mkdir()
        (home / "locked" / "hidden.txt").write_text("x")
        with patch("netdisk.services.listing.os.scandir", side_effect=PermissionError(13, "Permission denied")):
            with caplog.at_level(logging.WARNING, logger="netdisk.services.listing"):
                assert lister.list(home / "locked", "/home/locked") == []
        assert "Could not read directory" in caplog.text

    def test_rows_describe_children(self, lister, home):
        (home / "sub").mkdir()
        (home / "a.txt").write_bytes(b"x" * 2048)

        rows = lister.list(home, "/home")
        assert [r.name for r in rows] == ["a.txt", "sub"]

        file_row, dir_row = rows
        assert file_row.is_dir is False
        assert file_row.byte_size == 2048
        assert file_row.size == "2.00 KB"
        assert file_row.kind == "Text"
        assert file_row.icon == "fa-file-text-o"
        assert file_row.href == "/home/a.txt"
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}", file_row.modified_at)

        assert dir_row.is_dir is True
        assert dir_row.byte_size == 0
        assert dir_row.size == "--"
        assert dir_row.kind == "Folder"
        assert dir_row.icon == "fa-folder"
        assert dir_row.preview_url == ""

    def test_query_is_carried_on_directory_links_only(self, lister, home):
        (home / "sub").mkdir()
        (home / "a.txt").write_text("x")

        rows = {r.name: r for r in lister.list(home, "/home", "s=name&o=asc")}
        assert rows["sub"].href == "/home/sub?s=name&o=asc"
        assert rows["a.txt"].href == "/home/a.txt"

    def test_nested_nav_prefix(self, lister, home):
        (home / "a" / "b").mkdir(parents=True)
        (home / "a" / "b" / "c.txt").write_text("x")
        rows = lister.list(home / "a" / "b", "/home/a/b")
        assert rows[0].href == "/home/a/b/c.txt"

    def test_names_are_url_quoted_in_href(self, lister, home):
        (home / "my file.txt").write_text("x")
        rows = lister.list(home, "/home")
        assert rows[0].name == "my file.txt"
        assert rows[0].href == "/home/my%20file.txt"

    def test_unknown_extension_maps_to_generic_file(self, lister, home):
        (home / "blob.weird").write_text("x")
        row = lister.list(home, "/home")[0]
        assert row.kind == "File"
        assert row.icon == "fa-file-o"

    def test_preview_link_for_allowed_small_files(self, lister, home):
        (home / "report.pdf").write_bytes(b"%PDF-1.4")
        row = lister.list(home, "/home")[0]
        assert row.preview_url == "/home/report.pdf"

    def test_dangling_symlink_is_skipped(self, lister, home):
        os.symlink(home / "gone", home / "broken")
        (home / "ok.txt").write_text("x")
        assert [r.name for r in lister.list(home, "/home")] == ["ok.txt"]
