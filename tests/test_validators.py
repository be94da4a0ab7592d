# Tests for request input validation helpers.

import pytest

from netdisk.core.exceptions import ValidationError
from netdisk.core.validators import validate_filename, validate_path_list


class TestValidateFilename:
    def test_trims_whitespace(self):
        assert validate_filename("  report.pdf ") == "report.pdf"

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_empty_rejected(self, name):
        with pytest.raises(ValidationError, match="cannot be empty"):
            validate_filename(name)

    @pytest.mark.parametrize("name", [".", "..", "a/b", "..\\up", "nul\x00byte"])
    def test_unsafe_names_rejected(self, name):
        with pytest.raises(ValidationError):
            validate_filename(name)

    def test_field_name_in_message(self):
        with pytest.raises(ValidationError, match="The file name cannot be empty!"):
            validate_filename("", "file name")


class TestValidatePathList:
    def test_parses_bytes_body(self):
        assert validate_path_list(b'["/home/a.txt", "/home/b"]') == ["/home/a.txt", "/home/b"]

    def test_null_is_empty(self):
        assert validate_path_list("null") == []

    @pytest.mark.parametrize("raw", ["{broken", '{"a": 1}', "[1, 2]", b"\xff\xfe"])
    def test_malformed_rejected(self, raw):
        with pytest.raises(ValidationError):
            validate_path_list(raw)
