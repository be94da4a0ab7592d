# Tests for delete policies.

import re

import pytest

from netdisk.services.trash_service import DeletePolicy, DeleteService, PermanentDeleter, TrashMover


@pytest.fixture
def trash_dir(tmp_path):
    directory = tmp_path / "trash"
    directory.mkdir()
    return directory


@pytest.fixture
def quarantine(resolver, trash_dir):
    return DeleteService(resolver, DeletePolicy.QUARANTINE, trash_dir)


class TestQuarantine:
    def test_uses_trash_mover(self, quarantine):
        assert isinstance(quarantine.strategy, TrashMover)

    def test_file_moved_into_trash_with_token_prefix(self, quarantine, home, trash_dir):
        (home / "a.txt").write_text("keep me")

        result = quarantine.delete_one("/home/a.txt")

        assert result.success
        assert not (home / "a.txt").exists()
        trashed = list(trash_dir.iterdir())
        assert len(trashed) == 1
        assert re.fullmatch(r"[0-9A-F]{32}_a\.txt", trashed[0].name)
        assert trashed[0].read_text() == "keep me"
        assert result.destination == str(trashed[0])

    def test_directories_are_moved_whole(self, quarantine, home, trash_dir):
        (home / "docs").mkdir()
        (home / "docs" / "n.txt").write_text("n")
        assert quarantine.delete_one("/home/docs").success
        (trashed,) = list(trash_dir.iterdir())
        assert (trashed / "n.txt").read_text() == "n"

    def test_vanished_source_does_not_abort_batch(self, quarantine, home, trash_dir):
        (home / "a.txt").write_text("a")
        (home / "b.txt").write_text("b")
        (home / "b.txt").unlink()

        results = quarantine.delete_many(["/home/b.txt", "/home/a.txt"])

        assert [r.success for r in results] == [False, True]
        assert results[0].reason
        assert not (home / "a.txt").exists()
        assert len(list(trash_dir.iterdir())) == 1

    def test_same_name_twice_does_not_collide(self, quarantine, home, trash_dir):
        for _ in range(2):
            (home / "a.txt").write_text("a")
            assert quarantine.delete_one("/home/a.txt").success
        assert len(list(trash_dir.iterdir())) == 2

    def test_percent_encoded_target(self, quarantine, home):
        (home / "my file.txt").write_text("a")
        assert quarantine.delete_one("/home/my%20file.txt").success
        assert not (home / "my file.txt").exists()

    def test_root_cannot_be_deleted(self, quarantine, home):
        (home / "a.txt").write_text("a")
        for target in ("/home", "/home/", "/home/..", "/home/../.."):
            assert not quarantine.delete_one(target).success
        assert (home / "a.txt").exists()

    def test_traversal_is_clamped(self, quarantine, home, tmp_path):
        (tmp_path / "victim.txt").write_text("outside")
        result = quarantine.delete_one("/home/../victim.txt")
        assert not result.success
        assert (tmp_path / "victim.txt").exists()


class TestPermanent:
    def test_uses_permanent_deleter(self, resolver, trash_dir):
        service = DeleteService(resolver, "permanent", trash_dir)
        assert isinstance(service.strategy, PermanentDeleter)

    def test_files_and_directories_removed(self, resolver, home, trash_dir):
        service = DeleteService(resolver, DeletePolicy.PERMANENT, trash_dir)
        (home / "a.txt").write_text("a")
        (home / "docs").mkdir()
        (home / "docs" / "n.txt").write_text("n")

        results = service.delete_many(["/home/a.txt", "/home/docs"])

        assert all(r.success for r in results)
        assert list(home.iterdir()) == []
        assert list(trash_dir.iterdir()) == []


def test_unknown_policy_rejected(resolver, trash_dir):
    with pytest.raises(ValueError):
        DeleteService(resolver, "shred", trash_dir)
