"""Tests for the filesystem adapter."""

import errno
import os
from unittest.mock import patch

import pytest

from folder_consolidator.core.conflict_resolver import ConflictResolver
from folder_consolidator.core.mover import BatchMover
from folder_consolidator.infrastructure.adapters.filesystem_adapter import FilesystemAdapter
from folder_consolidator.models.conflict import ConflictStrategy, OutcomeStatus

from conftest import make_file, refs


class TestMove:
    """Test FilesystemAdapter.move."""

    def test_moves_file(self, tmp_path):
        source = make_file(tmp_path / "sub" / "a.txt", "payload")
        destination = tmp_path / "a.txt"

        FilesystemAdapter().move(source, destination)

        assert not source.exists()
        assert destination.read_text() == "payload"

    def test_refuses_to_replace_existing_destination(self, tmp_path):
        source = make_file(tmp_path / "sub" / "a.txt", "incoming")
        destination = make_file(tmp_path / "a.txt", "existing")

        with pytest.raises(FileExistsError):
            FilesystemAdapter().move(source, destination)

        assert source.read_text() == "incoming"
        assert destination.read_text() == "existing"

    def test_falls_back_when_hard_links_are_unavailable(self, tmp_path):
        source = make_file(tmp_path / "sub" / "a.txt", "payload")
        destination = tmp_path / "a.txt"

        with patch("folder_consolidator.infrastructure.adapters.filesystem_adapter.os.link",
                   side_effect=OSError(errno.EXDEV, "Invalid cross-device link")):
            FilesystemAdapter().move(source, destination)

        assert not source.exists()
        assert destination.read_text() == "payload"

    def test_fallback_still_refuses_existing_destination(self, tmp_path):
        source = make_file(tmp_path / "sub" / "a.txt", "incoming")
        destination = make_file(tmp_path / "a.txt", "existing")

        with patch("folder_consolidator.infrastructure.adapters.filesystem_adapter.os.link",
                   side_effect=OSError(errno.EXDEV, "Invalid cross-device link")):
            with pytest.raises(FileExistsError):
                FilesystemAdapter().move(source, destination)

        assert destination.read_text() == "existing"

    def test_other_link_errors_propagate(self, tmp_path):
        source = make_file(tmp_path / "sub" / "a.txt")

        with patch("folder_consolidator.infrastructure.adapters.filesystem_adapter.os.link",
                   side_effect=OSError(errno.EIO, "I/O error")):
            with pytest.raises(OSError):
                FilesystemAdapter().move(source, tmp_path / "a.txt")

        assert source.exists()

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
    def test_moves_symlink_itself(self, tmp_path):
        target = make_file(tmp_path / "real.txt", "payload")
        source = tmp_path / "sub" / "link.txt"
        source.parent.mkdir()
        os.symlink(target, source)
        destination = tmp_path / "link.txt"

        FilesystemAdapter().move(source, destination)

        assert destination.is_symlink()
        assert destination.read_text() == "payload"


class TestLateConflict:
    """A destination created after the existence check is left alone."""

    def test_file_appearing_before_move_is_not_replaced(self, tmp_path):
        source = make_file(tmp_path / "sub" / "a.txt", "incoming")
        destination = tmp_path / "a.txt"
        filesystem = FilesystemAdapter()
        resolver = ConflictResolver(filesystem)
        check = resolver.is_taken

        def check_then_create(path, claimed=frozenset()):
            taken = check(path, claimed)
            if path == destination:
                make_file(destination, "late arrival")
            return taken

        resolver.is_taken = check_then_create
        mover = BatchMover(resolver=resolver, filesystem=filesystem)

        summary = mover.move_all(tmp_path, refs(source), set(), ConflictStrategy.RENAME)

        assert summary.errors == 1
        assert summary.outcomes[0].status is OutcomeStatus.FAILED
        assert destination.read_text() == "late arrival"
        assert source.read_text() == "incoming"
