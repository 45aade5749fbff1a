"""End-to-end tests for the consolidation run."""

from unittest.mock import Mock

import pytest

from folder_consolidator.core.consolidator import Consolidator, RunStatus
from folder_consolidator.core.mover import BatchMover
from folder_consolidator.exceptions import ConfigurationError
from folder_consolidator.models.config import Config
from folder_consolidator.models.conflict import ConflictChoice, ConflictStrategy

from conftest import make_file


@pytest.fixture
def prompt():
    """An operator who agrees to everything and picks nothing."""
    mock = Mock()
    mock.confirm.return_value = True
    mock.select_extensions.return_value = set()
    return mock


class TestConsolidator:
    """Test Consolidator class."""

    def test_jpg_scenario(self, scenario_tree):
        config = Config(
            target_directory=scenario_tree,
            extension_filter={".jpg"},
            conflict_action=ConflictStrategy.RENAME,
            remove_empty_directories=True,
            force_no_prompt=True,
        )

        result = Consolidator(config).run()

        assert result.status is RunStatus.COMPLETED
        assert (result.summary.moved, result.summary.skipped, result.summary.errors) == (2, 0, 0)
        assert (scenario_tree / "photo.jpg").exists()
        assert (scenario_tree / "photo_1.jpg").exists()
        assert not (scenario_tree / "sub").exists()
        assert not (scenario_tree / "sub2").exists()
        assert (scenario_tree / "root.txt").read_text() == "root"
        assert result.directories_removed == 2

    def test_no_subdirectory_files_is_nothing_to_move(self, tmp_path):
        make_file(tmp_path / "root.txt")
        (tmp_path / "empty").mkdir()
        mover = Mock(spec=BatchMover)
        config = Config(target_directory=tmp_path, force_no_prompt=True)

        result = Consolidator(config, mover=mover).run()

        assert result.status is RunStatus.NOTHING_TO_MOVE
        assert result.summary.moved == 0
        mover.move_all.assert_not_called()

    def test_filter_matching_nothing_is_nothing_to_move(self, scenario_tree):
        config = Config(target_directory=scenario_tree, extension_filter={".png"}, force_no_prompt=True)

        result = Consolidator(config).run()

        assert result.status is RunStatus.NOTHING_TO_MOVE
        assert (scenario_tree / "sub" / "photo.jpg").exists()

    def test_cancel_before_batch(self, scenario_tree, prompt):
        prompt.confirm.return_value = False
        config = Config(target_directory=scenario_tree, extension_filter={".jpg"},
                        conflict_action=ConflictStrategy.RENAME)

        result = Consolidator(config, prompt=prompt).run()

        assert result.status is RunStatus.CANCELLED
        assert (scenario_tree / "sub" / "photo.jpg").exists()
        assert not (scenario_tree / "photo.jpg").exists()

    def test_operator_selects_extensions(self, tmp_path, prompt):
        make_file(tmp_path / "sub" / "photo.jpg")
        make_file(tmp_path / "sub" / "note.txt")
        prompt.select_extensions.return_value = {".jpg"}
        config = Config(target_directory=tmp_path, conflict_action=ConflictStrategy.RENAME)

        result = Consolidator(config, prompt=prompt).run()

        prompt.select_extensions.assert_called_once()
        assert result.summary.moved == 1
        assert (tmp_path / "photo.jpg").exists()
        assert (tmp_path / "sub" / "note.txt").exists()

    def test_forced_run_without_filter_moves_everything(self, tmp_path, prompt):
        make_file(tmp_path / "sub" / "photo.jpg")
        make_file(tmp_path / "sub" / "note.txt")
        config = Config(target_directory=tmp_path, conflict_action=ConflictStrategy.RENAME,
                        force_no_prompt=True)

        result = Consolidator(config, prompt=prompt).run()

        assert result.summary.moved == 2
        prompt.select_extensions.assert_not_called()
        prompt.confirm.assert_not_called()

    def test_ask_uses_operator_choice(self, scenario_tree, prompt):
        prompt.choose_conflict.return_value = ConflictChoice(ConflictStrategy.SKIP)
        config = Config(target_directory=scenario_tree, extension_filter={".jpg"})

        result = Consolidator(config, prompt=prompt).run()

        prompt.choose_conflict.assert_called_once()
        assert (result.summary.moved, result.summary.skipped) == (1, 1)
        assert (scenario_tree / "sub2" / "photo.jpg").exists()

    def test_forced_ask_uses_unattended_answer(self, scenario_tree):
        config = Config(
            target_directory=scenario_tree,
            extension_filter={".jpg"},
            conflict_action=ConflictStrategy.ASK,
            unattended_conflict_action=ConflictStrategy.RENAME,
            force_no_prompt=True,
        )

        result = Consolidator(config).run()

        assert result.summary.moved == 2
        assert (scenario_tree / "photo_1.jpg").exists()

    def test_reaper_skipped_when_nothing_moved(self, scenario_tree):
        make_file(scenario_tree / "photo.jpg", "existing")
        config = Config(
            target_directory=scenario_tree,
            extension_filter={".jpg"},
            conflict_action=ConflictStrategy.SKIP,
            remove_empty_directories=True,
            force_no_prompt=True,
        )

        result = Consolidator(config).run()

        assert (result.summary.moved, result.summary.skipped) == (0, 2)
        assert result.directories_removed == 0
        assert (scenario_tree / "sub").exists()

    def test_reaper_asks_when_not_forced(self, scenario_tree, prompt):
        prompt.confirm.side_effect = [True, False]
        config = Config(
            target_directory=scenario_tree,
            extension_filter={".jpg"},
            conflict_action=ConflictStrategy.RENAME,
            remove_empty_directories=True,
        )

        result = Consolidator(config, prompt=prompt).run()

        assert prompt.confirm.call_count == 2
        assert result.summary.moved == 2
        assert result.directories_removed == 0
        assert (scenario_tree / "sub").exists()

    def test_keep_empty_directories(self, scenario_tree):
        config = Config(target_directory=scenario_tree, extension_filter={".jpg"},
                        conflict_action=ConflictStrategy.RENAME, force_no_prompt=True)

        result = Consolidator(config).run()

        assert result.directories_removed == 0
        assert (scenario_tree / "sub").is_dir()

    def test_missing_target(self, tmp_path):
        config = Config(target_directory=tmp_path / "missing", force_no_prompt=True)

        with pytest.raises(ConfigurationError):
            Consolidator(config).run()
