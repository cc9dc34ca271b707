from pathlib import Path

import pytest

from brename.models import RenameOperation
from brename.undo import UndoManager


@pytest.fixture
def undo_manager(tmp_path: Path):
    with UndoManager(tmp_path / "db" / "history.db") as manager:
        yield manager


def _rename(src: Path, name: str) -> RenameOperation:
    tgt = src.with_name(name)
    src.rename(tgt)
    return RenameOperation(original_path=src, new_path=tgt)


def test_record_and_undo_restores_names(tmp_path: Path, undo_manager: UndoManager) -> None:
    (tmp_path / "a.txt").write_text("a")
    (tmp_path / "b.txt").write_text("b")
    ops = [_rename(tmp_path / "a.txt", "x.txt"), _rename(tmp_path / "b.txt", "y.txt")]

    batch_id = undo_manager.record(ops, description="test")
    result = undo_manager.undo(batch_id)

    assert result.success_count == 2
    assert result.failed_count == 0
    assert (tmp_path / "a.txt").read_text() == "a"
    assert (tmp_path / "b.txt").read_text() == "b"
    assert undo_manager.history()[0].undone


def test_undo_twice_reports_already_undone(tmp_path: Path, undo_manager: UndoManager) -> None:
    (tmp_path / "a.txt").write_text("a")
    batch_id = undo_manager.record([_rename(tmp_path / "a.txt", "x.txt")])
    undo_manager.undo(batch_id)

    result = undo_manager.undo(batch_id)

    assert result.success_count == 0
    assert "已撤销" in result.failed_items[0][2]


def test_undo_reports_missing_files(tmp_path: Path, undo_manager: UndoManager) -> None:
    (tmp_path / "a.txt").write_text("a")
    op = _rename(tmp_path / "a.txt", "x.txt")
    op.new_path.unlink()
    undo_manager.record([op])

    result = undo_manager.undo_latest()

    assert result.failed_count == 1
    assert result.failed_items[0][0] == tmp_path / "a.txt"


def test_undo_latest_without_history(undo_manager: UndoManager) -> None:
    result = undo_manager.undo_latest()

    assert result.success_count == 0
    assert result.failed_items[0][2] == "没有可撤销的操作"


def test_record_empty_returns_empty_id(undo_manager: UndoManager) -> None:
    assert undo_manager.record([]) == ""
    assert undo_manager.history() == []


def test_prune_keeps_recent(tmp_path: Path, undo_manager: UndoManager) -> None:
    op = RenameOperation(tmp_path / "a", tmp_path / "b")
    for _ in range(3):
        undo_manager.record([op])

    assert undo_manager.prune(keep_recent=1) == 2
    assert len(undo_manager.history()) == 1
    assert undo_manager.prune() == 1
    assert undo_manager.history() == []
