from pathlib import Path

from typer.testing import CliRunner

from brename.cli import app
from brename.plan import PlanEntry, RenamePlan
from brename.undo import UndoManager

runner = CliRunner()


def _write_plan(path: Path, entries: list[PlanEntry]) -> Path:
    path.write_text(RenamePlan(entries=entries).to_json(), encoding="utf-8")
    return path


def test_check_reports_invalid_names() -> None:
    result = runner.invoke(app, ["check", "good.txt", "CON"])

    assert result.exit_code == 1
    assert "Reserved system name" in result.output


def test_check_all_valid() -> None:
    result = runner.invoke(app, ["check", "good.txt"])

    assert result.exit_code == 0


def test_export_writes_plan(tmp_path: Path) -> None:
    (tmp_path / "a.txt").write_text("x")
    out = tmp_path / "plan.json"

    result = runner.invoke(app, ["export", str(tmp_path / "a.txt"), "-o", str(out)])

    assert result.exit_code == 0
    plan = RenamePlan.from_json(out.read_text(encoding="utf-8"))
    assert [Path(e.src).name for e in plan.entries] == ["a.txt"]


def test_apply_renames_and_records_undo(tmp_path: Path) -> None:
    files = tmp_path / "files"
    files.mkdir()
    (files / "a.txt").write_text("a")
    (files / "b.png").write_text("b")
    plan = _write_plan(
        tmp_path / "plan.json",
        [PlanEntry(src=str(files / "a.txt"), tgt="x"), PlanEntry(src=str(files / "b.png"))],
    )
    db = tmp_path / "history.db"

    result = runner.invoke(app, ["apply", "-i", str(plan), "-y", "--db", str(db)])

    assert result.exit_code == 0, result.output
    assert (files / "x.txt").read_text() == "a"
    assert (files / "b.png").exists()

    undo_result = runner.invoke(app, ["undo", "--db", str(db)])

    assert undo_result.exit_code == 0
    assert (files / "a.txt").read_text() == "a"


def test_apply_refuses_invalid_names(tmp_path: Path) -> None:
    (tmp_path / "a.txt").write_text("a")
    plan = _write_plan(tmp_path / "plan.json", [PlanEntry(src=str(tmp_path / "a.txt"), tgt="bad?")])

    result = runner.invoke(app, ["apply", "-i", str(plan), "-y", "--db", str(tmp_path / "h.db")])

    assert result.exit_code == 1
    assert (tmp_path / "a.txt").exists()


def test_apply_declined_confirmation(tmp_path: Path) -> None:
    (tmp_path / "a.txt").write_text("a")
    plan = _write_plan(tmp_path / "plan.json", [PlanEntry(src=str(tmp_path / "a.txt"), tgt="b")])

    result = runner.invoke(
        app, ["apply", "-i", str(plan), "--db", str(tmp_path / "h.db")], input="n\n"
    )

    assert result.exit_code == 0
    assert (tmp_path / "a.txt").exists()
    assert not (tmp_path / "b.txt").exists()


def test_apply_dry_run_keeps_files(tmp_path: Path) -> None:
    (tmp_path / "a.txt").write_text("a")
    plan = _write_plan(tmp_path / "plan.json", [PlanEntry(src=str(tmp_path / "a.txt"), tgt="b")])
    db = tmp_path / "h.db"

    result = runner.invoke(app, ["apply", "-i", str(plan), "-y", "--dry-run", "--db", str(db)])

    assert result.exit_code == 0
    assert (tmp_path / "a.txt").exists()
    with UndoManager(db) as undo_manager:
        assert undo_manager.history() == []


def test_apply_reports_failures(tmp_path: Path) -> None:
    (tmp_path / "a.txt").write_text("a")
    (tmp_path / "b.txt").write_text("b")
    plan = _write_plan(tmp_path / "plan.json", [PlanEntry(src=str(tmp_path / "a.txt"), tgt="b")])

    result = runner.invoke(app, ["apply", "-i", str(plan), "-y", "--db", str(tmp_path / "h.db")])

    assert result.exit_code == 1
    assert "Rename failed" in result.output


def test_apply_failure_lines_show_file_names(tmp_path: Path) -> None:
    (tmp_path / "a.txt").write_text("a")
    (tmp_path / "b.txt").write_text("b")
    plan = _write_plan(tmp_path / "plan.json", [PlanEntry(src=str(tmp_path / "a.txt"), tgt="b")])

    result = runner.invoke(app, ["apply", "-i", str(plan), "-y", "--db", str(tmp_path / "h.db")])

    assert "a.txt -> b.txt" in result.output
    assert "file-0-a.txt" not in result.output
