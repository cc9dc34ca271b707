from pathlib import Path

import pytest

from brename.errors import PlanError
from brename.models import SourceFile
from brename.plan import PlanEntry, RenamePlan, load_plan_into, plan_from_files, plan_from_items
from brename.store import RenameItemStore


def test_plan_from_files_has_empty_targets(tmp_path: Path) -> None:
    path = tmp_path / "a.txt"
    path.write_text("x")

    plan = plan_from_files([SourceFile.from_path(path)])

    assert plan.entries == [PlanEntry(src=str(path.resolve()), tgt="")]
    assert RenamePlan.from_json(plan.to_json()) == plan


def test_invalid_json_raises_plan_error() -> None:
    with pytest.raises(PlanError):
        RenamePlan.from_json('{"entries": [{"tgt": "x"}]}')


def test_load_plan_applies_targets_with_extension(tmp_path: Path) -> None:
    for name in ["a.txt", "b.png"]:
        (tmp_path / name).write_text("x")
    plan = RenamePlan(
        entries=[
            PlanEntry(src=str(tmp_path / "b.png"), tgt="cover"),
            PlanEntry(src=str(tmp_path / "a.txt")),
        ]
    )
    store = RenameItemStore()

    applied = load_plan_into(store, plan)

    assert applied == 1
    assert [item.source.name for item in store.items] == ["b.png", "a.txt"]
    assert store.items[0].candidate_name == "cover.png"
    assert store.modified_count() == 1

    round_trip = plan_from_items(store.items)
    assert [e.tgt for e in round_trip.entries] == ["cover.png", ""]


def test_load_plan_missing_source(tmp_path: Path) -> None:
    plan = RenamePlan(entries=[PlanEntry(src=str(tmp_path / "missing.txt"))])

    with pytest.raises(FileNotFoundError):
        load_plan_into(RenameItemStore(), plan)
