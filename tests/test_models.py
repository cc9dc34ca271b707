from pathlib import Path

import pytest
from pydantic import ValidationError

from brename.events import EventKind, Notification
from brename.models import FileCategory, RenameItem, SourceFile


def test_source_file_is_immutable() -> None:
    source = SourceFile(name="a.txt")

    with pytest.raises(ValidationError):
        source.name = "b.txt"


def test_rename_item_is_immutable() -> None:
    item = RenameItem(id="file-0-a.txt", source=SourceFile(name="a.txt"), candidate_name="a.txt")

    with pytest.raises(ValidationError):
        item.candidate_name = "b.txt"


@pytest.mark.parametrize(
    "name, category",
    [
        ("photo.JPG", FileCategory.IMAGE),
        ("clip.mov", FileCategory.VIDEO),
        ("song.flac", FileCategory.AUDIO),
        ("notes.md", FileCategory.DOCUMENT),
        ("archive.zip", FileCategory.OTHER),
        ("Makefile", FileCategory.OTHER),
    ],
)
def test_category_by_extension(name: str, category: FileCategory) -> None:
    assert SourceFile(name=name).category == category


def test_size_label_and_from_path(tmp_path: Path) -> None:
    path = tmp_path / "a.bin"
    path.write_bytes(b"x" * 1536)

    source = SourceFile.from_path(path)

    assert source.name == "a.bin"
    assert source.size_label == "1.5 KB"


def test_notification_text() -> None:
    failed = Notification(EventKind.RENAME_FAILED, count=1, failures={"a": "busy", "b": "gone"})

    assert failed.is_error
    assert failed.title == "Rename failed"
    assert failed.description == "2 files failed, 1 renamed successfully"
    assert Notification(EventKind.FILES_CLEARED).description == "All files removed from the list"


def test_rename_item_is_modified_is_case_sensitive() -> None:
    source = SourceFile(name="a.txt")

    assert not RenameItem(id="i", source=source, candidate_name="a.txt").is_modified
    assert RenameItem(id="i", source=source, candidate_name="A.txt").is_modified
