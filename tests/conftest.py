import pytest

from brename.models import SourceFile
from brename.store import RenameItemStore


def make_files(*names: str) -> list[SourceFile]:
    return [SourceFile(name=name, size=1024 * (i + 1)) for i, name in enumerate(names)]


@pytest.fixture
def events() -> list:
    return []


@pytest.fixture
def store(events: list) -> RenameItemStore:
    return RenameItemStore(notify=events.append)
