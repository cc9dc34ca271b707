"""通知事件

核心组件通过注入的回调发出结构化事件，由宿主（CLI / Streamlit）渲染成提示。
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum


class EventKind(str, Enum):
    """事件类型"""

    FILES_ADDED = "files_added"
    FILES_CLEARED = "files_cleared"
    RENAME_COMPLETED = "rename_completed"
    RENAME_FAILED = "rename_failed"
    RENAME_CANCELLED = "rename_cancelled"


@dataclass(frozen=True)
class Notification:
    """一条通知"""

    kind: EventKind
    count: int = 0
    failures: dict[str, str] = field(default_factory=dict)  # item id -> 原因

    @property
    def is_error(self) -> bool:
        return self.kind == EventKind.RENAME_FAILED

    @property
    def title(self) -> str:
        return {
            EventKind.FILES_ADDED: "Files added",
            EventKind.FILES_CLEARED: "Files cleared",
            EventKind.RENAME_COMPLETED: "Rename completed",
            EventKind.RENAME_FAILED: "Rename failed",
            EventKind.RENAME_CANCELLED: "Rename cancelled",
        }[self.kind]

    @property
    def description(self) -> str:
        if self.kind == EventKind.FILES_ADDED:
            return f"{self.count} files added to rename list"
        if self.kind == EventKind.FILES_CLEARED:
            return "All files removed from the list"
        if self.kind == EventKind.RENAME_COMPLETED:
            return f"Successfully renamed {self.count} files"
        if self.kind == EventKind.RENAME_FAILED:
            return (
                f"{len(self.failures)} files failed, "
                f"{self.count} renamed successfully"
            )
        return f"Stopped after renaming {self.count} files"


Notifier = Callable[[Notification], None]
