"""重命名计划 JSON

命令行通过 JSON 计划在 导出 -> 编辑 -> 应用 之间传递重命名列表::

    {"entries": [{"src": "/photos/a.jpg", "tgt": "beach"}]}

tgt 为空表示保持原名；条目顺序即列表顺序。
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ValidationError

from brename.errors import PlanError
from brename.models import RenameItem, SourceFile
from brename.store import RenameItemStore


class PlanEntry(BaseModel):
    """计划中的一项"""

    src: str  # 源文件路径
    tgt: str = ""  # 目标文件名（空字符串表示不改名）


class RenamePlan(BaseModel):
    """重命名计划"""

    entries: list[PlanEntry] = []

    def to_json(self, indent: int = 2) -> str:
        return self.model_dump_json(indent=indent)

    @classmethod
    def from_json(cls, json_str: str) -> "RenamePlan":
        """解析 JSON

        Raises:
            PlanError: JSON 格式或结构无效
        """
        try:
            return cls.model_validate_json(json_str)
        except ValidationError as e:
            raise PlanError(f"无效的重命名计划: {e}") from e


def plan_from_files(files: list[SourceFile]) -> RenamePlan:
    """由文件列表生成空目标的计划"""
    return RenamePlan(
        entries=[
            PlanEntry(src=str(f.path) if f.path is not None else f.name)
            for f in files
        ]
    )


def plan_from_items(items: tuple[RenameItem, ...] | list[RenameItem]) -> RenamePlan:
    """由当前条目生成计划（未修改的条目 tgt 为空）"""
    return RenamePlan(
        entries=[
            PlanEntry(
                src=str(item.source.path) if item.source.path is not None else item.source.name,
                tgt=item.candidate_name if item.is_modified else "",
            )
            for item in items
        ]
    )


def load_plan_into(store: RenameItemStore, plan: RenamePlan) -> int:
    """按计划初始化存储并提交目标名

    目标名和编辑框提交一样经过扩展名保留处理。

    Args:
        store: 条目存储
        plan: 重命名计划

    Returns:
        提交了目标名的条目数

    Raises:
        FileNotFoundError: 计划中的源文件不存在
    """
    files = []
    for entry in plan.entries:
        path = Path(entry.src).expanduser()
        if not path.is_file():
            raise FileNotFoundError(f"源文件不存在: {path}")
        files.append(SourceFile.from_path(path))

    snapshot = store.initialize(files)

    applied = 0
    for item, entry in zip(snapshot, plan.entries):
        if entry.tgt:
            store.rename(item.id, entry.tgt)
            applied += 1
    return applied
