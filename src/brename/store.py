"""重命名条目存储

保存有序的重命名条目集合。每次修改都生成新的不可变快照（tuple）并递增版本号，
观察者（界面）可以直接比较引用或版本号判断是否变化。
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from brename.events import EventKind, Notification, Notifier
from brename.extension import preserve_extension
from brename.models import RenameItem, SourceFile, ValidationResult
from brename.validator import validate_filename

logger = logging.getLogger(__name__)

Snapshot = tuple[RenameItem, ...]


class RenameItemStore:
    """重命名条目存储"""

    def __init__(self, notify: Notifier | None = None):
        """初始化存储

        Args:
            notify: 通知回调（可选）
        """
        self._items: Snapshot = ()
        self._version = 0
        self._notify = notify

    # ============ 快照 ============

    @property
    def items(self) -> Snapshot:
        """当前快照"""
        return self._items

    @property
    def version(self) -> int:
        """每次修改递增"""
        return self._version

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[RenameItem]:
        return iter(self._items)

    def ids(self) -> list[str]:
        return [item.id for item in self._items]

    def get(self, item_id: str) -> RenameItem | None:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def _index_of(self, item_id: str) -> int | None:
        for i, item in enumerate(self._items):
            if item.id == item_id:
                return i
        return None

    def _commit(self, items: Iterable[RenameItem]) -> Snapshot:
        """重新编号 order 并发布新快照"""
        renumbered = []
        for position, item in enumerate(items):
            if item.order != position:
                item = item.model_copy(update={"order": position})
            renumbered.append(item)
        self._items = tuple(renumbered)
        self._version += 1
        return self._items

    def _emit(self, notification: Notification) -> None:
        if self._notify is not None:
            self._notify(notification)

    # ============ 修改操作 ============

    def _build_items(
        self, files: Iterable[SourceFile], existing: Snapshot
    ) -> list[RenameItem]:
        """为新文件分配 id

        id 由位置和原文件名组成，冲突时追加 ~N 后缀保证唯一。
        """
        taken = {item.id for item in existing}
        items: list[RenameItem] = []
        for offset, source in enumerate(files):
            position = len(existing) + offset
            item_id = f"file-{position}-{source.name}"
            suffix = 2
            while item_id in taken:
                item_id = f"file-{position}-{source.name}~{suffix}"
                suffix += 1
            taken.add(item_id)
            items.append(
                RenameItem(
                    id=item_id,
                    source=source,
                    candidate_name=source.name,
                    order=position,
                )
            )
        return items

    def initialize(self, files: Iterable[SourceFile]) -> Snapshot:
        """用新的文件列表整体替换当前集合

        Args:
            files: 原始文件序列

        Returns:
            新快照
        """
        return self._commit(self._build_items(files, existing=()))

    def add(self, files: Iterable[SourceFile]) -> Snapshot:
        """追加文件到集合末尾

        Args:
            files: 原始文件序列

        Returns:
            新快照
        """
        new_items = self._build_items(files, existing=self._items)
        snapshot = self._commit(self._items + tuple(new_items))
        logger.debug(f"追加 {len(new_items)} 个文件，共 {len(snapshot)} 个")
        self._emit(Notification(EventKind.FILES_ADDED, count=len(new_items)))
        return snapshot

    def clear(self, silent: bool = False) -> Snapshot:
        """清空集合

        Args:
            silent: 不发出 files-cleared 通知
        """
        snapshot = self._commit(())
        if not silent:
            self._emit(Notification(EventKind.FILES_CLEARED))
        return snapshot

    def remove(self, item_ids: Iterable[str]) -> Snapshot:
        """移除指定条目"""
        drop = set(item_ids)
        return self._commit(item for item in self._items if item.id not in drop)

    def reorder(self, source_id: str, target_id: str) -> Snapshot:
        """把 source_id 所在的条目移动到 target_id 的位置

        中间的条目依次顺移一位。两个 id 相同或任一不存在时不做任何修改。

        Args:
            source_id: 被拖动的条目
            target_id: 放下位置的条目

        Returns:
            快照（无修改时返回原快照）
        """
        if source_id == target_id:
            return self._items

        old_index = self._index_of(source_id)
        new_index = self._index_of(target_id)
        if old_index is None or new_index is None:
            logger.warning(f"reorder 引用了不存在的条目: {source_id} -> {target_id}")
            return self._items

        items = list(self._items)
        items.insert(new_index, items.pop(old_index))
        return self._commit(items)

    def rename(self, item_id: str, raw_new_name: str) -> RenameItem | None:
        """提交用户输入的新名字（自动保留扩展名）

        Args:
            item_id: 条目 id
            raw_new_name: 用户输入

        Returns:
            更新后的条目；id 不存在时返回 None
        """
        index = self._index_of(item_id)
        if index is None:
            logger.warning(f"rename 引用了不存在的条目: {item_id}")
            return None

        item = self._items[index]
        updated = item.model_copy(
            update={
                "candidate_name": preserve_extension(item.source.name, raw_new_name)
            }
        )
        items = list(self._items)
        items[index] = updated
        self._commit(items)
        return updated

    # ============ 派生查询 ============

    def validate(self, item_id: str) -> ValidationResult | None:
        item = self.get(item_id)
        if item is None:
            logger.warning(f"validate 引用了不存在的条目: {item_id}")
            return None
        return validate_filename(item.candidate_name)

    def validate_all(self) -> dict[str, ValidationResult]:
        """校验所有条目（每次调用都重新计算）"""
        return {item.id: validate_filename(item.candidate_name) for item in self._items}

    def errors(self) -> dict[str, str]:
        """无效条目 id -> 错误信息"""
        return {
            item_id: result.error or "Invalid filename"
            for item_id, result in self.validate_all().items()
            if not result.is_valid
        }

    def is_modified(self, item_id: str) -> bool:
        item = self.get(item_id)
        if item is None:
            logger.warning(f"is_modified 引用了不存在的条目: {item_id}")
            return False
        return item.is_modified

    def modified_items(self) -> list[RenameItem]:
        return [item for item in self._items if item.is_modified]

    def modified_count(self) -> int:
        return len(self.modified_items())

    def valid_count(self) -> int:
        return sum(1 for result in self.validate_all().values() if result.is_valid)

    def has_validation_errors(self) -> bool:
        return self.valid_count() < len(self._items)
