"""批量重命名协调器

管理 确认 -> 执行 流程：只有全部条目有效且至少有一项修改时才允许进入确认，
执行时只把修改过的条目交给外部重命名操作，最后汇总每一项的结果。

状态机::

    IDLE -> CONFIRMING -> EXECUTING -> COMPLETED -> IDLE
                                    -> FAILED    -> CONFIRMING（只重试失败项）
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from enum import Enum

from brename.errors import InvalidTransitionError
from brename.events import EventKind, Notification, Notifier
from brename.models import (
    BatchResult,
    ItemOutcome,
    OutcomeStatus,
    RenameItem,
    RenameOutcome,
    SourceFile,
)
from brename.store import RenameItemStore

logger = logging.getLogger(__name__)

# 外部重命名操作：(原始文件, 目标名) -> 结果
PerformRename = Callable[[SourceFile, str], RenameOutcome]


class CoordinatorState(str, Enum):
    """协调器状态"""

    IDLE = "idle"
    CONFIRMING = "confirming"
    EXECUTING = "executing"
    COMPLETED = "completed"
    FAILED = "failed"


class BatchRenameCoordinator:
    """批量重命名协调器"""

    def __init__(
        self,
        store: RenameItemStore,
        perform_rename: PerformRename,
        notify: Notifier | None = None,
        max_workers: int = 1,
    ):
        """初始化协调器

        Args:
            store: 条目存储
            perform_rename: 外部重命名操作
            notify: 通知回调（可选）
            max_workers: 并发执行数，1 表示顺序执行
        """
        if max_workers < 1:
            raise ValueError(f"max_workers 必须 >= 1: {max_workers}")
        self.store = store
        self.perform_rename = perform_rename
        self.max_workers = max_workers
        self._notify = notify
        self._state = CoordinatorState.IDLE
        self._cancel = threading.Event()
        self.last_result: BatchResult | None = None

    @property
    def state(self) -> CoordinatorState:
        return self._state

    def _transition(self, new_state: CoordinatorState) -> None:
        logger.debug(f"状态: {self._state.value} -> {new_state.value}")
        self._state = new_state

    def _emit(self, notification: Notification) -> None:
        if self._notify is not None:
            self._notify(notification)

    def can_request(self) -> bool:
        """当前是否允许发起重命名"""
        return (
            self._state == CoordinatorState.IDLE
            and not self.store.has_validation_errors()
            and self.store.modified_count() > 0
        )

    def request_rename(self) -> bool:
        """IDLE -> CONFIRMING

        Returns:
            是否进入确认状态（条件不满足时拒绝）
        """
        if not self.can_request():
            logger.debug(
                f"拒绝重命名请求: state={self._state.value}, "
                f"modified={self.store.modified_count()}, "
                f"errors={len(self.store.errors())}"
            )
            return False
        self._transition(CoordinatorState.CONFIRMING)
        return True

    def cancel(self) -> None:
        """取消

        确认阶段：回到 IDLE，不修改存储。
        执行阶段：已开始的条目继续完成，尚未开始的条目不再执行。
        """
        if self._state == CoordinatorState.CONFIRMING:
            self._transition(CoordinatorState.IDLE)
        elif self._state == CoordinatorState.EXECUTING:
            logger.info("收到取消信号，停止启动新的重命名")
            self._cancel.set()

    def confirm(self) -> BatchResult:
        """CONFIRMING -> EXECUTING -> COMPLETED / FAILED

        Returns:
            本批次结果。确认期间名字被改成无效或不再有修改时，
            不执行任何重命名，回到 IDLE 并返回空结果。

        Raises:
            InvalidTransitionError: 当前不在确认状态
        """
        if self._state != CoordinatorState.CONFIRMING:
            raise InvalidTransitionError(self._state.value, "confirm")

        # 确认期间条目可能又被编辑过，条件不再满足时拒绝并回到 IDLE
        if self.store.has_validation_errors() or self.store.modified_count() == 0:
            logger.info("确认时存在无效文件名或没有修改，取消本次重命名")
            self._transition(CoordinatorState.IDLE)
            return BatchResult()

        batch = self.store.modified_items()
        self._cancel.clear()
        self._transition(CoordinatorState.EXECUTING)
        logger.info(f"开始重命名 {len(batch)} 个文件")

        if self.max_workers == 1:
            outcomes = [self._run_one(item) for item in batch]
        else:
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                outcomes = list(pool.map(self._run_one, batch))

        result = BatchResult(outcomes=outcomes)
        self.last_result = result
        self._finish(result)
        return result

    def _run_one(self, item: RenameItem) -> ItemOutcome:
        """执行单个条目"""
        if self._cancel.is_set():
            return ItemOutcome(
                item_id=item.id,
                original_name=item.source.name,
                new_name=item.candidate_name,
                status=OutcomeStatus.SKIPPED,
                reason="cancelled",
            )

        try:
            outcome = self.perform_rename(item.source, item.candidate_name)
        except Exception as e:
            logger.error(f"重命名失败 {item.source.name} -> {item.candidate_name}: {e}")
            outcome = RenameOutcome.failure(str(e) or type(e).__name__)

        if outcome.ok:
            status = OutcomeStatus.SUCCEEDED
        else:
            status = OutcomeStatus.FAILED
            logger.warning(
                f"重命名失败 {item.source.name} -> {item.candidate_name}: {outcome.reason}"
            )

        return ItemOutcome(
            item_id=item.id,
            original_name=item.source.name,
            new_name=item.candidate_name,
            status=status,
            reason=outcome.reason,
        )

    def _finish(self, result: BatchResult) -> None:
        """根据结果更新存储和状态"""
        succeeded_ids = [o.item_id for o in result.succeeded]

        if result.failed:
            # 成功的保持成功，失败项留在列表中等待重试
            self.store.remove(succeeded_ids)
            self._transition(CoordinatorState.FAILED)
            self._emit(
                Notification(
                    EventKind.RENAME_FAILED,
                    count=result.success_count,
                    failures=result.failure_reasons(),
                )
            )
            self._transition(CoordinatorState.CONFIRMING)
        elif result.skipped:
            self.store.remove(succeeded_ids)
            self._emit(Notification(EventKind.RENAME_CANCELLED, count=result.success_count))
            self._transition(CoordinatorState.IDLE)
        else:
            self.store.clear(silent=True)
            self._transition(CoordinatorState.COMPLETED)
            self._emit(Notification(EventKind.RENAME_COMPLETED, count=result.success_count))
            self._transition(CoordinatorState.IDLE)

        logger.info(
            f"重命名结束: {result.success_count} 成功, {result.failed_count} 失败, "
            f"{len(result.skipped)} 跳过"
        )
