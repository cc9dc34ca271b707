"""文件系统重命名

宿主侧的 perform_rename 实现：在原目录内把文件改名为目标名。
核心逻辑只依赖 (SourceFile, 目标名) -> RenameOutcome 这一接口。
"""

import logging
import shutil
import threading
from pathlib import Path
from typing import TYPE_CHECKING

from brename.models import RenameOperation, RenameOutcome, SourceFile

if TYPE_CHECKING:
    from brename.undo import UndoManager

logger = logging.getLogger(__name__)


class FilesystemRenamer:
    """在同一目录内重命名真实文件"""

    def __init__(self, dry_run: bool = False):
        """初始化

        Args:
            dry_run: 只检查，不实际移动文件
        """
        self.dry_run = dry_run
        self.executed: list[RenameOperation] = []
        self._dry_run_targets: set[Path] = set()
        self._lock = threading.Lock()

    def __call__(self, source: SourceFile, candidate_name: str) -> RenameOutcome:
        if source.path is None:
            return RenameOutcome.failure(f"没有文件路径: {source.name}")

        src = Path(source.path)
        tgt = src.with_name(candidate_name)

        # 检查目标和移动在同一把锁内完成
        with self._lock:
            if not src.exists():
                return RenameOutcome.failure(f"源文件不存在: {src}")

            # 大小写不敏感的文件系统上只改大小写时 tgt 指向同一个文件
            taken = tgt in self._dry_run_targets or (tgt.exists() and not _same_file(src, tgt))
            if taken:
                return RenameOutcome.failure(f"目标已存在: {tgt}")

            if self.dry_run:
                self._dry_run_targets.add(tgt)
                logger.info(f"[dry-run] {src.name} -> {tgt.name}")
                return RenameOutcome.success()

            try:
                shutil.move(str(src), str(tgt))
            except OSError as e:
                logger.error(f"重命名失败 {src} -> {tgt}: {e}")
                return RenameOutcome.failure(str(e))

            self.executed.append(RenameOperation(original_path=src, new_path=tgt))

        logger.info(f"重命名: {src.name} -> {tgt.name}")
        return RenameOutcome.success()

    def commit(self, undo_manager: "UndoManager", description: str = "") -> str:
        """把已执行的操作写入撤销历史并清空记录

        Returns:
            批次 ID（没有操作时为空字符串）
        """
        with self._lock:
            operations, self.executed = self.executed, []
        if not operations:
            return ""
        return undo_manager.record(
            operations,
            description=description or f"批量重命名 {len(operations)} 个文件",
        )


def _same_file(a: Path, b: Path) -> bool:
    try:
        return a.samefile(b)
    except OSError:
        return False
