"""撤销历史

使用 SQLite 持久化每个批次实际执行过的重命名，撤销时逆序移回原名。
"""

import logging
import shutil
import sqlite3
import uuid
from datetime import datetime
from pathlib import Path

from brename.models import RenameOperation, UndoRecord, UndoResult

logger = logging.getLogger(__name__)

# 默认数据库路径
DEFAULT_DB_PATH = Path.home() / ".brename" / "history.db"

_SCHEMA = """
CREATE TABLE IF NOT EXISTS batches (
    id TEXT PRIMARY KEY,
    created_at TEXT NOT NULL,
    description TEXT,
    undone INTEGER DEFAULT 0
);
CREATE TABLE IF NOT EXISTS entries (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    batch_id TEXT NOT NULL REFERENCES batches(id),
    seq INTEGER NOT NULL,
    source_path TEXT NOT NULL,
    target_path TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_entries_batch ON entries(batch_id);
"""


class UndoManager:
    """撤销管理器"""

    def __init__(self, db_path: Path | None = None):
        """打开（必要时创建）历史数据库

        Args:
            db_path: 数据库文件路径，默认为 ~/.brename/history.db
        """
        self.db_path = Path(db_path) if db_path else DEFAULT_DB_PATH
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(str(self.db_path))
        self.conn.executescript(_SCHEMA)
        self.conn.commit()

    def record(self, operations: list[RenameOperation], description: str = "") -> str:
        """记录一批已执行的重命名

        Returns:
            批次 ID（没有操作时为空字符串）
        """
        if not operations:
            return ""

        batch_id = uuid.uuid4().hex[:8]
        with self.conn:
            self.conn.execute(
                "INSERT INTO batches (id, created_at, description) VALUES (?, ?, ?)",
                (batch_id, datetime.now().isoformat(), description),
            )
            self.conn.executemany(
                "INSERT INTO entries (batch_id, seq, source_path, target_path) "
                "VALUES (?, ?, ?, ?)",
                [
                    (batch_id, seq, str(op.original_path), str(op.new_path))
                    for seq, op in enumerate(operations)
                ],
            )
        logger.info(f"记录撤销批次 {batch_id}: {len(operations)} 个操作")
        return batch_id

    def _operations(self, batch_id: str, reverse: bool = False) -> list[RenameOperation]:
        order = "DESC" if reverse else "ASC"
        rows = self.conn.execute(
            f"SELECT source_path, target_path FROM entries "
            f"WHERE batch_id = ? ORDER BY seq {order}",
            (batch_id,),
        ).fetchall()
        return [RenameOperation(Path(src), Path(tgt)) for src, tgt in rows]

    def undo(self, batch_id: str) -> UndoResult:
        """撤销指定批次

        Args:
            batch_id: 批次 ID

        Returns:
            撤销结果
        """
        row = self.conn.execute(
            "SELECT undone FROM batches WHERE id = ?", (batch_id,)
        ).fetchone()

        if row is None:
            return UndoResult(0, 0, [(Path(), Path(), f"批次不存在: {batch_id}")])
        if row[0]:
            return UndoResult(0, 0, [(Path(), Path(), f"批次已撤销: {batch_id}")])

        success_count = 0
        failed_items: list[tuple[Path, Path, str]] = []

        for op in self._operations(batch_id, reverse=True):
            if not op.new_path.exists():
                failed_items.append(
                    (op.original_path, op.new_path, f"文件不存在: {op.new_path}")
                )
                continue
            if op.original_path.exists():
                failed_items.append(
                    (op.original_path, op.new_path, f"原路径已被占用: {op.original_path}")
                )
                continue
            try:
                shutil.move(str(op.new_path), str(op.original_path))
            except OSError as e:
                logger.error(f"撤销失败 {op.new_path} -> {op.original_path}: {e}")
                failed_items.append((op.original_path, op.new_path, str(e)))
                continue
            success_count += 1
            logger.info(f"撤销: {op.new_path.name} -> {op.original_path.name}")

        with self.conn:
            self.conn.execute("UPDATE batches SET undone = 1 WHERE id = ?", (batch_id,))

        return UndoResult(
            success_count=success_count,
            failed_count=len(failed_items),
            failed_items=failed_items,
        )

    def undo_latest(self) -> UndoResult:
        """撤销最近一个未撤销的批次"""
        row = self.conn.execute(
            "SELECT id FROM batches WHERE undone = 0 "
            "ORDER BY created_at DESC, rowid DESC LIMIT 1"
        ).fetchone()
        if row is None:
            return UndoResult(0, 0, [(Path(), Path(), "没有可撤销的操作")])
        return self.undo(row[0])

    def history(self, limit: int = 10) -> list[UndoRecord]:
        """最近的批次，新的在前"""
        rows = self.conn.execute(
            "SELECT id, created_at, description, undone FROM batches "
            "ORDER BY created_at DESC, rowid DESC LIMIT ?",
            (limit,),
        ).fetchall()
        return [
            UndoRecord(
                id=batch_id,
                timestamp=datetime.fromisoformat(created_at),
                operations=self._operations(batch_id),
                description=description or "",
                undone=bool(undone),
            )
            for batch_id, created_at, description, undone in rows
        ]

    def prune(self, keep_recent: int = 0) -> int:
        """删除旧批次

        Args:
            keep_recent: 保留最近的批次数量

        Returns:
            删除的批次数量
        """
        keep_ids = [
            row[0]
            for row in self.conn.execute(
                "SELECT id FROM batches ORDER BY created_at DESC, rowid DESC LIMIT ?",
                (keep_recent,),
            )
        ]
        placeholders = ",".join("?" * len(keep_ids))
        where = f"WHERE id NOT IN ({placeholders})" if keep_ids else ""
        entry_where = f"WHERE batch_id NOT IN ({placeholders})" if keep_ids else ""
        with self.conn:
            self.conn.execute(f"DELETE FROM entries {entry_where}", keep_ids)
            deleted = self.conn.execute(f"DELETE FROM batches {where}", keep_ids).rowcount
        return deleted

    def close(self) -> None:
        self.conn.close()

    def __enter__(self) -> "UndoManager":
        return self

    def __exit__(self, *args) -> None:
        self.close()
