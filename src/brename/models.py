"""brename 数据模型

使用 Pydantic 定义不可变的文件/条目模型，dataclass 定义执行结果。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from brename.extension import is_filename_modified


class FileCategory(str, Enum):
    """文件类别（用于界面图标）"""

    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    DOCUMENT = "document"
    OTHER = "other"


_CATEGORY_EXTS: dict[FileCategory, set[str]] = {
    FileCategory.IMAGE: {"jpg", "jpeg", "png", "gif", "svg", "webp"},
    FileCategory.VIDEO: {"mp4", "avi", "mov", "wmv", "flv"},
    FileCategory.AUDIO: {"mp3", "wav", "aac", "flac"},
    FileCategory.DOCUMENT: {"txt", "md", "doc", "docx", "pdf"},
}


class SourceFile(BaseModel):
    """原始文件引用（不可变）"""

    model_config = ConfigDict(frozen=True)

    name: str  # 原始文件名
    size: int = 0  # 字节数
    path: Path | None = None  # 实际文件位置（上传来源可能没有）

    @classmethod
    def from_path(cls, path: Path) -> "SourceFile":
        """从真实文件构建

        Args:
            path: 文件路径

        Returns:
            SourceFile 对象
        """
        path = Path(path).resolve()
        return cls(name=path.name, size=path.stat().st_size, path=path)

    @property
    def size_label(self) -> str:
        """以 KB 显示的大小"""
        return f"{self.size / 1024:.1f} KB"

    @property
    def category(self) -> FileCategory:
        ext = self.name.rsplit(".", 1)[-1].lower() if "." in self.name else ""
        for category, exts in _CATEGORY_EXTS.items():
            if ext in exts:
                return category
        return FileCategory.OTHER


class RenameItem(BaseModel):
    """重命名列表中的一项

    id 创建后不再改变；修改总是通过 model_copy 生成新对象。
    """

    model_config = ConfigDict(frozen=True)

    id: str
    source: SourceFile
    candidate_name: str
    order: int = 0

    @property
    def is_modified(self) -> bool:
        """目标名是否与原始名不同（区分大小写）"""
        return is_filename_modified(self.source.name, self.candidate_name)


class ValidationResult(BaseModel):
    """文件名校验结果"""

    model_config = ConfigDict(frozen=True)

    is_valid: bool
    error: str | None = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(is_valid=True)

    @classmethod
    def fail(cls, error: str) -> "ValidationResult":
        return cls(is_valid=False, error=error)


# ============ 执行结果模型 ============


@dataclass(frozen=True)
class RenameOutcome:
    """单次外部重命名调用的返回值"""

    ok: bool
    reason: str | None = None

    @classmethod
    def success(cls) -> "RenameOutcome":
        return cls(ok=True)

    @classmethod
    def failure(cls, reason: str) -> "RenameOutcome":
        return cls(ok=False, reason=reason)


class OutcomeStatus(str, Enum):
    """条目执行状态"""

    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SKIPPED = "skipped"  # 取消后未开始的条目


@dataclass
class ItemOutcome:
    """单个条目的执行结果"""

    item_id: str
    original_name: str
    new_name: str
    status: OutcomeStatus
    reason: str | None = None


@dataclass
class BatchResult:
    """批量重命名结果"""

    outcomes: list[ItemOutcome] = field(default_factory=list)

    def _with_status(self, status: OutcomeStatus) -> list[ItemOutcome]:
        return [o for o in self.outcomes if o.status == status]

    @property
    def succeeded(self) -> list[ItemOutcome]:
        return self._with_status(OutcomeStatus.SUCCEEDED)

    @property
    def failed(self) -> list[ItemOutcome]:
        return self._with_status(OutcomeStatus.FAILED)

    @property
    def skipped(self) -> list[ItemOutcome]:
        return self._with_status(OutcomeStatus.SKIPPED)

    @property
    def success_count(self) -> int:
        return len(self.succeeded)

    @property
    def failed_count(self) -> int:
        return len(self.failed)

    @property
    def is_complete(self) -> bool:
        """全部条目成功"""
        return all(o.status == OutcomeStatus.SUCCEEDED for o in self.outcomes)

    def failure_reasons(self) -> dict[str, str]:
        """失败条目 id -> 原因"""
        return {o.item_id: o.reason or "unknown error" for o in self.failed}


# ============ 撤销模型 ============


@dataclass
class RenameOperation:
    """已执行的文件系统重命名"""

    original_path: Path
    new_path: Path


@dataclass
class UndoRecord:
    """撤销记录"""

    id: str
    timestamp: datetime
    operations: list[RenameOperation]
    description: str = ""
    undone: bool = False


@dataclass
class UndoResult:
    """撤销操作结果"""

    success_count: int
    failed_count: int
    failed_items: list[tuple[Path, Path, str]]  # (original, new, error_msg)
