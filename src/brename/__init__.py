"""brename - 文件批量重命名工具

编辑目标文件名、校验、保留扩展名、排序并批量执行重命名。
"""

__version__ = "0.1.0"

from brename.coordinator import BatchRenameCoordinator, CoordinatorState
from brename.events import EventKind, Notification
from brename.extension import is_filename_modified, preserve_extension
from brename.models import (
    BatchResult,
    RenameItem,
    RenameOutcome,
    SourceFile,
    ValidationResult,
)
from brename.store import RenameItemStore
from brename.validator import (
    ILLEGAL_CHARS,
    MAX_FILENAME_LENGTH,
    RESERVED_NAMES,
    validate_filename,
)

__all__ = [
    "BatchRenameCoordinator",
    "CoordinatorState",
    "EventKind",
    "Notification",
    "is_filename_modified",
    "preserve_extension",
    "BatchResult",
    "RenameItem",
    "RenameOutcome",
    "SourceFile",
    "ValidationResult",
    "RenameItemStore",
    "ILLEGAL_CHARS",
    "MAX_FILENAME_LENGTH",
    "RESERVED_NAMES",
    "validate_filename",
]
