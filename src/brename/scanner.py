"""文件收集器

把命令行参数或界面输入的路径展开为 SourceFile 列表。
目录只取直接子文件，不递归。
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from brename.models import SourceFile

logger = logging.getLogger(__name__)


def parse_extensions(value: str | None) -> set[str]:
    """解析逗号分隔的扩展名列表，统一成 .ext 小写形式

    >>> sorted(parse_extensions("json, .TXT"))
    ['.json', '.txt']
    """
    if not value:
        return set()
    exts = set()
    for ext in value.split(","):
        ext = ext.strip().lower()
        if not ext:
            continue
        exts.add(ext if ext.startswith(".") else f".{ext}")
    return exts


class FileCollector:
    """文件收集器"""

    def __init__(
        self,
        include_hidden: bool = False,
        exclude_exts: set[str] | None = None,
    ):
        """初始化收集器

        Args:
            include_hidden: 是否包含隐藏文件（以 . 开头）
            exclude_exts: 要排除的扩展名集合（如 {".json"}），只作用于目录展开
        """
        self.include_hidden = include_hidden
        self.exclude_exts = exclude_exts if exclude_exts is not None else set()

    def collect(self, paths: Iterable[Path]) -> list[SourceFile]:
        """收集文件

        Args:
            paths: 文件或目录路径

        Returns:
            SourceFile 列表，按参数顺序；目录内按文件名排序

        Raises:
            FileNotFoundError: 路径不存在
        """
        files: list[SourceFile] = []
        for path in paths:
            path = Path(path).expanduser().resolve()
            if not path.exists():
                raise FileNotFoundError(f"路径不存在: {path}")

            if path.is_dir():
                files.extend(self._collect_dir(path))
            else:
                files.append(SourceFile.from_path(path))
        return files

    def _collect_dir(self, dir_path: Path) -> list[SourceFile]:
        files: list[SourceFile] = []
        try:
            entries = sorted(dir_path.iterdir(), key=lambda p: p.name)
        except PermissionError:
            logger.warning(f"权限不足，跳过目录: {dir_path}")
            return files

        for entry in entries:
            if not self.include_hidden and entry.name.startswith("."):
                continue
            if entry.suffix.lower() in self.exclude_exts:
                continue
            try:
                if entry.is_file():
                    files.append(SourceFile.from_path(entry))
            except OSError as e:
                logger.warning(f"无法访问 {entry}: {e}")

        return files
