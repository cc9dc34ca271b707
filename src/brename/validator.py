"""文件名校验器

按顺序检查文件名是否可以安全地用于常见文件系统，第一个失败的规则生效。
"""

import re

from brename.models import ValidationResult

# 非法字符
ILLEGAL_CHARS = '<>:"/\\|?*'

# Windows 保留设备名
RESERVED_NAMES = frozenset(
    ["CON", "PRN", "AUX", "NUL"]
    + [f"COM{i}" for i in range(1, 10)]
    + [f"LPT{i}" for i in range(1, 10)]
)

# 多数文件系统的文件名长度上限
MAX_FILENAME_LENGTH = 255

MSG_EMPTY = "Filename cannot be empty"
MSG_ILLEGAL_CHARS = 'Contains illegal characters: < > : " / \\ | ? *'
MSG_RESERVED = "Reserved system name"
MSG_TOO_LONG = f"Filename too long (max {MAX_FILENAME_LENGTH} characters)"
MSG_INVALID = "Invalid filename"
MSG_TRAILING = "Cannot end with dot or space"

_ILLEGAL_RE = re.compile(f"[{re.escape(ILLEGAL_CHARS)}]")


def is_reserved_name(name: str) -> bool:
    """第一个 . 之前的部分是否为保留设备名（不区分大小写）"""
    return name.split(".", 1)[0].upper() in RESERVED_NAMES


def validate_filename(name: str) -> ValidationResult:
    """校验单个文件名

    Args:
        name: 候选文件名

    Returns:
        校验结果
    """
    if not name.strip():
        return ValidationResult.fail(MSG_EMPTY)

    if _ILLEGAL_RE.search(name):
        return ValidationResult.fail(MSG_ILLEGAL_CHARS)

    if is_reserved_name(name):
        return ValidationResult.fail(MSG_RESERVED)

    if len(name) > MAX_FILENAME_LENGTH:
        return ValidationResult.fail(MSG_TOO_LONG)

    if name == ".":
        return ValidationResult.fail(MSG_INVALID)

    if name.endswith((".", " ")):
        return ValidationResult.fail(MSG_TRAILING)

    return ValidationResult.ok()
