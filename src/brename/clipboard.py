"""剪贴板读写

使用 pyperclip 在命令行和编辑器之间传递重命名计划。
"""

import pyperclip

from brename.errors import BrenameError


class ClipboardUnavailable(BrenameError):
    """系统没有可用的剪贴板后端"""


def copy_text(text: str) -> None:
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        raise ClipboardUnavailable(f"无法写入剪贴板: {e}") from e


def paste_text() -> str:
    try:
        return pyperclip.paste()
    except pyperclip.PyperclipException as e:
        raise ClipboardUnavailable(f"无法读取剪贴板: {e}") from e
