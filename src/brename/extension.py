"""扩展名保留

用户编辑文件名时，如果新名字没有扩展名，则补上原文件的扩展名。
只在提交编辑的那一刻执行一次，不是持续约束。
"""


def split_extension(name: str) -> tuple[str, str | None]:
    """拆分为 (主体, 扩展名)

    扩展名取最后一个 . 之后的部分；没有 . 时扩展名为 None。

    >>> split_extension("archive.tar.gz")
    ('archive.tar', 'gz')
    >>> split_extension("README")
    ('README', None)
    """
    if "." not in name:
        return name, None
    base, ext = name.rsplit(".", 1)
    return base, ext


def preserve_extension(original_name: str, edited_name: str) -> str:
    """把原扩展名合并到用户输入的新名字上

    Args:
        original_name: 原文件名
        edited_name: 用户输入的新名字

    Returns:
        最终的目标文件名。新名字自带任何扩展名时原样返回。
    """
    _, original_ext = split_extension(original_name)
    # "file." 这样的空扩展名不补
    if not original_ext or "." in edited_name:
        return edited_name
    return f"{edited_name}.{original_ext}"


def is_filename_modified(original_name: str, new_name: str) -> bool:
    """区分大小写的精确比较"""
    return original_name != new_name
