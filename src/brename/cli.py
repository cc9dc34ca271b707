"""brename CLI

使用 typer 实现命令行界面。
"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from brename.clipboard import copy_text, paste_text
from brename.coordinator import BatchRenameCoordinator
from brename.errors import BrenameError
from brename.events import Notification
from brename.filesystem import FilesystemRenamer
from brename.plan import RenamePlan, load_plan_into, plan_from_files
from brename.scanner import FileCollector, parse_extensions
from brename.store import RenameItemStore
from brename.undo import UndoManager
from brename.validator import validate_filename

app = typer.Typer(
    name="brename",
    help="文件批量重命名工具 - 编辑、校验、重命名和撤销",
    no_args_is_help=True,
)
console = Console()


def print_notification(notification: Notification) -> None:
    """把核心通知渲染为一行提示"""
    style = "red" if notification.is_error else "cyan"
    console.print(f"[{style}]{notification.title}:[/{style}] {notification.description}")


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="输出调试日志"),
    ] = False,
) -> None:
    """文件批量重命名工具"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.command()
def check(
    names: Annotated[
        list[str],
        typer.Argument(help="要校验的文件名"),
    ],
) -> None:
    """校验文件名是否合法"""
    table = Table(title="文件名校验")
    table.add_column("文件名")
    table.add_column("结果")

    invalid = 0
    for name in names:
        result = validate_filename(name)
        if result.is_valid:
            table.add_row(name, "[green]✓ 有效[/green]")
        else:
            invalid += 1
            table.add_row(name, f"[red]✗ {result.error}[/red]")

    console.print(table)
    if invalid:
        raise typer.Exit(1)


@app.command()
def export(
    paths: Annotated[
        list[Path],
        typer.Argument(help="文件或目录（目录只取直接子文件）"),
    ],
    output: Annotated[
        Optional[Path],
        typer.Option("-o", "--output", help="输出到文件而非剪贴板"),
    ] = None,
    include_hidden: Annotated[
        bool,
        typer.Option("--hidden", help="包含隐藏文件"),
    ] = False,
    exclude: Annotated[
        Optional[str],
        typer.Option("-e", "--exclude", help="排除的扩展名，逗号分隔（如 .json,.txt）"),
    ] = None,
) -> None:
    """生成待编辑的重命名计划 JSON"""
    try:
        collector = FileCollector(
            include_hidden=include_hidden,
            exclude_exts=parse_extensions(exclude),
        )
        files = collector.collect(paths)
        json_str = plan_from_files(files).to_json()

        if output:
            output.write_text(json_str, encoding="utf-8")
            console.print(f"[green]✓[/green] 计划已保存到: {output}")
        else:
            copy_text(json_str)
            console.print("[green]✓[/green] 计划已复制到剪贴板")

        console.print(f"[green]总计: {len(files)} 个文件[/green]")

    except (FileNotFoundError, BrenameError) as e:
        console.print(f"[red]错误:[/red] {e}")
        raise typer.Exit(1)


def _render_items(store: RenameItemStore) -> Table:
    errors = store.errors()
    table = Table(title="重命名列表")
    table.add_column("#", justify="right")
    table.add_column("原文件名")
    table.add_column("新文件名")
    table.add_column("大小", justify="right")
    table.add_column("状态")

    for item in store.items:
        if item.id in errors:
            status = f"[red]✗ {errors[item.id]}[/red]"
        elif item.is_modified:
            status = "[green]● 修改[/green]"
        else:
            status = "[dim]○ 不变[/dim]"
        table.add_row(
            str(item.order + 1),
            item.source.name,
            item.candidate_name,
            item.source.size_label,
            status,
        )
    return table


@app.command()
def apply(
    input_file: Annotated[
        Optional[Path],
        typer.Option("-i", "--input", help="从文件读取计划而非剪贴板"),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="只模拟执行，不实际重命名"),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("-y", "--yes", help="跳过确认"),
    ] = False,
    workers: Annotated[
        int,
        typer.Option("-w", "--workers", min=1, help="并发重命名数"),
    ] = 1,
    db_path: Annotated[
        Optional[Path],
        typer.Option("--db", help="撤销历史数据库路径"),
    ] = None,
) -> None:
    """按计划执行批量重命名"""
    try:
        if input_file:
            json_str = input_file.read_text(encoding="utf-8")
            console.print(f"从文件读取: {input_file}")
        else:
            json_str = paste_text()
            console.print("从剪贴板读取")

        plan = RenamePlan.from_json(json_str)
        store = RenameItemStore()
        load_plan_into(store, plan)
    except (FileNotFoundError, BrenameError) as e:
        console.print(f"[red]错误:[/red] {e}")
        raise typer.Exit(1)

    console.print(_render_items(store))
    console.print(
        f"  {len(store)} 个文件, {store.modified_count()} 个修改, "
        f"{store.valid_count()} 个有效"
    )

    renamer = FilesystemRenamer(dry_run=dry_run)
    coordinator = BatchRenameCoordinator(
        store, renamer, notify=print_notification, max_workers=workers
    )

    if store.has_validation_errors():
        console.print("[red]存在无效文件名，已取消[/red]")
        raise typer.Exit(1)

    if not coordinator.request_rename():
        console.print("[yellow]没有需要重命名的文件[/yellow]")
        return

    if dry_run:
        console.print("[yellow]模拟执行模式[/yellow]")

    if not yes and not typer.confirm(f"重命名 {store.modified_count()} 个文件?"):
        coordinator.cancel()
        console.print("已取消")
        return

    result = coordinator.confirm()

    console.print(f"\n[green]成功:[/green] {result.success_count}")
    console.print(f"[red]失败:[/red] {result.failed_count}")
    for outcome in result.failed:
        console.print(f"  • {outcome.original_name} -> {outcome.new_name}: {outcome.reason}")

    if not dry_run:
        with UndoManager(db_path) as undo_manager:
            batch_id = renamer.commit(undo_manager)
        if batch_id:
            console.print(f"\n撤销 ID: [cyan]{batch_id}[/cyan]")

    if result.failed:
        raise typer.Exit(1)


@app.command()
def undo(
    batch_id: Annotated[
        Optional[str],
        typer.Argument(help="要撤销的批次 ID（不指定则撤销最近一次）"),
    ] = None,
    list_history: Annotated[
        bool,
        typer.Option("-l", "--list", help="显示操作历史"),
    ] = False,
    db_path: Annotated[
        Optional[Path],
        typer.Option("--db", help="撤销历史数据库路径"),
    ] = None,
) -> None:
    """撤销重命名操作"""
    with UndoManager(db_path) as undo_manager:
        if list_history:
            history = undo_manager.history(limit=10)

            if not history:
                console.print("没有操作历史")
                return

            table = Table(title="操作历史")
            table.add_column("ID", style="cyan")
            table.add_column("时间")
            table.add_column("操作数")
            table.add_column("描述")
            table.add_column("已撤销")

            for record in history:
                table.add_row(
                    record.id,
                    record.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
                    str(len(record.operations)),
                    record.description or "-",
                    "是" if record.undone else "",
                )

            console.print(table)
            return

        if batch_id:
            result = undo_manager.undo(batch_id)
        else:
            result = undo_manager.undo_latest()

    console.print(f"[green]成功撤销:[/green] {result.success_count}")
    console.print(f"[red]失败:[/red] {result.failed_count}")

    if result.failed_items:
        console.print("\n[yellow]失败详情:[/yellow]")
        for _, _, msg in result.failed_items[:5]:
            console.print(f"  • {msg}")


@app.command()
def ui() -> None:
    """启动 Streamlit 界面"""
    import subprocess
    import sys

    console.print("启动 Streamlit 界面...")
    subprocess.run(
        [sys.executable, "-m", "streamlit", "run", str(Path(__file__).parent / "app.py")],
        check=True,
    )


if __name__ == "__main__":
    app()
