"""brename Streamlit 界面

添加文件、编辑目标名、调整顺序并确认批量重命名。
"""

from pathlib import Path

import streamlit as st

from brename.coordinator import BatchRenameCoordinator, CoordinatorState
from brename.events import Notification
from brename.filesystem import FilesystemRenamer
from brename.models import FileCategory, RenameItem
from brename.plan import plan_from_items
from brename.scanner import FileCollector, parse_extensions
from brename.store import RenameItemStore
from brename.undo import UndoManager

CATEGORY_ICONS = {
    FileCategory.IMAGE: "🖼️",
    FileCategory.VIDEO: "🎞️",
    FileCategory.AUDIO: "🎵",
    FileCategory.DOCUMENT: "📄",
    FileCategory.OTHER: "📁",
}

# 页面配置
st.set_page_config(
    page_title="brename - 文件批量重命名",
    page_icon="📁",
    layout="wide",
)


def queue_notification(notification: Notification) -> None:
    """通知先放进队列，下次渲染时显示为 toast"""
    st.session_state.notifications.append(notification)


# 初始化 session state
if "store" not in st.session_state:
    st.session_state.notifications = []
    st.session_state.renamer = FilesystemRenamer()
    st.session_state.store = RenameItemStore(notify=queue_notification)
    st.session_state.coordinator = BatchRenameCoordinator(
        st.session_state.store,
        st.session_state.renamer,
        notify=queue_notification,
    )


def input_key(item_id: str) -> str:
    return f"name_{item_id}"


def commit_name(item_id: str) -> None:
    """编辑框提交（回车或失焦）时写回存储"""
    store: RenameItemStore = st.session_state.store
    updated = store.rename(item_id, st.session_state[input_key(item_id)])
    if updated is not None:
        # 扩展名可能被补上，同步回编辑框
        st.session_state[input_key(item_id)] = updated.candidate_name


def render_item(item: RenameItem, neighbours: tuple[str | None, str | None], error: str | None):
    store: RenameItemStore = st.session_state.store
    above, below = neighbours

    col_order, col_src, col_tgt, col_status, col_move = st.columns([0.5, 3, 3, 2, 1])

    with col_order:
        st.text(str(item.order + 1))

    with col_src:
        st.text(f"{CATEGORY_ICONS[item.source.category]} {item.source.name}")
        st.caption(item.source.size_label)

    with col_tgt:
        key = input_key(item.id)
        # 存储中的名字为准，id 可能在清空后被复用
        st.session_state[key] = item.candidate_name
        st.text_input(
            "目标名",
            key=key,
            label_visibility="collapsed",
            on_change=commit_name,
            args=(item.id,),
        )

    with col_status:
        if error:
            st.markdown(f"🔴 {error}")
        elif item.is_modified:
            st.markdown("🟢 已修改")
        else:
            st.markdown("⚪ 未修改")

    with col_move:
        up, down = st.columns(2)
        if up.button("↑", key=f"up_{item.id}", disabled=above is None):
            store.reorder(item.id, above)
            st.rerun()
        if down.button("↓", key=f"down_{item.id}", disabled=below is None):
            store.reorder(item.id, below)
            st.rerun()


def render_sidebar() -> None:
    store: RenameItemStore = st.session_state.store

    with st.sidebar:
        st.header("操作")

        st.subheader("1. 添加文件")
        paths_str = st.text_area(
            "文件或目录路径（每行一个）",
            value=str(Path.cwd()),
            height=100,
        )
        include_hidden = st.checkbox("包含隐藏文件")
        exclude_str = st.text_input("排除扩展名", help="逗号分隔，如 .json,.txt")

        if st.button("➕ 添加", use_container_width=True):
            try:
                collector = FileCollector(
                    include_hidden=include_hidden,
                    exclude_exts=parse_extensions(exclude_str),
                )
                paths = [Path(p.strip()) for p in paths_str.splitlines() if p.strip()]
                store.add(collector.collect(paths))
            except (FileNotFoundError, OSError) as e:
                st.error(f"添加失败: {e}")
            else:
                st.rerun()

        if len(store) and st.button("🗑️ 清空列表", use_container_width=True):
            store.clear()
            st.rerun()

        if len(store):
            st.download_button(
                "💾 导出计划",
                data=plan_from_items(store.items).to_json(),
                file_name="rename_plan.json",
                mime="application/json",
                use_container_width=True,
                help="可用 brename apply -i 执行",
            )

        st.divider()

        st.subheader("2. 撤销")
        if st.button("↩️ 撤销最近操作", use_container_width=True):
            with UndoManager() as undo_manager:
                result = undo_manager.undo_latest()
            if result.success_count > 0:
                st.success(f"撤销完成: {result.success_count} 成功")
            else:
                st.warning("没有可撤销的操作")


def render_confirm(coordinator: BatchRenameCoordinator) -> None:
    store: RenameItemStore = st.session_state.store

    with st.container(border=True):
        st.subheader("确认重命名")
        st.write(f"共 {len(store)} 个文件，其中 {store.modified_count()} 个将被重命名。")

        if coordinator.last_result and coordinator.last_result.failed:
            for outcome in coordinator.last_result.failed:
                st.warning(f"• {outcome.original_name} -> {outcome.new_name}: {outcome.reason}")

        col_ok, col_cancel = st.columns(2)
        if col_ok.button("✅ 确认", type="primary", use_container_width=True):
            with st.spinner("正在重命名..."):
                result = coordinator.confirm()
            if not result.outcomes:
                st.session_state.confirm_refused = True
            elif st.session_state.renamer.executed:
                with UndoManager() as undo_manager:
                    st.session_state.renamer.commit(undo_manager)
            st.rerun()
        if col_cancel.button("取消", use_container_width=True):
            coordinator.cancel()
            st.rerun()


def main():
    st.title("📁 brename - 文件批量重命名")

    store: RenameItemStore = st.session_state.store
    coordinator: BatchRenameCoordinator = st.session_state.coordinator

    for notification in st.session_state.notifications:
        icon = "⚠️" if notification.is_error else "✅"
        st.toast(f"**{notification.title}** {notification.description}", icon=icon)
    st.session_state.notifications = []

    if st.session_state.pop("confirm_refused", False):
        st.warning("存在无效文件名或没有需要重命名的文件，已取消本次重命名")

    render_sidebar()

    if not len(store):
        st.info("请先在侧边栏添加文件")
        return

    errors = store.errors()

    col_stats, col_action = st.columns([3, 1])
    with col_stats:
        st.markdown(
            f"**{len(store)}** files • **{store.modified_count()}** modified • "
            f"**{store.valid_count()}** valid"
        )
        st.caption("用 ↑ ↓ 调整顺序；回车或离开输入框提交新名字，扩展名会自动保留")
    with col_action:
        label = f"▶️ 重命名 ({store.modified_count()})"
        if st.button(
            label,
            type="primary",
            use_container_width=True,
            disabled=not coordinator.can_request(),
        ):
            coordinator.request_rename()
            st.rerun()

    if coordinator.state == CoordinatorState.CONFIRMING:
        render_confirm(coordinator)

    st.divider()

    ids = store.ids()
    for index, item in enumerate(store.items):
        above = ids[index - 1] if index > 0 else None
        below = ids[index + 1] if index < len(ids) - 1 else None
        render_item(item, (above, below), errors.get(item.id))


main()
