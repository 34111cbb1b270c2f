from __future__ import annotations

import queue
import tkinter as tk
from tkinter import ttk
from typing import Any, Callable, Optional

from todoapp.config.settings import Settings
from todoapp.container import AppContainer
from todoapp.domain.entities import Todo
from todoapp.logging_config import get_logger
from todoapp.presentation.render import (
    EMPTY_HINT,
    EMPTY_TITLE,
    ScreenMode,
    error_banner_text,
    reconcile_rows,
    row_id,
    row_values,
    screen_mode,
)
from todoapp.presentation.state import (
    AddTodo,
    DeleteTodo,
    DismissError,
    TodoUiState,
    UpdateTodo,
)
from todoapp.presentation.view_model import TodoViewModel

from .dialog import TodoDialog

logger = get_logger()

POLL_MS = 50
COLUMNS = ("done", "title", "description")
HEADINGS = {"done": "Done", "title": "Title", "description": "Description"}


class TodoScreen:
    """Main window content bound to one :class:`TodoViewModel`.

    View model listeners fire on worker threads; they only enqueue a wake-up
    and the Tk thread re-renders from ``view_model.state``.
    """

    def __init__(self, root: tk.Tk, view_model: TodoViewModel) -> None:
        self.root = root
        self.vm = view_model
        self._wakeups: "queue.Queue[TodoUiState]" = queue.Queue()
        self._todos_by_row: dict[str, Todo] = {}
        self._after_id: Optional[str] = None

        root.columnconfigure(0, weight=1)
        root.rowconfigure(1, weight=1)

        # Error banner (hidden until state.error is set)
        self.banner = ttk.Frame(root, padding=(8, 4))
        self.banner_var = tk.StringVar()
        ttk.Label(self.banner, textvariable=self.banner_var, foreground="#b00020").pack(
            side=tk.LEFT, fill=tk.X, expand=True
        )
        ttk.Button(
            self.banner, text="Dismiss", command=lambda: self.vm.handle_event(DismissError())
        ).pack(side=tk.RIGHT)

        # Content area: loading / empty / list share one grid cell
        self.content = ttk.Frame(root)
        self.content.grid(row=1, column=0, sticky="nsew")
        self.content.columnconfigure(0, weight=1)
        self.content.rowconfigure(0, weight=1)

        self.loading = ttk.Frame(self.content)
        ttk.Label(self.loading, text="Loading...").pack(expand=True)
        bar = ttk.Progressbar(self.loading, mode="indeterminate", length=160)
        bar.pack(pady=8)
        bar.start(10)

        self.empty = ttk.Frame(self.content)
        ttk.Label(self.empty, text=EMPTY_TITLE, font=("TkDefaultFont", 12, "bold")).pack(
            pady=(40, 4)
        )
        ttk.Label(self.empty, text=EMPTY_HINT).pack()

        self.list_frame = ttk.Frame(self.content)
        self.list_frame.columnconfigure(0, weight=1)
        self.list_frame.rowconfigure(0, weight=1)
        self.tree = ttk.Treeview(self.list_frame, columns=COLUMNS, show="headings")
        for col in COLUMNS:
            self.tree.heading(col, text=HEADINGS[col])
        self.tree.column("done", width=60, anchor="center", stretch=False)
        self.tree.column("title", width=220)
        self.tree.column("description", width=420)
        scroll = ttk.Scrollbar(self.list_frame, orient="vertical", command=self.tree.yview)
        self.tree.configure(yscrollcommand=scroll.set)
        self.tree.grid(row=0, column=0, sticky="nsew")
        scroll.grid(row=0, column=1, sticky="ns")
        self.tree.bind("<Double-1>", lambda _e: self._on_edit())
        self.tree.bind("<space>", lambda _e: self._on_toggle())
        self.tree.bind("<Delete>", lambda _e: self._on_delete())

        buttons = ttk.Frame(root, padding=6)
        buttons.grid(row=2, column=0, sticky="ew")
        ttk.Button(buttons, text="Add", command=self._on_add).pack(side=tk.LEFT)
        ttk.Button(buttons, text="Edit", command=self._on_edit).pack(side=tk.LEFT, padx=4)
        ttk.Button(buttons, text="Toggle done", command=self._on_toggle).pack(side=tk.LEFT)
        ttk.Button(buttons, text="Delete", command=self._on_delete).pack(side=tk.LEFT, padx=4)

        self._remove_listener = view_model.add_listener(self._wakeups.put)
        self.render(view_model.state)
        self._after_id = root.after(POLL_MS, self._poll)

    # -------------------- rendering --------------------
    def _poll(self) -> None:
        changed = False
        try:
            while True:
                self._wakeups.get_nowait()
                changed = True
        except queue.Empty:
            pass
        if changed:
            self.render(self.vm.state)
        self._after_id = self.root.after(POLL_MS, self._poll)

    def render(self, state: TodoUiState) -> None:
        banner = error_banner_text(state)
        if banner is None:
            self.banner.grid_remove()
        else:
            self.banner_var.set(banner)
            self.banner.grid(row=0, column=0, sticky="ew")

        mode = screen_mode(state)
        for frame, frame_mode in (
            (self.loading, ScreenMode.LOADING),
            (self.empty, ScreenMode.EMPTY),
            (self.list_frame, ScreenMode.LIST),
        ):
            if frame_mode == mode:
                frame.grid(row=0, column=0, sticky="nsew")
            else:
                frame.grid_remove()

        if mode == ScreenMode.LOADING:
            return
        self._render_rows(state)

    def _render_rows(self, state: TodoUiState) -> None:
        stale = reconcile_rows(self.tree.get_children(), state.todos)
        if stale:
            self.tree.delete(*stale)
        self._todos_by_row = {}
        for index, todo in enumerate(state.todos):
            rid = row_id(todo)
            self._todos_by_row[rid] = todo
            if self.tree.exists(rid):
                self.tree.item(rid, values=row_values(todo))
                self.tree.move(rid, "", index)
            else:
                self.tree.insert("", index, iid=rid, values=row_values(todo))

    # -------------------- intents --------------------
    def _selected(self) -> Optional[Todo]:
        rid = self.tree.focus()
        if not rid:
            return None
        return self._todos_by_row.get(rid)

    def _on_add(self) -> None:
        TodoDialog(
            self.root,
            "Add New Todo",
            lambda title, description: self.vm.handle_event(AddTodo(title, description)),
        )

    def _on_edit(self) -> None:
        todo = self._selected()
        if todo is None:
            return

        def _confirm(title: str, description: str) -> None:
            self.vm.handle_event(UpdateTodo(todo.edited(title.strip(), description.strip())))

        TodoDialog(
            self.root,
            "Edit Todo",
            _confirm,
            initial_title=todo.title,
            initial_description=todo.description,
        )

    def _on_toggle(self) -> None:
        todo = self._selected()
        if todo is not None:
            self.vm.handle_event(UpdateTodo(todo.toggled()))

    def _on_delete(self) -> None:
        todo = self._selected()
        if todo is not None:
            self.vm.handle_event(DeleteTodo(todo.id))

    def destroy(self) -> None:
        if self._after_id is not None:
            self.root.after_cancel(self._after_id)
            self._after_id = None
        self._remove_listener()


def run_app(
    settings: Settings,
    *,
    container_factory: Callable[[Settings], AppContainer] = AppContainer,
) -> None:
    container = container_factory(settings)
    try:
        view_model = container.view_model()
        root = tk.Tk()
        root.title(settings.window_title)
        root.geometry("760x480")
        screen = TodoScreen(root, view_model)

        def _on_close(*_args: Any) -> None:
            screen.destroy()
            view_model.close()
            root.destroy()

        root.protocol("WM_DELETE_WINDOW", _on_close)
        logger.info("Todo window opened", extra={"db_path": str(settings.db_path)})
        root.mainloop()
    finally:
        container.close()


if __name__ == "__main__":  # pragma: no cover
    from todoapp.config.settings import settings as _settings

    run_app(_settings)
