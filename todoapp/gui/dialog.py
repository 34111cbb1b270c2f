from __future__ import annotations

import contextlib
import tkinter as tk
from tkinter import ttk
from typing import Any, Callable

from todoapp.presentation.render import can_submit

ConfirmHandler = Callable[[str, str], None]


class TodoDialog(tk.Toplevel):
    """Modal add/edit dialog. Save stays disabled while the title is blank."""

    def __init__(
        self,
        parent: tk.Misc,
        heading: str,
        on_confirm: ConfirmHandler,
        *,
        initial_title: str = "",
        initial_description: str = "",
    ) -> None:
        super().__init__(parent)
        self.title(heading)
        self.transient(parent)  # type: ignore[arg-type]
        self.resizable(False, False)
        self._on_confirm = on_confirm

        body = ttk.Frame(self, padding=16)
        body.grid(row=0, column=0, sticky="nsew")

        ttk.Label(body, text=heading, font=("TkDefaultFont", 12, "bold")).grid(
            row=0, column=0, columnspan=2, sticky="w", pady=(0, 8)
        )

        ttk.Label(body, text="Title").grid(row=1, column=0, sticky="w")
        self.title_var = tk.StringVar(value=initial_title)
        title_entry = ttk.Entry(body, textvariable=self.title_var, width=40)
        title_entry.grid(row=2, column=0, columnspan=2, sticky="ew", pady=(0, 8))

        ttk.Label(body, text="Description (optional)").grid(row=3, column=0, sticky="w")
        self.description_text = tk.Text(body, width=40, height=5, wrap="word")
        self.description_text.insert("1.0", initial_description)
        self.description_text.grid(row=4, column=0, columnspan=2, sticky="ew", pady=(0, 8))

        buttons = ttk.Frame(body)
        buttons.grid(row=5, column=0, columnspan=2, sticky="e")
        ttk.Button(buttons, text="Cancel", command=self.destroy).pack(side=tk.LEFT, padx=(0, 8))
        self.save_button = ttk.Button(buttons, text="Save", command=self._submit)
        self.save_button.pack(side=tk.LEFT)

        self.title_var.trace_add("write", self._on_title_change)
        self._on_title_change()

        self.bind("<Return>", lambda _e: self._submit())
        self.bind("<Escape>", lambda _e: self.destroy())
        title_entry.focus_set()
        self.after_idle(self._grab)

    def _grab(self) -> None:
        # Fails while the window is not yet mapped; the dialog then stays non-modal.
        with contextlib.suppress(tk.TclError):
            self.grab_set()

    def _on_title_change(self, *_args: Any) -> None:
        state = "normal" if can_submit(self.title_var.get()) else "disabled"
        self.save_button.configure(state=state)

    def _submit(self) -> None:
        title = self.title_var.get()
        if not can_submit(title):
            return
        description = self.description_text.get("1.0", "end-1c")
        self.destroy()
        self._on_confirm(title, description)
