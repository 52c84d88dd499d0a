"""
A small markdown editor that hosts the Custom Bullets plugin.

The left pane holds the raw markdown, the right pane shows every line
after the registered line processors.
"""
import logging
import re
from pathlib import Path
from typing import Callable

import tkinter as tk
from tkinter import ttk, filedialog, messagebox

try:
    from tkinterdnd2 import DND_FILES, TkinterDnD
except ImportError:
    TkinterDnD = None

from .core.plugin import CustomBulletsPlugin, EditorHost, PluginHandle
from .core.settings_panel import PANEL_TITLE, SettingField, build_setting_fields
from .core.settings_store import SettingsStore
from .core.html_export import build_html, write_html
from .core.rewriter import iter_lines
from .resources.icons import load_photo_image, render_app_icon, render_status_icon
from .utils.logger import setup_main_logger

log = logging.getLogger("custom_bullets")

MARKDOWN_FILETYPES = [("Markdown Files", "*.md *.markdown"), ("Text Files", "*.txt"), ("All Files", "*.*")]
TOGGLE_SHORTCUT = "<Control-B>"  # Ctrl+Shift+B

SAMPLE_TEXT = """\
# Custom Bullets

- First level
  - Second level (2 spaces)
    - Third level (4 spaces)
\t\t\t- Fourth level (3 tabs)
\t\t\t\t- Fifth level and deeper
* Asterisk items work too
+ And plus items

1. Ordered lists are left alone
---
"""


class SettingsDialog(tk.Toplevel):
    """
    Settings panel. Draws one row per `SettingField`.
    Every change is written through immediately (no OK/Cancel).
    """
    def __init__(self, parent, fields: list[SettingField]):
        super().__init__(parent)
        self.withdraw()  # Start hidden
        self.transient(parent)
        self.title(PANEL_TITLE)
        self.fields = fields
        self._vars: dict[str, tk.Variable] = {}

        body = ttk.Frame(self, padding="10")
        body.pack(padx=5, pady=5, fill=tk.BOTH, expand=True)
        self._create_widgets(body)

        # Center without flash
        self._center_window(parent)
        self.deiconify()

        self.grab_set()
        self.protocol("WM_DELETE_WINDOW", self.on_close)
        self.resizable(False, False)

    def _center_window(self, parent):
        self.update_idletasks()
        width = self.winfo_reqwidth()
        height = self.winfo_reqheight()
        x = parent.winfo_rootx() + (parent.winfo_width() // 2) - (width // 2)
        y = parent.winfo_rooty() + (parent.winfo_height() // 2) - (height // 2)
        self.geometry(f"{width}x{height}+{x}+{y}")

    def _create_widgets(self, parent):
        ttk.Label(parent, text=PANEL_TITLE, font=("TkDefaultFont", 12, "bold")).pack(anchor=tk.W, pady=(0, 8))

        frame = ttk.Frame(parent)
        frame.pack(fill=tk.X, expand=True)

        for row, field in enumerate(self.fields):
            label = ttk.Frame(frame)
            label.grid(row=row, column=0, sticky=tk.W, pady=3)
            ttk.Label(label, text=field.name).pack(anchor=tk.W)
            ttk.Label(label, text=field.description, foreground="gray").pack(anchor=tk.W)
            self._create_input(frame, field).grid(row=row, column=1, sticky=tk.E, padx=(15, 0))

        btn_frame = ttk.Frame(parent)
        btn_frame.pack(fill=tk.X, pady=(10, 0))
        ttk.Button(btn_frame, text="Close", command=self.on_close).pack(side=tk.RIGHT)

    def _create_input(self, parent, field: SettingField) -> tk.Widget:
        if field.kind == "toggle":
            var = tk.BooleanVar(value=field.getter())
            widget = ttk.Checkbutton(parent, variable=var, command=lambda: field.setter(var.get()))
        else:
            var = tk.StringVar(value=field.getter())
            var.trace_add("write", lambda *_: field.setter(var.get()))
            widget = ttk.Entry(parent, textvariable=var, width=6, justify=tk.CENTER)
        self._vars[field.key] = var
        return widget

    def on_close(self):
        self.grab_release()
        self.destroy()


class EditorApp(EditorHost):
    """Main window. Implements the host side of the plugin interface."""

    def __init__(self, root, store: SettingsStore | None = None):
        self.root = root
        self.root.title("Custom Bullets")
        self.root.geometry("1000x600")

        setup_main_logger(logging.INFO)

        self.current_path: Path | None = None
        self.line_processors: list[Callable[[str], str]] = []
        self.commands: dict[str, tuple[str, Callable]] = {}

        self._load_resources()
        self._create_widgets()
        self._setup_layout()
        self._bind_events()

        self.plugin = CustomBulletsPlugin(self)
        self.handle: PluginHandle = self.plugin.start(store or SettingsStore())

        self.source.insert("1.0", SAMPLE_TEXT)
        self.source.edit_modified(False)
        self.refresh()

        self.root.protocol("WM_DELETE_WINDOW", self.on_quit)

    def _load_resources(self):
        self.app_icon = load_photo_image(render_app_icon(64))
        self.icon_on = load_photo_image(render_status_icon(True))
        self.icon_off = load_photo_image(render_status_icon(False))
        self.root.iconphoto(True, self.app_icon)

    def _create_widgets(self):
        self.main_frame = ttk.Frame(self.root, padding="5")

        # Toolbar
        self.toolbar = ttk.Frame(self.main_frame)
        self.open_btn = ttk.Button(self.toolbar, text="Open", command=self.on_open_click)
        self.save_btn = ttk.Button(self.toolbar, text="Save", command=self.on_save_click)
        self.export_btn = ttk.Button(self.toolbar, text="Export HTML", command=self.on_export_click)

        self.right_toolbar = ttk.Frame(self.toolbar)
        self.toggle_btn = ttk.Button(self.right_toolbar, text="Toggle Bullets")
        self.settings_btn = ttk.Button(self.right_toolbar, text="Settings", command=self.on_settings_click)

        # Editor panes
        self.panes = ttk.PanedWindow(self.main_frame, orient=tk.HORIZONTAL)
        self.source_frame = ttk.Frame(self.panes)
        self.source = tk.Text(self.source_frame, wrap=tk.NONE, undo=True, font=("TkFixedFont", 11))
        self.source_scroll_y = ttk.Scrollbar(self.source_frame, orient=tk.VERTICAL, command=self.source.yview)
        self.source.configure(yscrollcommand=self.source_scroll_y.set)

        self.preview_frame = ttk.Frame(self.panes)
        self.preview = tk.Text(self.preview_frame, wrap=tk.NONE, font=("TkFixedFont", 11), state=tk.DISABLED)
        self.preview_scroll_y = ttk.Scrollbar(self.preview_frame, orient=tk.VERTICAL, command=self.preview.yview)
        self.preview.configure(yscrollcommand=self.preview_scroll_y.set)

        if TkinterDnD:
            self.source.drop_target_register(DND_FILES)
            self.source.dnd_bind('<<Drop>>', self.on_drop)

        # Menu
        self.menu = tk.Menu(self.root)
        self.file_menu = tk.Menu(self.menu, tearoff=False)
        self.file_menu.add_command(label="Open...", command=self.on_open_click, accelerator="Ctrl+O")
        self.file_menu.add_command(label="Save", command=self.on_save_click, accelerator="Ctrl+S")
        self.file_menu.add_command(label="Export HTML...", command=self.on_export_click)
        self.file_menu.add_separator()
        self.file_menu.add_command(label="Quit", command=self.on_quit)
        self.menu.add_cascade(label="File", menu=self.file_menu)
        self.commands_menu = tk.Menu(self.menu, tearoff=False)
        self.commands_menu.add_command(label="Settings...", command=self.on_settings_click)
        self.commands_menu.add_separator()
        self.menu.add_cascade(label="Commands", menu=self.commands_menu)
        self.root.config(menu=self.menu)

        self.status_frame = ttk.Frame(self.main_frame, relief=tk.SUNKEN, padding="2")
        self.status_label = ttk.Label(self.status_frame, text="Ready", anchor=tk.W)
        self.bullets_label = ttk.Label(self.status_frame, compound=tk.LEFT, anchor=tk.E)

    def _setup_layout(self):
        self.main_frame.pack(fill=tk.BOTH, expand=True)

        self.toolbar.pack(fill=tk.X, pady=(0, 5))
        self.open_btn.pack(side=tk.LEFT, padx=2)
        self.save_btn.pack(side=tk.LEFT, padx=2)
        self.export_btn.pack(side=tk.LEFT, padx=2)
        self.right_toolbar.pack(side=tk.RIGHT)
        self.toggle_btn.pack(side=tk.LEFT, padx=2)
        self.settings_btn.pack(side=tk.LEFT, padx=2)

        self.panes.pack(fill=tk.BOTH, expand=True)
        self.panes.add(self.source_frame, weight=1)
        self.panes.add(self.preview_frame, weight=1)
        self.source_scroll_y.pack(side=tk.RIGHT, fill=tk.Y)
        self.source.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)
        self.preview_scroll_y.pack(side=tk.RIGHT, fill=tk.Y)
        self.preview.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)

        self.status_frame.pack(fill=tk.X, side=tk.BOTTOM)
        self.bullets_label.pack(side=tk.RIGHT)
        self.status_label.pack(side=tk.LEFT, fill=tk.X, expand=True)

    def _bind_events(self):
        self.source.bind("<<Modified>>", self.on_source_modified)
        self.root.bind("<Control-o>", lambda e: self.on_open_click())
        self.root.bind("<Control-s>", lambda e: self.on_save_click())

    # --- EditorHost ---

    def register_line_processor(self, processor):
        self.line_processors.append(processor)

    def unregister_line_processor(self, processor):
        if processor in self.line_processors:
            self.line_processors.remove(processor)

    def register_command(self, command_id, name, callback):
        self.commands[command_id] = (name, callback)
        if command_id != CustomBulletsPlugin.COMMAND_ID:
            self.commands_menu.add_command(label=name, command=callback)
            return

        self.commands_menu.add_command(label=name, command=callback, accelerator="Ctrl+Shift+B")
        self.root.bind(TOGGLE_SHORTCUT, lambda e: callback())
        self.toggle_btn.config(command=callback)

    def set_status(self, text):
        enabled = self.plugin.settings.enabled
        self.bullets_label.config(text=text, image=self.icon_on if enabled else self.icon_off)

    def refresh(self):
        """Re-renders the preview in place, keeping its insert mark and scroll position."""
        yview = self.preview.yview()[0]
        insert = self.preview.index(tk.INSERT)

        rendered = self._render(self.source.get("1.0", "end-1c"))

        self.preview.config(state=tk.NORMAL)
        self.preview.delete("1.0", tk.END)
        self.preview.insert("1.0", rendered)
        self.preview.config(state=tk.DISABLED)

        self.preview.mark_set(tk.INSERT, insert)
        self.preview.yview_moveto(yview)

    def _render(self, text: str) -> str:
        out = []
        for body, ending in iter_lines(text):
            for processor in self.line_processors:
                body = processor(body)
            out.append(body + ending)
        return "".join(out)

    # --- Actions ---

    def on_source_modified(self, event=None):
        if self.source.edit_modified():
            self.refresh()
            self.source.edit_modified(False)

    def on_settings_click(self):
        SettingsDialog(self.root, build_setting_fields(self.plugin))

    def on_open_click(self):
        file = filedialog.askopenfilename(title="Open Markdown File", filetypes=MARKDOWN_FILETYPES)
        if file:
            self.open_file(Path(file))

    def on_drop(self, event):
        data = event.data
        if not data: return
        try:
            paths_list = self.root.tk.splitlist(data)
        except Exception:
            paths_list = re.findall(r'\{([^}]+)\}|([^{\s}]+)', data)
            paths_list = [p[0] or p[1] for p in paths_list]

        if paths_list:
            # single document editor, open the first one
            self.open_file(Path(paths_list[0]))

    def open_file(self, path: Path):
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            log.error(f"Failed to open {path}: {e}")
            messagebox.showerror("Error", f"Could not open {path.name}:\n{e}")
            return

        self.current_path = path
        self.source.delete("1.0", tk.END)
        self.source.insert("1.0", text)
        self.source.edit_reset()
        self.root.title(f"Custom Bullets - {path.name}")
        self.status_label.config(text=f"Opened {path}")
        log.info(f"Opened {path}")

    def on_save_click(self):
        if self.current_path is None:
            file = filedialog.asksaveasfilename(defaultextension=".md", filetypes=MARKDOWN_FILETYPES)
            if not file: return
            self.current_path = Path(file)

        try:
            self.current_path.write_text(self.source.get("1.0", "end-1c"), encoding="utf-8")
        except OSError as e:
            log.error(f"Failed to save {self.current_path}: {e}")
            messagebox.showerror("Error", f"Could not save {self.current_path.name}:\n{e}")
            return
        self.status_label.config(text=f"Saved {self.current_path}")

    def on_export_click(self):
        file = filedialog.asksaveasfilename(
            defaultextension=".html", filetypes=[("HTML Files", "*.html *.xhtml"), ("All Files", "*.*")]
        )
        if not file: return

        title = self.current_path.stem if self.current_path else ""
        html = build_html(self.source.get("1.0", "end-1c"), self.plugin.settings, title)
        try:
            write_html(html, file)
        except OSError as e:
            log.error(f"Failed to export {file}: {e}")
            messagebox.showerror("Error", f"Could not export:\n{e}")
            return
        self.status_label.config(text=f"Exported {file}")

    def on_quit(self):
        self.plugin.stop(self.handle)
        self.handle.store.close()
        self.root.destroy()


def run_gui(store: SettingsStore | None = None):
    if TkinterDnD:
        root = TkinterDnD.Tk()
    else:
        root = tk.Tk()
    app = EditorApp(root, store)
    root.mainloop()
