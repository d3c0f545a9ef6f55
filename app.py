# app.py
# CustomTkinter desktop dictionary: pick a shard folder or ZIP in the sidebar,
# type in the search box, matching terms and their definitions appear below.
# Shards load on a worker thread; ZIPs are read in place by the loader.

from __future__ import annotations
import logging
import threading
from pathlib import Path
from typing import List, Optional

import tkinter.filedialog as fd
import tkinter.messagebox as mb
import customtkinter as ctk

# Project imports (ensure PYTHONPATH=src or an installed package)
from fastmatch import FastMatcher
from fastmatch import config as CFG
from fastmatch.loader import build_matcher, load_shard_archive, load_shards
from fastmatch.models import Entry

log = logging.getLogger("fastmatch.app")

LIMIT_CHOICES = ("10", "20", "50", "100")


def render_entry(e: Entry) -> str:
    """Term on its own line, then one numbered line per definition."""
    lines = [e.term]
    for i, d in enumerate(e.definitions, start=1):
        pos = f"({d.pos}) " if d.pos else ""
        lines.append(f"   {i}. {pos}{d.gloss}")
    return "\n".join(lines)


class DictionaryApp(ctk.CTk):
    """Sidebar for the data source and options, search pane on the right."""

    def __init__(self) -> None:
        super().__init__()

        ctk.set_appearance_mode("dark")
        ctk.set_default_color_theme("blue")

        self.title("Fast Match Dictionary")
        self.geometry("960x620")
        self.minsize(760, 480)

        self._matcher: Optional[FastMatcher] = None
        self._loader: Optional[threading.Thread] = None
        self._pending_search: Optional[str] = None
        self._source: Optional[Path] = None
        self._any_word = ctk.BooleanVar(value=False)
        self._limit = ctk.StringVar(value=str(CFG.DEMO_LIMIT))

        self.font_title = ctk.CTkFont(size=20, weight="bold")
        self.font_mono = ctk.CTkFont(family="Cascadia Mono, Menlo, Consolas, Courier New", size=13)

        self.grid_columnconfigure(1, weight=1)
        self.grid_rowconfigure(0, weight=1)

        self._build_sidebar()
        self._build_search_pane()

    # --------- layout ---------

    def _build_sidebar(self) -> None:
        side = ctk.CTkFrame(self, width=220, corner_radius=0)
        side.grid(row=0, column=0, sticky="nsw")
        side.grid_rowconfigure(7, weight=1)

        ctk.CTkLabel(side, text="Fast Match", font=self.font_title).grid(
            row=0, column=0, padx=20, pady=(20, 16)
        )
        ctk.CTkButton(side, text="Open folder…", command=self._pick_folder).grid(
            row=1, column=0, padx=20, pady=6, sticky="ew"
        )
        ctk.CTkButton(side, text="Open ZIP…", command=self._pick_archive).grid(
            row=2, column=0, padx=20, pady=6, sticky="ew"
        )

        # both options are baked into the index, so changing them reloads
        ctk.CTkSwitch(side, text="Any word", variable=self._any_word, command=self._reload).grid(
            row=3, column=0, padx=20, pady=(18, 6), sticky="w"
        )
        ctk.CTkLabel(side, text="Max results", anchor="w").grid(row=4, column=0, padx=20, pady=(12, 0), sticky="ew")
        ctk.CTkOptionMenu(side, values=list(LIMIT_CHOICES), variable=self._limit,
                          command=lambda _v: self._reload()).grid(row=5, column=0, padx=20, pady=6, sticky="ew")

        self.lbl_source = ctk.CTkLabel(side, text="No data loaded", anchor="w", wraplength=180, justify="left")
        self.lbl_source.grid(row=6, column=0, padx=20, pady=(18, 6), sticky="ew")

        self.progress = ctk.CTkProgressBar(side, mode="indeterminate")
        self.progress.grid(row=8, column=0, padx=20, pady=(6, 20), sticky="ew")
        self.progress.set(0)

    def _build_search_pane(self) -> None:
        pane = ctk.CTkFrame(self, fg_color="transparent")
        pane.grid(row=0, column=1, sticky="nsew", padx=16, pady=16)
        pane.grid_columnconfigure(0, weight=1)
        pane.grid_rowconfigure(1, weight=1)

        self.entry_query = ctk.CTkEntry(pane, height=38, placeholder_text="Type a word…")
        self.entry_query.grid(row=0, column=0, sticky="ew")
        self.entry_query.bind("<KeyRelease>", self._on_key)

        self.txt_results = ctk.CTkTextbox(pane, wrap="word", font=self.font_mono, state="disabled")
        self.txt_results.grid(row=1, column=0, sticky="nsew", pady=(12, 8))

        self.lbl_status = ctk.CTkLabel(pane, text="Open a shard folder or ZIP to begin.", anchor="w")
        self.lbl_status.grid(row=2, column=0, sticky="ew")

    # --------- loading ---------

    def _pick_folder(self) -> None:
        path = fd.askdirectory(title="Shard folder")
        if path:
            self._load(Path(path))

    def _pick_archive(self) -> None:
        path = fd.askopenfilename(title="Shard ZIP", filetypes=[("ZIP archives", "*.zip"), ("All files", "*.*")])
        if path:
            self._load(Path(path))

    def _reload(self) -> None:
        if self._source is not None:
            self._load(self._source)

    def _load(self, source: Path) -> None:
        if self._loader and self._loader.is_alive():
            mb.showinfo("Loading", "Still loading the previous source.")
            return

        self._source = source
        self._matcher = None
        self.lbl_source.configure(text=source.name)
        self.lbl_status.configure(text=f"Loading {source.name}…")
        self.progress.start()

        opts = {"any_word": self._any_word.get(), "limit": int(self._limit.get())}
        self._loader = threading.Thread(target=self._load_worker, args=(source, opts), daemon=True)
        self._loader.start()

    def _load_worker(self, source: Path, opts: dict) -> None:
        try:
            entries = load_shard_archive(source) if source.is_file() else load_shards(source)
            matcher = build_matcher(entries, **opts)
        except Exception as exc:
            log.exception("Failed to load %s", source)
            self.after(0, lambda: self._loaded(None, exc))
            return
        self.after(0, lambda: self._loaded(matcher, None))

    def _loaded(self, matcher: Optional[FastMatcher], exc: Optional[Exception]) -> None:
        self.progress.stop()
        self.progress.set(0)
        if matcher is None:
            self.lbl_status.configure(text="Could not load shards.")
            mb.showerror("Load error", str(exc))
            return
        self._matcher = matcher
        self.lbl_status.configure(text=f"{len(matcher):,} words loaded.")
        log.info("Loaded %d words from %s (any_word=%s)", len(matcher), self._source, matcher.options.any_word)
        self.entry_query.focus_set()
        self._search()

    # --------- search ---------

    def _on_key(self, _event=None) -> None:
        if self._pending_search is not None:
            self.after_cancel(self._pending_search)
        self._pending_search = self.after(CFG.DEBOUNCE_MS, self._search)

    def _search(self) -> None:
        self._pending_search = None
        q = self.entry_query.get()
        if not q or self._matcher is None:
            self._show("")
            return
        results: List[Entry] = self._matcher.get_matches(q)
        self._show("\n\n".join(render_entry(e) for e in results) if results else "(no matches)")

    def _show(self, text: str) -> None:
        self.txt_results.configure(state="normal")
        self.txt_results.delete("0.0", "end")
        self.txt_results.insert("end", text)
        self.txt_results.configure(state="disabled")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    DictionaryApp().mainloop()
