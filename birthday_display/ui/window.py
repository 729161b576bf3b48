"""
Tkinter window showing today's birthdays.

The window only draws what the controller hands to render(). Decoding of the
downloaded bytes happens here because tkinter images must be created on the UI
thread. Tk decodes PNG, GIF and PPM; anything else is shown without image.
"""

import base64
import logging
import math
import tkinter as tk
from typing import Callable

from birthday_display.core.config import Settings
from birthday_display.models.view_schemas import BirthdayEntry, ImageStatus, ViewState

logger = logging.getLogger(__name__)

GREETING_FONT = ("Helvetica", 20)
MESSAGE_FONT = ("Helvetica", 24)
ERROR_COLOR = "#b30000"
FAILED_IMAGE_TEXT = "[failed to load image]"
EMPTY_TEXT = "No birthdays today."
LOADING_TEXT = "Loading..."


class BirthdayWindow:

    def __init__(self, config: Settings, root: tk.Tk | None = None):
        self.config = config
        self.root = root if root is not None else tk.Tk()
        self.root.title(config.WINDOW_TITLE)
        self.root.protocol("WM_DELETE_WINDOW", self.close)

        self._content: tk.Frame | None = None
        self._photos: dict[str, tk.PhotoImage | None] = {}
        self._close_callbacks: list[Callable[[], None]] = []
        self._after_ids: dict[str, str] = {}
        self._closed = False

    def on_close(self, callback: Callable[[], None]):
        self._close_callbacks.append(callback)

    def every(self, interval_ms: int, callback: Callable[[], object]):
        """Call callback on the UI thread every interval_ms until the window closes"""
        key = f"{id(callback)}:{interval_ms}"

        def tick():
            if self._closed:
                return
            try:
                callback()
            except Exception as e:
                logger.error(f"Error in scheduled callback: {e}")
            self._after_ids[key] = self.root.after(interval_ms, tick)

        self._after_ids[key] = self.root.after(interval_ms, tick)

    def render(self, state: ViewState, entries: list[BirthdayEntry]):
        if self._closed:
            return

        if self._content is not None:
            self._content.destroy()
        self._content = tk.Frame(self.root, padx=20, pady=20)
        self._content.pack(expand=True, fill=tk.BOTH)

        if not entries:
            text = LOADING_TEXT if state is ViewState.LOADING else EMPTY_TEXT
            tk.Label(self._content, text=text, font=MESSAGE_FONT).pack(expand=True)
            return

        row = tk.Frame(self._content)
        row.pack(expand=True)
        for entry in entries:
            self._render_entry(row, entry)

    def run(self):
        self.root.mainloop()

    def close(self):
        if self._closed:
            return
        self._closed = True

        for callback in self._close_callbacks:
            try:
                callback()
            except Exception as e:
                logger.error(f"Error while closing window: {e}")

        for after_id in self._after_ids.values():
            self.root.after_cancel(after_id)
        self._after_ids.clear()
        self.root.destroy()

    # helper: one column with greeting and portrait
    def _render_entry(self, parent: tk.Frame, entry: BirthdayEntry):
        column = tk.Frame(parent, padx=15)
        column.pack(side=tk.LEFT, anchor=tk.N)

        tk.Label(column, text=entry.greeting, font=GREETING_FONT, wraplength=self.config.IMAGE_WIDTH).pack(pady=(0, 20))

        if entry.image_status is ImageStatus.LOADED:
            photo = self._photo(entry.person.image_url, entry.image_data)
            if photo is not None:
                tk.Label(column, image=photo).pack()
            elif self.config.SHOW_IMAGE_ERRORS:
                self._failed_label(column)
        elif entry.image_status is ImageStatus.FAILED and self.config.SHOW_IMAGE_ERRORS:
            self._failed_label(column)

    def _failed_label(self, parent: tk.Frame):
        tk.Label(parent, text=FAILED_IMAGE_TEXT, font=GREETING_FONT, fg=ERROR_COLOR).pack()

    def _photo(self, url: str, data: bytes) -> tk.PhotoImage | None:
        """Decode once per url, None when tk cannot decode the image"""
        if url in self._photos:
            return self._photos[url]

        try:
            photo = tk.PhotoImage(master=self.root, data=base64.b64encode(data).decode("ascii"))
        except tk.TclError as e:
            logger.warning(f"Cannot decode image {url}: {e}")
            photo = None

        if photo is not None and photo.width() > self.config.IMAGE_WIDTH:
            photo = photo.subsample(math.ceil(photo.width() / self.config.IMAGE_WIDTH))

        # the label does not keep a reference, without this tk drops the image
        self._photos[url] = photo
        return photo
