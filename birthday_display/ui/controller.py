from datetime import date
from typing import Callable, Protocol
from birthday_display.models.view_schemas import BirthdayEntry, ViewState
from birthday_display.ui.view_model import BirthdayViewModel
import logging

logger = logging.getLogger(__name__)


class Renderer(Protocol):
    def render(self, state: ViewState, entries: list[BirthdayEntry]) -> None: ...


class ImageFetcher(Protocol):
    def submit(self, url: str) -> bool: ...

    def drain(self) -> list[tuple[str, bytes | None]]: ...

    def stop(self) -> None: ...


class BirthdayController:
    """
    Connects the view model with the image fetcher and the renderer.
    Every method is meant to be called from the UI thread, poll() being the single place
    where fetch results reach the view model.
    """
    def __init__(
        self,
        view_model: BirthdayViewModel,
        fetcher: ImageFetcher,
        renderer: Renderer,
        clock: Callable[[], date] = date.today,
    ):
        self.view_model = view_model
        self.fetcher = fetcher
        self.renderer = renderer
        self.clock = clock
        self.closed = False

    def start(self):
        self._show_day(self.clock())

    def poll(self) -> bool:
        """Apply finished downloads, returns True when the window was redrawn"""
        if self.closed:
            return False

        changed = False
        for url, data in self.fetcher.drain():
            changed = self.view_model.apply_image(url, data) or changed

        if changed:
            self._render()
        return changed

    def refresh_day(self) -> bool:
        """Re-filter when the date changed since the last check"""
        if self.closed:
            return False

        today = self.clock()
        if today == self.view_model.today:
            return False

        logger.info(f"Date changed to {today.isoformat()}")
        self._show_day(today)
        return True

    def close(self):
        if self.closed:
            return
        self.closed = True
        self.fetcher.stop()

    # helper: filter for a day, schedule missing images and redraw
    def _show_day(self, today: date):
        for url in self.view_model.update_day(today):
            self.fetcher.submit(url)
        self._render()

    def _render(self):
        self.renderer.render(self.view_model.state, self.view_model.entries())
