import argparse
import logging
import sys
import tkinter as tk

from pydantic import ValidationError

from birthday_display.core.config import LOG_LEVELS, Settings
from birthday_display.exception.exceptions import BirthdayDisplayError
from birthday_display.services.birthday_service import BirthdayService
from birthday_display.services.image_service import ImageService
from birthday_display.services.record_loader import RecordLoader
from birthday_display.ui.controller import BirthdayController
from birthday_display.ui.fetch_worker import ImageFetchWorker
from birthday_display.ui.view_model import BirthdayViewModel
from birthday_display.ui.window import BirthdayWindow

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="birthday-display",
        description="Show birthdays from csv file in window",
    )
    parser.add_argument("file", help="CSV file with lines lastname,firstname,dd.mm.YYYY,gender,[image url]")
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=LOG_LEVELS,
        help="overrides the LOG_LEVEL setting",
    )
    return parser


def configure_logging(level: str):
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


def run(path: str, config: Settings) -> int:
    """Load the file and show the window until it is closed, returns the exit code"""
    try:
        result = RecordLoader().load(path)
    except BirthdayDisplayError as e:
        logger.error(str(e))
        return 1

    if result.errors:
        logger.warning(f"{len(result.errors)} lines of {path} were skipped")

    try:
        window = BirthdayWindow(config)
    except tk.TclError as e:
        logger.error(f"Cannot open window: {e}")
        return 1

    view_model = BirthdayViewModel(result.persons, BirthdayService())
    fetcher = ImageFetchWorker(ImageService(config), concurrency=config.IMAGE_FETCH_CONCURRENCY)
    controller = BirthdayController(view_model, fetcher, window)

    window.on_close(controller.close)

    try:
        controller.start()
        window.every(config.POLL_INTERVAL_MS, controller.poll)
        window.every(config.REFRESH_INTERVAL_SECONDS * 1000, controller.refresh_day)
        window.run()
    finally:
        controller.close()
        window.close()
    return 0


def main(argv: list[str] | None = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = Settings()
    except ValidationError as e:
        parser.exit(2, f"{parser.prog}: invalid settings:\n{e}\n")

    configure_logging(args.log_level or config.LOG_LEVEL)
    sys.exit(run(args.file, config))


if __name__ == "__main__":
    main()
