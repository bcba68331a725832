from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from .app import SongsApp
from .commands import artists as cmd_artists
from .commands import songs as cmd_songs
from .commands.menu import read_option
from .config import Settings, load_settings
from .persistence import PersistenceError
from .seed import write_seed_files
from .tables import MAIN_MENU

LOGO = r"""
███████╗ ██████╗ ███╗   ██╗ ██████╗ ███████╗     █████╗ ██████╗ ██████╗
██╔════╝██╔═══██╗████╗  ██║██╔════╝ ██╔════╝    ██╔══██╗██╔══██╗██╔══██╗
███████╗██║   ██║██╔██╗ ██║██║  ███╗███████╗    ███████║██████╔╝██████╔╝
╚════██║██║   ██║██║╚██╗██║██║   ██║╚════██║    ██╔══██║██╔═══╝ ██╔═══╝
███████║╚██████╔╝██║ ╚████║╚██████╔╝███████║    ██║  ██║██║     ██║
╚══════╝ ╚═════╝ ╚═╝  ╚═══╝ ╚═════╝ ╚══════╝    ╚═╝  ╚═╝╚═╝     ╚═╝
"""


LOG_FORMAT = "%(levelname).1s | %(name)s | %(message)s"
FILE_LOG_FORMAT = "%(asctime)s " + LOG_FORMAT

C_RESET = "\033[0m"
LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",  # Cyan
    logging.INFO: "\033[37m",  # Light gray
    logging.WARNING: "\033[33m",  # Yellow
    logging.ERROR: "\033[31m",  # Red
    logging.CRITICAL: "\033[35m",  # Magenta
}

logger = logging.getLogger(__name__)


class ShortPathFormatter(logging.Formatter):
    def __init__(self, fmt: str, roots: list[Path]) -> None:
        super().__init__(fmt)
        self.roots = [str(root) for root in roots if root]

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        for root in self.roots:
            message = message.replace(f"{root}/", "")
        return message


class ColorFormatter(ShortPathFormatter):
    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = LEVEL_COLORS.get(record.levelno)
        if not color:
            return message
        return f"{color}{message}{C_RESET}"


def configure_logging(settings: Settings, level_name: Optional[str] = None) -> None:
    level = getattr(logging, (level_name or settings.logging.level).upper(), logging.WARNING)
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(logging.DEBUG)

    display_roots = [settings.storage.data_dir.resolve()]

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(ColorFormatter(LOG_FORMAT, display_roots))
    root_logger.addHandler(console)

    if settings.logging.debug_log:
        file_handler = logging.FileHandler(settings.logging.debug_log, mode="a", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
        root_logger.addHandler(file_handler)


def write_seed(app: SongsApp) -> None:
    storage = app.settings.storage
    try:
        written = write_seed_files(storage.data_dir, storage.songs_file, storage.artists_file)
    except PersistenceError as exc:
        logger.error("Writing seed files failed: %s", exc)
        app.prompt_io.print(f"Error writing to file: {exc}")
        return
    for path in written:
        app.prompt_io.print(f"Wrote {path}")


def run_menu(app: SongsApp) -> None:
    while True:
        app.prompt_io.print(MAIN_MENU)
        option = read_option(app.prompt_io)
        logger.debug("Main menu option %s", option)
        match option:
            case 1:
                cmd_songs.run(app)
            case 2:
                cmd_artists.run(app)
            case -99:
                write_seed(app)
            case 0:
                logger.debug("Exiting...bye")
                return
            case _:
                app.prompt_io.print(f"Invalid option entered: {option}")


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Interactive song and artist manager")
    parser.add_argument("--config", type=Path, help="Path to songs-app.yaml")
    parser.add_argument("--log-level", default=None, help="Console logging level")
    parser.add_argument(
        "--format",
        choices=["xml", "json", "yaml"],
        default=None,
        help="Storage format for songs and artists (overrides config)",
    )
    parser.add_argument("--data-dir", type=Path, default=None, help="Directory holding the data files")
    parser.add_argument(
        "--no-load",
        action="store_true",
        help="Start with empty collections instead of loading the data files",
    )
    args = parser.parse_args(argv)

    settings = load_settings(args.config)
    overrides = {}
    if args.format:
        overrides["format"] = args.format
    if args.data_dir:
        overrides["data_dir"] = args.data_dir
    if overrides:
        storage = settings.storage.model_validate({**settings.storage.model_dump(), **overrides})
        settings = settings.model_copy(update={"storage": storage})

    configure_logging(settings, args.log_level)
    print(LOGO)

    app = SongsApp.create(settings)
    if not args.no_load:
        cmd_songs.load_songs(app, show=False)
        cmd_artists.load_artists(app, show=False)

    try:
        run_menu(app)
    except (EOFError, KeyboardInterrupt):
        print()
        logger.debug("Input closed, exiting")
