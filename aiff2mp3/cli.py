from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from .commands import convert as cmd_convert
from .commands import init as cmd_init
from .config import Settings, find_config
from .errors import Aiff2Mp3Error

LOG_FORMAT = "%(levelname).1s | %(name)s | %(message)s"
MODES = ("init", "convert")

C_RESET = "\033[0m"
LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",  # Cyan
    logging.INFO: "\033[37m",  # Light gray
    logging.WARNING: "\033[33m",  # Yellow
    logging.ERROR: "\033[31m",  # Red
    logging.CRITICAL: "\033[35m",  # Magenta
}

logger = logging.getLogger(__name__)


class RootRelativeFormatter(logging.Formatter):
    """Prints paths under the input root relative to it, optionally colored by level."""

    def __init__(self, fmt: str, root: Path, *, color: bool = False) -> None:
        super().__init__(fmt)
        self.prefix = f"{root}/"
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record).replace(self.prefix, "")
        color = LEVEL_COLORS.get(record.levelno) if self.color else None
        if not color:
            return message
        return f"{color}{message}{C_RESET}"


class WarningSummaryHandler(logging.Handler):
    """Keeps warnings and errors of the run for the closing summary."""

    def __init__(self) -> None:
        super().__init__(level=logging.WARNING)
        self.lines: list[str] = []
        self.errors = 0

    def emit(self, record: logging.LogRecord) -> None:
        if record.levelno >= logging.ERROR:
            self.errors += 1
        self.lines.append(self.format(record))

    def summary(self) -> list[str]:
        if not self.lines:
            return []
        warnings = len(self.lines) - self.errors
        header = f"\n\033[33mWarnings/Errors summary ({warnings} warning(s), {self.errors} error(s)):{C_RESET}"
        return [header] + [f" - {line}" for line in self.lines]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aiff2mp3",
        description="Convert folders of AIFF files to MP3 using per-folder mp3tag.txt metadata",
    )
    parser.add_argument("--config", type=Path, help="Path to aiff2mp3.yaml")
    parser.add_argument("--log-level", default="INFO", help="Python logging level")
    parser.add_argument(
        "--warning-log",
        type=Path,
        help="Also write warnings and errors to this file",
    )
    parser.add_argument("path", type=Path, help="Folder with aiff files")
    parser.add_argument(
        "mode",
        choices=MODES,
        help="init: create mp3tag.txt files; convert: write MP3 files",
    )
    return parser


def configure_logging(
    level_name: str, root: Path, warning_log: Optional[Path] = None
) -> WarningSummaryHandler:
    log_level = getattr(logging, level_name.upper(), logging.INFO)
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(log_level)

    console = logging.StreamHandler()
    console.setFormatter(RootRelativeFormatter(LOG_FORMAT, root, color=True))
    root_logger.addHandler(console)

    summary = WarningSummaryHandler()
    summary.setFormatter(RootRelativeFormatter(LOG_FORMAT, root))
    root_logger.addHandler(summary)

    if warning_log is not None:
        file_handler = logging.FileHandler(warning_log, mode="w", encoding="utf-8")
        file_handler.setLevel(logging.WARNING)
        file_handler.setFormatter(RootRelativeFormatter(LOG_FORMAT, root))
        root_logger.addHandler(file_handler)
    return summary


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.path.exists():
        parser.error(f"{args.path} does not exist...")

    warn_summary = configure_logging(args.log_level, args.path.resolve(), args.warning_log)

    try:
        settings = Settings.load(find_config(args.config))
        match args.mode:
            case "init":
                cmd_init.run(args.path, settings)
            case "convert":
                cmd_convert.run(args.path, settings)
            case _:
                parser.error("Unknown mode")
    except Aiff2Mp3Error as exc:
        logger.error("%s failed [%s]: %s", args.mode, exc.kind.value, exc)
        raise SystemExit(1) from exc
    finally:
        for line in warn_summary.summary():
            print(line)
        if warn_summary.lines and args.warning_log is not None:
            print(f"\nFull warning log: {args.warning_log}")


if __name__ == "__main__":
    main()
