"""Console logging setup for the jukebox process."""

from __future__ import annotations

import json
import logging
import logging.config
import os
import sys
from pathlib import Path
from typing import TextIO

DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that flood INFO with gateway and player chatter.
NOISY_LOGGERS: tuple[str, ...] = ("discord.gateway", "discord.player", "discord.voice_state")


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name with ANSI escapes.

    Color is only applied when the target stream is a terminal and the
    ``NO_COLOR`` environment variable is unset.
    """

    LEVEL_COLORS: dict[int, str] = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[1;31m",
    }
    RESET = "\033[0m"

    def __init__(
        self,
        fmt: str | None = DEFAULT_FORMAT,
        datefmt: str | None = DEFAULT_DATEFMT,
        style: str = "%",
        validate: bool = True,
        *,
        stream: TextIO | None = None,
    ) -> None:
        super().__init__(fmt, datefmt, style, validate)  # type: ignore[arg-type]
        self.stream = stream

    def use_color(self) -> bool:
        if os.environ.get("NO_COLOR") is not None:
            return False
        stream = self.stream or sys.stderr
        isatty = getattr(stream, "isatty", None)
        return bool(isatty and isatty())

    def format(self, record: logging.LogRecord) -> str:
        if not self.use_color():
            return super().format(record)

        colored = logging.makeLogRecord(record.__dict__)
        color = self.LEVEL_COLORS.get(record.levelno, "")
        colored.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(colored)


def setup_logging(log_level: str = "INFO", config_path: Path | None = None) -> None:
    """Configure root logging from a dictConfig JSON file, or a colored console fallback."""
    level = getattr(logging, log_level.upper(), logging.INFO)

    configured = False
    if config_path is not None:
        try:
            with open(config_path, encoding="utf-8") as f:
                logging.config.dictConfig(json.load(f))
            configured = True
        except (OSError, json.JSONDecodeError, ValueError) as e:
            logging.getLogger(__name__).warning(
                "Could not load %s (%s), using console defaults", config_path, e
            )

    if not configured:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(ColoredFormatter(stream=sys.stderr))
        root = logging.getLogger()
        root.handlers[:] = [handler]

    logging.getLogger().setLevel(level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
