import logging
import sys
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Loggers whose records always reach the console at the configured level.
CONSOLE_PREFIXES = ("dailytasks", "uvicorn")

# Chatty dependencies capped at WARNING everywhere, file included.
QUIET_LOGGERS = ("httpx", "hpack", "httpcore")


class ConsoleFilter(logging.Filter):
    """Console shows our own records and the server's; dependencies only when they warn."""

    def filter(self, record: logging.LogRecord) -> bool:
        top = record.name.split(".", 1)[0]
        return top in CONSOLE_PREFIXES or record.levelno >= logging.WARNING


def _level(value: Union[int, str]) -> int:
    if isinstance(value, int):
        return value
    resolved = logging.getLevelName(value.upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(
    *,
    level: Union[int, str] = logging.INFO,
    log_dir: Optional[Union[str, Path]] = None,
) -> None:
    """Install handlers on the root logger; run once from app startup.

    ``log_dir`` adds ``dailytasks.log`` there with DEBUG and everything unfiltered.
    """
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(_level(level))
    console.setFormatter(formatter)
    console.addFilter(ConsoleFilter())
    root.addHandler(console)

    if log_dir is not None:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(path / "dailytasks.log"), encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    logging.captureWarnings(True)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
