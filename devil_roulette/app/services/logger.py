from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from devil_roulette.core.models import LogEntry


@dataclass(slots=True)
class AppLoggerBundle:
    app: logging.Logger
    gameplay: logging.Logger
    latest_log_path: Path


def _rotate_latest_log(logs_dir: Path, keep_archives: int = 5) -> Path:
    logs_dir.mkdir(parents=True, exist_ok=True)
    latest = logs_dir / "latest.log"
    if latest.exists():
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        archived = logs_dir / f"latest_{stamp}.log"
        latest.replace(archived)

    archives = sorted(
        [path for path in logs_dir.glob("latest_*.log") if path.is_file()],
        key=lambda p: p.name,
        reverse=True,
    )
    for stale in archives[keep_archives:]:
        stale.unlink(missing_ok=True)
    return latest


def configure_logging(
    logs_dir: Path,
    level: str = "INFO",
    keep_archives: int = 5,
    console: bool = True,
) -> AppLoggerBundle:
    latest = _rotate_latest_log(logs_dir, keep_archives=keep_archives)
    gameplay_log_path = logs_dir / "gameplay.log"

    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    app_logger = logging.getLogger("devil_roulette")
    app_logger.setLevel(level)
    for handler in list(app_logger.handlers):
        handler.close()
    app_logger.handlers.clear()
    app_logger.propagate = False

    if console:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        app_logger.addHandler(stream_handler)

    file_handler = logging.FileHandler(latest, mode="w", encoding="utf-8")
    file_handler.setFormatter(formatter)
    app_logger.addHandler(file_handler)

    gameplay_logger = logging.getLogger("devil_roulette.gameplay")
    gameplay_logger.setLevel(logging.INFO)
    for handler in list(gameplay_logger.handlers):
        handler.close()
    gameplay_logger.handlers.clear()
    gameplay_logger.propagate = False

    gameplay_handler = logging.FileHandler(gameplay_log_path, mode="w", encoding="utf-8")
    gameplay_handler.setFormatter(logging.Formatter("%(asctime)s %(message)s"))
    gameplay_logger.addHandler(gameplay_handler)

    return AppLoggerBundle(app=app_logger, gameplay=gameplay_logger, latest_log_path=latest)


def write_timeline(logger: logging.Logger, timeline: list[LogEntry]) -> None:
    for entry in timeline:
        logger.info(entry.format())
