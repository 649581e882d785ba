from __future__ import annotations

from pathlib import Path

from devil_roulette.app.services.logger import configure_logging, write_timeline
from devil_roulette.core.models import LogEntry


def test_configure_logging_rotates_and_writes_gameplay(tmp_path: Path) -> None:
    logs_dir = tmp_path / "logs"
    first = configure_logging(logs_dir, console=False)
    first.app.info("first run")
    second = configure_logging(logs_dir, console=False, keep_archives=1)
    second.app.info("second run")

    assert second.latest_log_path == logs_dir / "latest.log"
    assert len(list(logs_dir.glob("latest_*.log"))) == 1

    write_timeline(second.gameplay, [LogEntry(layer=7, round=1, type="shot", line="player shot dealer: live")])
    for handler in second.gameplay.handlers:
        handler.flush()
    text = (logs_dir / "gameplay.log").read_text(encoding="utf-8")
    assert "[L7 r=01] [SHOT] player shot dealer: live" in text
