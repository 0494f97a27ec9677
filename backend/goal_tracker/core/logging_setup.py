"""
Logging configuration for the goals service.

Application modules log through ``logging.getLogger(__name__)``. Request
lines in Apache "combined" format go to the ``goal_tracker.access`` logger,
which writes to its own file when ``access_log_path`` is set.
"""
import logging
import os
from datetime import datetime, timezone

from goal_tracker.core.config import Settings


ACCESS_LOGGER_NAME = "goal_tracker.access"

_configured = False


def configure_logging(settings: Settings) -> None:
    global _configured
    if _configured:
        return

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if settings.access_log_path:
        log_dir = os.path.dirname(settings.access_log_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handler = logging.FileHandler(settings.access_log_path, mode="a", encoding="utf-8")
        handler.setFormatter(logging.Formatter("%(message)s"))
        access_logger = logging.getLogger(ACCESS_LOGGER_NAME)
        access_logger.addHandler(handler)
        access_logger.setLevel(logging.INFO)
        access_logger.propagate = False

    _configured = True


def combined_log_line(
    remote_addr: str,
    method: str,
    path: str,
    http_version: str,
    status_code: int,
    content_length: str | None,
    referer: str | None,
    user_agent: str | None,
    when: datetime | None = None,
) -> str:
    when = when or datetime.now(timezone.utc)
    stamp = when.strftime("%d/%b/%Y:%H:%M:%S %z")
    return (
        f'{remote_addr or "-"} - - [{stamp}] "{method} {path} HTTP/{http_version}" '
        f'{status_code} {content_length or "-"} "{referer or "-"}" "{user_agent or "-"}"'
    )
