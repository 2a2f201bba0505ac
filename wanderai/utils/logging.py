"""Structured logging for generation and persistence outcomes."""

import logging
from typing import Any


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the service."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


class StructuredEventLogger:
    """Structured logger attaching event data under ``extra["structured"]``."""

    def __init__(self, name: str) -> None:
        self._logger = logging.getLogger(name)

    def log_event(
        self,
        event: str,
        outcome: str,
        error_reason: str | None = None,
        **fields: Any,
    ) -> None:
        """Log an event outcome; failures log at warning level."""
        log_data: dict[str, Any] = {"event": event, "outcome": outcome, **fields}

        if error_reason:
            log_data["error_reason"] = error_reason

        log_msg = f"{event} - {outcome}"

        if outcome in ("success", "remote", "local"):
            self._logger.info(log_msg, extra={"structured": log_data})
        else:
            self._logger.warning(log_msg, extra={"structured": log_data})
