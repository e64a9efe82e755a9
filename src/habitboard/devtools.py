"""Small helpers for dev-mode logging and diagnostics."""

from __future__ import annotations

from typing import Any, Mapping

from .config import BaseConfig
from .logging_config import get_logger

logger = get_logger("dev")


def in_dev_mode(config: BaseConfig | None) -> bool:
    """Return True when dev mode logging is enabled."""

    return bool(getattr(config, "DEV_MODE", False)) if config is not None else False


def dev_log(
    config: BaseConfig | None,
    message: str,
    *,
    exc: BaseException | None = None,
    context: Mapping[str, Any] | None = None,
) -> None:
    """Emit developer-friendly diagnostics when dev mode is enabled."""

    if not in_dev_mode(config):
        return

    parts = [f"[DEV] {message}"]
    if context:
        extras = " ".join(f"{k}={v}" for k, v in context.items())
        if extras:
            parts.append(f"({extras})")
    logger.debug(" ".join(parts), exc_info=exc)
