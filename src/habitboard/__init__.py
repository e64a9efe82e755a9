"""HabitBoard desktop habit-tracking dashboard."""

from __future__ import annotations

from .config import BaseConfig

__all__ = ["BaseConfig"]
