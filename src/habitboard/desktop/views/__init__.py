"""Desktop views."""

from . import auth, habits

__all__ = ["auth", "habits"]
