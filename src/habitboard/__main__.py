"""Allow ``python -m habitboard`` to launch the desktop app."""

from .desktop.app import run

run()
