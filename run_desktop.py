#!/usr/bin/env python
"""Desktop app entrypoint for HabitBoard."""

import flet as ft

from habitboard.desktop.app import main

if __name__ == "__main__":
    ft.app(target=main)
