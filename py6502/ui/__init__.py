"""Monitor front end for the 6502 emulator."""

from .app import AppConfig, MonitorApp
from . import views

__all__ = [
    "AppConfig",
    "MonitorApp",
    "views",
]
