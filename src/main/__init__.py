"""
Main module - Main/Composition Root Layer

This module wires the layers together: it loads the settings, builds the
dependency container and exposes the command line entry point.
"""

from .config import AppSettings, get_settings
from .container import AppContainer, get_container, init_container, reconfigure

__all__ = [
    "AppSettings",
    "get_settings",
    "AppContainer",
    "init_container",
    "get_container",
    "reconfigure",
]
