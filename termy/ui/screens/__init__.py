"""UI Screens."""

from .config_view import ConfigViewScreen
from .home import HomeScreen

__all__ = ["ConfigViewScreen", "HomeScreen"]
