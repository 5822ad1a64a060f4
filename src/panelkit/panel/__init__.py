"""
Admin panel components: menu and static assets.
"""

from .area import SEPARATOR, normalize_area, resolve
from .assets import Asset, Assets
from .menu import Menu
from .plugins import Plugins

__all__ = ["SEPARATOR", "Asset", "Assets", "Menu", "Plugins", "normalize_area", "resolve"]
