"""
Configuration helpers for the panel toolkit.
"""

from .errors import AssetLinkError, ConfigError, InvalidFaviconError, PanelError, ViewNotFoundError
from .models import AreaConfig, PanelConfig, RootsConfig, UrlsConfig, load_config
from .settings import Settings, get_settings

__all__ = [
    "AreaConfig",
    "AssetLinkError",
    "ConfigError",
    "InvalidFaviconError",
    "PanelConfig",
    "PanelError",
    "RootsConfig",
    "Settings",
    "UrlsConfig",
    "ViewNotFoundError",
    "get_settings",
    "load_config",
]
