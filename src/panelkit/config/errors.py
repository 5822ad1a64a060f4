"""
Exception types raised across the panel package.
"""

from __future__ import annotations


class ConfigError(RuntimeError):
    """Raised when configuration files cannot be loaded or validated."""


class InvalidFaviconError(ConfigError):
    """Raised when the panel.favicon option is neither a mapping nor a path."""


class PanelError(RuntimeError):
    """Base class for runtime failures while building panel output."""


class ViewNotFoundError(PanelError):
    """Raised when a view template cannot be found."""


class AssetLinkError(PanelError):
    """Raised when the panel distribution could not be linked into the media folder."""
