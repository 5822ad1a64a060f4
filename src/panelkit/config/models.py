"""
Pydantic models for validating panel configuration files.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigError


class RootsConfig(BaseModel):
    """
    Filesystem roots of the installation.

    Attributes:
        index: Public document root; custom assets are resolved against it.
        panel: Panel source folder containing `dist/` and `public/`.
        media: Public media folder receiving the linked panel assets.
        plugins: Folder with one sub-folder per plugin.
    """
    model_config = ConfigDict(extra="forbid")

    index: Path = Path(".")
    panel: Optional[Path] = None
    media: Optional[Path] = None
    plugins: Optional[Path] = None


class UrlsConfig(BaseModel):
    """
    Public base URLs. `media` defaults to `<index>/media`.
    """
    model_config = ConfigDict(extra="forbid")

    index: str = "/"
    media: Optional[str] = None


class AreaConfig(BaseModel):
    """
    A panel area as declared in the configuration file.
    """
    model_config = ConfigDict(extra="forbid")

    label: Optional[str] = None
    icon: Optional[str] = None
    link: Optional[str] = None
    dialog: Optional[str] = None
    drawer: Optional[str] = None
    menu: Union[bool, Literal["disabled"], Dict[str, Any]] = False
    current: Optional[bool] = None

    def definition(self) -> Dict[str, Any]:
        """Return the area as plain dict, leaving out unset keys."""
        return self.model_dump(exclude_none=True)


class PanelConfig(BaseModel):
    """
    Top-level configuration for a panel installation.

    Attributes:
        version: Application version; its hash namespaces the linked assets.
        request_url: URL of the request being served (defaults to the index URL).
        current: Id of the currently active area.
        roots: Filesystem roots.
        urls: Public base URLs.
        options: Free-form option tree, looked up with dotted keys (e.g. "panel.dev").
        permissions: Permission map, e.g. {"access": {"users": false}}.
        areas: Registered areas in registry order.
        translations: Message id overrides for the translator.
    """
    model_config = ConfigDict(extra="forbid")

    version: str = "0.0.0"
    request_url: Optional[str] = None
    current: Optional[str] = None
    roots: RootsConfig = Field(default_factory=RootsConfig)
    urls: UrlsConfig = Field(default_factory=UrlsConfig)
    options: Dict[str, Any] = Field(default_factory=dict)
    permissions: Dict[str, Dict[str, bool]] = Field(default_factory=dict)
    areas: Dict[str, AreaConfig] = Field(default_factory=dict)
    translations: Dict[str, str] = Field(default_factory=dict)

    def area_definitions(self) -> Dict[str, Dict[str, Any]]:
        return {area_id: area.definition() for area_id, area in self.areas.items()}


def load_config(path: Path | str) -> PanelConfig:
    """
    Load and validate a TOML config file into a PanelConfig instance.

    Relative roots are resolved against the directory holding the file.

    Args:
        path: Path to the TOML configuration file.

    Returns:
        A validated PanelConfig object.

    Raises:
        ConfigError: If the file is missing, unreadable, or invalid.
    """
    config_path = Path(path).expanduser().resolve()
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with config_path.open("rb") as handle:
            raw_data: Dict[str, Any] = tomllib.load(handle)
    except OSError as exc:
        raise ConfigError(f"Unable to read configuration file: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in configuration file: {exc}") from exc

    try:
        config = PanelConfig.model_validate(raw_data)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc

    return _resolve_roots(config, config_path.parent)


def _resolve_roots(config: PanelConfig, base: Path) -> PanelConfig:
    """
    Make all roots absolute and fill the ones derived from the index root.
    """
    roots = config.roots
    index = _absolute(roots.index, base)
    resolved = RootsConfig(
        index=index,
        panel=_absolute(roots.panel, base) if roots.panel else index / "panel",
        media=_absolute(roots.media, base) if roots.media else index / "media",
        plugins=_absolute(roots.plugins, base) if roots.plugins else index / "site" / "plugins",
    )
    return config.model_copy(update={"roots": resolved})


def _absolute(path: Path, base: Path) -> Path:
    candidate = path.expanduser()
    if not candidate.is_absolute():
        candidate = base / candidate
    return candidate.resolve()
