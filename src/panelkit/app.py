"""
Explicit application context handed to panel components.

Components never look up global state: everything they read about the
running installation (roots, URLs, options, the current request) comes from
the `App` instance passed to their constructor.
"""

from __future__ import annotations

import hashlib
import secrets
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlsplit, urlunsplit

from .config import PanelConfig
from .i18n import Translator


class Options:
    """
    Option store with dotted-key lookup.

    `get("panel.dev")` first checks for a literal "panel.dev" key and then walks
    nested mappings, so both flat and nested option trees work.
    Values set to None count as unset.
    """

    def __init__(self, values: Optional[Mapping[str, Any]] = None) -> None:
        self._values: Dict[str, Any] = dict(values or {})

    def get(self, key: str, default: Any = None) -> Any:
        """Value stored under key; missing and None values yield default."""
        if self._values.get(key) is not None:
            return self._values[key]
        node: Any = self._values
        for part in key.split("."):
            if not isinstance(node, Mapping):
                return default
            node = node.get(part)
            if node is None:
                return default
        return node

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None


@dataclass
class Request:
    """The request currently being served."""
    url: str = "/"

    def path(self) -> str:
        """Request path without leading or trailing slashes."""
        return urlsplit(self.url).path.strip("/")

    def origin(self, port: Optional[int] = None) -> str:
        """
        Scheme and host of the request URL, optionally on another port.

        Path, params, query and fragment are dropped.
        """
        parts = urlsplit(self.url)
        host = parts.hostname or ""
        if ":" in host:
            host = f"[{host}]"
        port = port if port is not None else parts.port
        netloc = f"{host}:{port}" if port is not None else host
        return urlunsplit((parts.scheme, netloc, "", "", ""))


@dataclass
class Roots:
    index: Path
    panel: Path
    media: Path
    plugins: Path

    @classmethod
    def below(cls, index: Path | str) -> "Roots":
        base = Path(index)
        return cls(index=base, panel=base / "panel", media=base / "media", plugins=base / "site" / "plugins")


@dataclass
class Urls:
    index: str
    media: str

    @classmethod
    def below(cls, index: str) -> "Urls":
        base = index.rstrip("/")
        return cls(index=base, media=f"{base}/media")


@dataclass
class App:
    """
    Application state a panel request works with.

    Attributes:
        roots: Filesystem roots (index, panel, media, plugins).
        urls: Public base URLs (index, media).
        options: Option store.
        request: Current request.
        version: Application version, hashed to namespace linked assets.
        nonce: Per-request content-security-policy nonce.
        translator: Translation lookup for panel labels.
    """
    roots: Roots
    urls: Urls
    options: Options = field(default_factory=Options)
    request: Request = field(default_factory=Request)
    version: str = "0.0.0"
    nonce: str = field(default_factory=lambda: secrets.token_urlsafe(16))
    translator: Translator = field(default_factory=Translator)

    @classmethod
    def create(
        cls,
        index: Path | str,
        url: str = "/",
        *,
        options: Optional[Mapping[str, Any]] = None,
        request_url: Optional[str] = None,
        **kwargs: Any,
    ) -> "App":
        """
        Build an app whose roots and URLs all derive from one index root/URL.
        """
        return cls(
            roots=Roots.below(index),
            urls=Urls.below(url),
            options=Options(options),
            request=Request(request_url or url),
            **kwargs,
        )

    @classmethod
    def from_config(cls, config: PanelConfig, request_url: Optional[str] = None) -> "App":
        """
        Build the app context from a validated (and root-resolved) configuration.
        """
        index_root = Path(config.roots.index)
        roots = Roots(
            index=index_root,
            panel=Path(config.roots.panel or index_root / "panel"),
            media=Path(config.roots.media or index_root / "media"),
            plugins=Path(config.roots.plugins or index_root / "site" / "plugins"),
        )
        urls = Urls.below(config.urls.index)
        if config.urls.media:
            urls.media = config.urls.media.rstrip("/")
        return cls(
            roots=roots,
            urls=urls,
            options=Options(config.options),
            request=Request(request_url or config.request_url or config.urls.index),
            version=config.version,
            translator=Translator(config.translations),
        )

    def option(self, key: str, default: Any = None) -> Any:
        return self.options.get(key, default)

    def root(self, name: str) -> Path:
        return getattr(self.roots, name)

    def url(self, name: str = "index") -> str:
        return getattr(self.urls, name)

    def version_hash(self) -> str:
        """Stable hash of the application version."""
        return hashlib.md5(self.version.encode("utf-8")).hexdigest()
