"""
Collect the js, css and icon files for the panel.

Assets are served either from the linked copy of the panel distribution in
the media folder or, in dev mode, from the Vite dev server.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from ..app import App
from ..config import AssetLinkError, InvalidFaviconError
from ..util import (
    atomic_copy_directory,
    file_lock,
    is_readable_file,
    is_relative_to,
    mime_type,
    modified,
    read_text,
    remove_directory,
)
from .plugins import Plugins

logger = logging.getLogger(__name__)

VITE_MARKER = ".vite-running"
DEV_SERVER_PORT = 3000


class Asset:
    """
    A file below the index root, addressed by its relative path.
    """

    def __init__(self, app: App, path: str) -> None:
        self.app = app
        self.path = path.strip("/")
        self.root = app.root("index") / self.path

    def exists(self) -> bool:
        index = self.app.root("index").resolve()
        return is_relative_to(self.root.resolve(), index) and is_readable_file(self.root)

    def modified(self) -> int:
        return modified(self.root)

    def url(self) -> str:
        return f"{self.app.url('index')}/{self.path}"


class Assets:
    """
    Resolves all asset URLs for one panel request.

    Dev mode is active when the Vite dev server left its marker file in the
    panel root and `panel.dev` is enabled in the options.
    """

    def __init__(self, app: App) -> None:
        self.app = app
        self.nonce = app.nonce
        self.plugins = Plugins(app)
        self.vite = (app.root("panel") / VITE_MARKER).is_file()
        self.dev = app.option("panel.dev", False) is not False and self.vite
        logger.debug("Panel assets in %s mode", "dev" if self.dev else "production")
        self.base_url = self.url()

    def css(self) -> Dict[str, str]:
        css = {
            "index": f"{self.base_url}/css/style.css",
            "plugins": self.plugins.url("css"),
            "custom": self.custom("panel.css"),
        }

        # the dev server injects styles itself
        if self.dev:
            css["index"] = None

        return {key: value for key, value in css.items() if value}

    def custom(self, option: str) -> Optional[str]:
        """
        URL of a custom asset configured by option (e.g. panel.css), with
        its modification time appended for cache busting.
        """
        path = self.app.option(option)
        if path:
            asset = Asset(self.app, str(path))
            if asset.exists():
                return f"{asset.url()}?{asset.modified()}"
        return None

    def external(self) -> Dict[str, Any]:
        """
        Everything the panel page needs to load.
        """
        return {
            "css": self.css(),
            "icons": self.favicons(),
            # inlined loader for the plugins' index.dev.mjs files
            "plugin-imports": self.plugins.read("mjs"),
            "js": self.js(),
        }

    def favicons(self) -> Any:
        """
        Favicons as configured by `panel.favicon`.

        Raises:
            InvalidFaviconError: If the option is neither a mapping nor a path.
        """
        icons = self.app.option("panel.favicon")
        if icons is None:
            icons = {
                "apple-touch-icon": {
                    "type": "image/png",
                    "url": f"{self.base_url}/apple-touch-icon.png",
                },
                "alternate icon": {
                    "type": "image/png",
                    "url": f"{self.base_url}/favicon.png",
                },
                "shortcut icon": {
                    "type": "image/svg+xml",
                    "url": f"{self.base_url}/favicon.svg",
                },
            }

        if isinstance(icons, (Mapping, list)):
            return icons

        if isinstance(icons, str):
            return {
                "shortcut icon": {
                    "type": mime_type(icons),
                    "url": icons,
                }
            }

        raise InvalidFaviconError("Invalid panel.favicon option")

    def icons(self) -> str:
        """
        SVG icon sprite injected into the initial panel document.
        """
        folder = "public" if self.dev else "dist"
        return read_text(self.app.root("panel") / folder / "img" / "icons.svg")

    def js(self) -> Dict[str, Dict[str, Any]]:
        js: Dict[str, Dict[str, Any]] = {
            "vue": {
                "nonce": self.nonce,
                "src": f"{self.base_url}/js/vue.js",
            },
            "vendor": {
                "nonce": self.nonce,
                "src": f"{self.base_url}/js/vendor.js",
                "type": "module",
            },
            "pluginloader": {
                "nonce": self.nonce,
                "src": f"{self.base_url}/js/plugins.js",
                "type": "module",
            },
            "plugins": {
                "nonce": self.nonce,
                "src": self.plugins.url("js"),
                "defer": True,
            },
            "custom": {
                "nonce": self.nonce,
                "src": self.custom("panel.js"),
                "type": "module",
            },
            "index": {
                "nonce": self.nonce,
                "src": f"{self.base_url}/js/index.js",
                "type": "module",
            },
        }

        # the dev server bundles vendor code on the fly
        if self.dev:
            js["vite"] = {
                "nonce": self.nonce,
                "src": f"{self.base_url}/@vite/client",
                "type": "module",
            }
            js["index"] = {
                "nonce": self.nonce,
                "src": f"{self.base_url}/src/index.js",
                "type": "module",
            }
            js["vue"]["src"] = f"{self.base_url}/node_modules/vue/dist/vue.js"
            js["vendor"]["src"] = None

        return {key: script for key, script in js.items() if script.get("src")}

    def link(self) -> bool:
        """
        Copy the panel distribution into a versioned media folder.

        Returns:
            False if the current version is already linked, True otherwise.

        Raises:
            AssetLinkError: If the distribution could not be copied.
        """
        media_root = self.app.root("media") / "panel"
        dist_root = self.app.root("panel") / "dist"
        version_root = media_root / self.app.version_hash()

        if version_root.is_dir():
            return False

        with file_lock(media_root):
            # linked by a concurrent request while waiting for the lock
            if version_root.is_dir():
                return False

            try:
                atomic_copy_directory(dist_root, version_root)
            except OSError as exc:
                raise AssetLinkError("Panel assets could not be linked") from exc

            self._remove_previous_versions(media_root, keep=version_root)

        logger.info("Linked panel assets from %s to %s", dist_root, version_root)
        return True

    def url(self) -> str:
        """
        Base URL for all panel assets depending on dev mode.
        """
        if not self.dev:
            return f"{self.app.url('media')}/panel/{self.app.version_hash()}"

        dev = self.app.option("panel.dev", False)
        if isinstance(dev, str):
            return dev

        return self.app.request.origin(port=DEV_SERVER_PORT).rstrip("/")

    @staticmethod
    def _remove_previous_versions(media_root: Path, keep: Path) -> None:
        for path in media_root.iterdir():
            if path == keep:
                continue
            logger.debug("Removing previous panel assets %s", path)
            try:
                if path.is_dir():
                    remove_directory(path)
                else:
                    path.unlink()
            except OSError as exc:
                logger.warning("Could not remove previous panel assets %s (%s)", path, exc)
