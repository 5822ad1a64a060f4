"""
Aggregate the panel assets shipped by plugins.
"""

from __future__ import annotations

import base64
import logging
from pathlib import Path
from typing import List, Optional

from ..app import App
from ..util import modified

logger = logging.getLogger(__name__)

PLUGIN_FILES = ("index.css", "index.js", "index.dev.mjs")


class Plugins:
    """
    Collects `index.css`, `index.js` and `index.dev.mjs` from every plugin
    folder below the plugins root.
    """

    def __init__(self, app: App) -> None:
        self.app = app
        self._files: Optional[List[Path]] = None

    def files(self) -> List[Path]:
        if self._files is not None:
            return self._files

        root = self.app.root("plugins")
        files: List[Path] = []
        if root.is_dir():
            for plugin in sorted(path for path in root.iterdir() if path.is_dir()):
                files.extend(plugin / name for name in PLUGIN_FILES if (plugin / name).is_file())
        logger.debug("Found %d plugin asset file(s) in %s", len(files), root)
        self._files = files
        return files

    def modified(self) -> int:
        """Newest modification time of all plugin files (0 without plugins)."""
        return max((modified(path) for path in self.files()), default=0)

    def read(self, extension: str) -> str:
        """
        Concatenated plugin code for one file type.

        For `mjs`, returns a loader that imports every dev module as data URI.
        """
        chunks: List[str] = []
        for path in self._files_with(extension):
            try:
                content = path.read_text(encoding="utf-8").strip()
            except OSError as exc:
                logger.warning("Skipping unreadable plugin file %s (%s)", path, exc)
                continue
            if not content:
                continue
            if extension == "mjs":
                encoded = base64.b64encode(content.encode("utf-8")).decode("ascii")
                content = f"data:text/javascript;base64,{encoded}"
            elif extension == "js" and not content.endswith(";"):
                content += ";"
            chunks.append(content)

        if extension == "mjs":
            if not chunks:
                return ""
            imports = ", ".join(f'import("{uri}")' for uri in chunks)
            return f"try {{ await Promise.all([{imports}]) }} catch (e) {{ console.error(e) }}"

        return "\n\n".join(chunks)

    def url(self, extension: str) -> Optional[str]:
        """
        Media URL of the bundled plugin file, busting caches with the newest mtime.
        """
        if not self._files_with(extension):
            return None
        return f"{self.app.url('media')}/plugins/index.{extension}?{self.modified()}"

    def _files_with(self, extension: str) -> List[Path]:
        return [path for path in self.files() if path.suffix == f".{extension}"]
