"""
Server-side view rendering.

A view is a Python template file. Rendering executes the file with the view
data bound as globals and returns everything it printed.
"""

from __future__ import annotations

import io
import logging
from contextlib import redirect_stdout
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from ..config import ViewNotFoundError
from ..util import is_readable_file

logger = logging.getLogger(__name__)


class View:
    """
    Wraps a template file and the data it is rendered with.

    Args:
        file: Path to the template file.
        data: Values made available to the template as global names.
    """

    def __init__(self, file: Path | str, data: Optional[Mapping[str, Any]] = None) -> None:
        self._file = file
        self._data = data if data is not None else {}

    def data(self) -> Mapping[str, Any]:
        return self._data

    def exists(self) -> bool:
        return is_readable_file(self._file)

    def file(self) -> Path | str:
        return self._file

    def render(self, data: Optional[Mapping[str, Any]] = None) -> str:
        """
        Execute the template and return its captured output.

        Raises:
            ViewNotFoundError: If the template file does not exist.

        Any exception raised by the template itself propagates unchanged and
        the output captured so far is discarded.
        """
        if not self.exists():
            raise ViewNotFoundError(f"The view does not exist: {self._file}")

        scope: Dict[str, Any] = {**self._data, **(data or {})}
        scope.setdefault("__file__", str(self._file))
        scope.setdefault("__name__", "__view__")
        source = Path(self._file).read_text(encoding="utf-8")
        buffer = io.StringIO()
        logger.debug("Rendering view %s", self._file)
        with redirect_stdout(buffer):
            exec(compile(source, str(self._file), "exec"), scope)
        return buffer.getvalue()

    def to_string(self) -> str:
        return self.render()

    def __str__(self) -> str:
        return self.render()
