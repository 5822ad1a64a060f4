import base64
import os
from pathlib import Path

import pytest

from panelkit.panel import Plugins


@pytest.fixture
def plugins_root(site_root: Path) -> Path:
    root = site_root / "site" / "plugins"
    files = {
        "alpha/index.css": ".alpha { color: red }",
        "alpha/index.js": "panel.plugin('alpha', {})",
        "beta/index.js": "panel.plugin('beta', {});",
        "beta/index.dev.mjs": "export default {}",
        "beta/README.md": "not an asset",
    }
    for index, (name, content) in enumerate(sorted(files.items())):
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        os.utime(path, (1700000000 + index, 1700000000 + index))
    return root


def test_files(make_app, plugins_root: Path) -> None:
    files = Plugins(make_app()).files()
    assert [str(path.relative_to(plugins_root)) for path in files] == [
        "alpha/index.css",
        "alpha/index.js",
        "beta/index.js",
        "beta/index.dev.mjs",
    ]


def test_modified(make_app, plugins_root: Path) -> None:
    assert Plugins(make_app()).modified() == 1700000004


def test_url(make_app, plugins_root: Path) -> None:
    plugins = Plugins(make_app())
    assert plugins.url("css") == "https://example.com/media/plugins/index.css?1700000004"
    assert plugins.url("js") == "https://example.com/media/plugins/index.js?1700000004"
    assert plugins.url("txt") is None


def test_read(make_app, plugins_root: Path) -> None:
    plugins = Plugins(make_app())
    assert plugins.read("css") == ".alpha { color: red }"
    assert plugins.read("js") == "panel.plugin('alpha', {});\n\npanel.plugin('beta', {});"


def test_read_mjs(make_app, plugins_root: Path) -> None:
    encoded = base64.b64encode(b"export default {}").decode("ascii")
    loader = Plugins(make_app()).read("mjs")
    assert loader == (
        f'try {{ await Promise.all([import("data:text/javascript;base64,{encoded}")]) }} '
        "catch (e) { console.error(e) }"
    )


def test_without_plugins(make_app) -> None:
    plugins = Plugins(make_app())
    assert plugins.files() == []
    assert plugins.modified() == 0
    assert plugins.read("mjs") == ""
    assert plugins.read("js") == ""
    assert plugins.url("css") is None
