from pathlib import Path
import textwrap

import pytest
from typer.testing import CliRunner

from panelkit.app import App


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """
    Create a minimal installation with a built panel distribution.
    """
    root = tmp_path / "site"
    dist = root / "panel" / "dist"
    (dist / "css").mkdir(parents=True)
    (dist / "js").mkdir()
    (dist / "img").mkdir()
    (dist / "css" / "style.css").write_text("body { margin: 0 }\n", encoding="utf-8")
    (dist / "js" / "index.js").write_text("console.log('panel')\n", encoding="utf-8")
    (dist / "img" / "icons.svg").write_text("<svg>dist</svg>", encoding="utf-8")

    public = root / "panel" / "public" / "img"
    public.mkdir(parents=True)
    (public / "icons.svg").write_text("<svg>public</svg>", encoding="utf-8")
    return root


@pytest.fixture
def make_app(site_root: Path):
    """
    Factory building an App rooted at the test installation.
    """

    def _make(options=None, request_url=None, **kwargs) -> App:
        kwargs.setdefault("nonce", "test-nonce")
        kwargs.setdefault("version", "4.0.0")
        return App.create(
            site_root,
            "https://example.com",
            options=options,
            request_url=request_url,
            **kwargs,
        )

    return _make


@pytest.fixture
def enable_vite(site_root: Path) -> Path:
    marker = site_root / "panel" / ".vite-running"
    marker.write_text("", encoding="utf-8")
    return marker


@pytest.fixture
def sample_config(site_root: Path) -> Path:
    """
    Write a configuration file next to the test installation.
    """
    config_text = textwrap.dedent(
        f"""
        version = "4.0.0"
        request_url = "https://example.com/panel/site"
        current = "site"

        [roots]
        index = "{site_root.as_posix()}"

        [urls]
        index = "https://example.com"

        [permissions.access]
        system = false

        [areas.site]
        label = "Site"
        icon = "home"
        menu = true

        [areas.users]
        label = "Users"
        icon = "users"
        menu = true

        [areas.system]
        label = "System"
        icon = "settings"
        menu = true

        [translations]
        logout = "Sign out"
        """
    ).strip()
    path = site_root.parent / "panel.toml"
    path.write_text(config_text + "\n", encoding="utf-8")
    return path
