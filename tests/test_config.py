from pathlib import Path
import textwrap

import pytest

from panelkit.config import ConfigError, load_config


def _write_config(tmp_path: Path, body: str) -> Path:
    path = tmp_path / "panel.toml"
    path.write_text(textwrap.dedent(body).strip() + "\n", encoding="utf-8")
    return path


def test_load_config(sample_config: Path, site_root: Path) -> None:
    config = load_config(sample_config)

    assert config.version == "4.0.0"
    assert config.current == "site"
    assert config.roots.panel == site_root.resolve() / "panel"
    assert config.roots.media == site_root.resolve() / "media"
    assert config.permissions == {"access": {"system": False}}
    assert list(config.area_definitions()) == ["site", "users", "system"]
    assert config.area_definitions()["site"] == {"label": "Site", "icon": "home", "menu": True}


def test_relative_roots_resolve_against_config_dir(tmp_path: Path) -> None:
    path = _write_config(
        tmp_path,
        """
        [roots]
        index = "public"
        panel = "vendor/panel"
        """,
    )
    config = load_config(path)
    assert config.roots.index == tmp_path.resolve() / "public"
    assert config.roots.panel == tmp_path.resolve() / "vendor" / "panel"
    assert config.roots.plugins == tmp_path.resolve() / "public" / "site" / "plugins"


def test_menu_definition_with_mixed_items(tmp_path: Path) -> None:
    path = _write_config(
        tmp_path,
        """
        [options.panel]
        menu = ["site", "-", { docs = { label = "Docs", link = "docs" } }]
        """,
    )
    config = load_config(path)
    assert config.options["panel"]["menu"][2] == {"docs": {"label": "Docs", "link": "docs"}}


def test_rejects_unknown_keys(tmp_path: Path) -> None:
    path = _write_config(
        tmp_path,
        """
        version = "1.0.0"
        unexpected = "nope"
        """,
    )
    with pytest.raises(ConfigError) as exc:
        load_config(path)

    assert "extra" in str(exc.value).lower()


def test_rejects_invalid_area_menu(tmp_path: Path) -> None:
    path = _write_config(
        tmp_path,
        """
        [areas.site]
        menu = "hidden"
        """,
    )
    with pytest.raises(ConfigError) as exc:
        load_config(path)

    assert "menu" in str(exc.value)


def test_invalid_toml(tmp_path: Path) -> None:
    path = _write_config(tmp_path, "version = ")
    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_config(path)


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path / "missing.toml")
