import sys
from pathlib import Path

import pytest

from panelkit.config import ViewNotFoundError
from panelkit.toolkit import View

FIXTURES = Path(__file__).parent / "fixtures" / "view"


def _view(data=None) -> View:
    return View(FIXTURES / "view.py", data)


def test_data_is_passed_through() -> None:
    assert _view().data() == {}

    data = {"name": "Homer", "items": [1, 2]}
    assert _view(data).data() is data


def test_exists() -> None:
    assert _view().exists() is True
    assert View(FIXTURES / "foo.py").exists() is False
    assert View(FIXTURES).exists() is False


def test_file() -> None:
    assert _view().file() == FIXTURES / "view.py"


def test_render() -> None:
    assert _view({"name": "Homer"}).render() == "Hello Homer"


def test_render_merges_extra_data() -> None:
    view = _view({"name": "Homer"})
    assert view.render({"name": "Marge"}) == "Hello Marge"
    assert view.data() == {"name": "Homer"}


def test_render_with_missing_file() -> None:
    view = View("invalid-file.php")
    with pytest.raises(ViewNotFoundError, match="The view does not exist: invalid-file.php"):
        view.render()


def test_render_with_exception_discards_output(capsys: pytest.CaptureFixture[str]) -> None:
    view = View(FIXTURES / "view_with_exception.py")
    with pytest.raises(ValueError, match="View exception"):
        view.render()

    assert "partial output" not in capsys.readouterr().out


def test_to_string() -> None:
    view = _view({"name": "Tester"})
    assert view.to_string() == "Hello Tester"
    assert view.__str__() == "Hello Tester"
    assert str(view) == "Hello Tester"


def test_render_without_argv(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(sys, "argv", [])
    assert _view({"name": "Homer"}).render() == "Hello Homer"
