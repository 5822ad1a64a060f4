"""
Assemble the panel sidebar menu from area definitions and permissions.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from ..app import App
from .area import SEPARATOR, normalize_area, resolve

logger = logging.getLogger(__name__)

DEFAULT_AREAS = ("site", "languages", "users", "system")

MenuEntry = Dict[str, Any]
MenuItem = Union[MenuEntry, str]


class Menu:
    """
    Gathers all menu entries for the panel.

    Args:
        app: Application context (options, request, translator).
        areas: Registered areas by id, in registry order.
        permissions: Permission map, e.g. {"access": {"users": False}}.
        current: Id of the currently active area.
    """

    def __init__(
        self,
        app: App,
        areas: Optional[Mapping[str, Mapping[str, Any]]] = None,
        permissions: Optional[Mapping[str, Any]] = None,
        current: Optional[str] = None,
    ) -> None:
        self.app = app
        self._areas: Dict[str, Mapping[str, Any]] = dict(areas or {})
        self.permissions: Mapping[str, Any] = permissions or {}
        self.current = current

    def areas(self) -> List[Any]:
        """
        Areas (and separators) in menu order, as configured by `panel.menu`.
        """
        config = resolve(self.app.option("panel.menu"), self.app)
        if config is None:
            return self.default_areas()
        return self.custom_entries(config)

    def default_areas(self) -> List[Dict[str, Any]]:
        ordered = list(DEFAULT_AREAS) + [area_id for area_id in self._areas if area_id not in DEFAULT_AREAS]
        return [normalize_area(area_id, self._areas[area_id]) for area_id in ordered if area_id in self._areas]

    def custom_entries(self, config: Any) -> List[Any]:
        """
        Resolve an explicit menu definition.

        `config` is either a mapping of id -> definition or a list whose items
        are the separator, a bare area id, or a mapping of id -> definition.
        """
        entries: List[Any] = []

        for area_id, entry in _definition_items(config):
            if entry == SEPARATOR:
                entries.append(SEPARATOR)
                continue

            if area_id is None:
                # a bare id refers to the registered area
                area_id = entry
                entry = self._areas.get(area_id)
            elif isinstance(entry, Mapping) and entry.get("link"):
                entry = dict(entry)
                if entry.get("current") is None:
                    entry["current"] = self._link_matcher(entry["link"])

            if not isinstance(entry, Mapping):
                logger.debug("Skipping unknown menu area %r", area_id)
                continue

            merged = {**self._areas.get(area_id, {}), "menu": True, **entry}
            entries.append(normalize_area(area_id, merged))

        return entries

    def _link_matcher(self, link: str) -> Callable[[Optional[str]], bool]:
        def is_current(current: Optional[str]) -> bool:
            return link in self.app.request.path()

        return is_current

    def entry(self, area: Mapping[str, Any]) -> Union[MenuEntry, bool]:
        """
        Transform an area definition into a menu entry, or False to drop it.
        """
        if not self.has_permission(area["id"]):
            logger.debug("No access to area %s; hiding menu entry", area["id"])
            return False

        menu = resolve(area.get("menu", False), self._areas, self.permissions, self.current)

        if menu is False:
            return False

        if menu == "disabled":
            overrides: Mapping[str, Any] = {"disabled": True}
        elif isinstance(menu, Mapping):
            overrides = menu
        else:
            overrides = {}

        entry: MenuEntry = {
            "current": self.is_current(area["id"], area.get("current")),
            "icon": area.get("icon"),
            "link": area.get("link"),
            "dialog": area.get("dialog"),
            "drawer": area.get("drawer"),
            "text": area.get("label"),
            **overrides,
        }

        # dialogs and drawers replace the default link
        if entry.get("dialog") is not None or entry.get("drawer") is not None:
            entry.pop("link", None)

        return {key: value for key, value in entry.items() if value}

    def entries(self) -> List[MenuItem]:
        entries: List[MenuItem] = []

        for area in self.areas():
            if area == SEPARATOR:
                entries.append(SEPARATOR)
            else:
                entry = self.entry(area)
                if entry:
                    entries.append(entry)

        entries.append(SEPARATOR)
        return entries + self.options()

    def has_permission(self, area_id: str) -> bool:
        """
        Whether access to an area is granted. Unknown areas are accessible.
        """
        access = self.permissions.get("access") or {}
        value = access.get(area_id)
        return True if value is None else bool(value)

    def is_current(self, area_id: str, callback: Union[bool, Callable[[Optional[str]], Any], None] = None) -> bool:
        if callback is not None:
            return bool(resolve(callback, self.current))
        return self.current == area_id

    def options(self) -> List[MenuEntry]:
        """
        Fixed entries at the bottom of the menu.
        """
        translate = self.app.translator.translate
        return [
            {
                "icon": "edit-line",
                "dialog": "changes",
                "text": translate("changes"),
            },
            {
                "current": self.is_current("account"),
                "icon": "account",
                "link": "account",
                "disabled": not self.has_permission("account"),
                "text": translate("view.account"),
            },
            {
                "icon": "logout",
                "link": "logout",
                "text": translate("logout"),
            },
        ]


def _definition_items(config: Any):
    """Yield (id or None, entry) pairs of a menu definition."""
    if isinstance(config, Mapping):
        yield from config.items()
        return
    for item in config:
        if isinstance(item, Mapping):
            yield from item.items()
        else:
            yield None, item
