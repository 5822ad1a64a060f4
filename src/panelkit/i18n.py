"""
Minimal message translation for panel labels.
"""

from __future__ import annotations

from typing import Dict, Mapping, Optional

DEFAULT_MESSAGES: Dict[str, str] = {
    "changes": "Changes",
    "logout": "Log out",
    "view.account": "Your account",
}


class Translator:
    """
    Looks up display texts by message id.

    Configured messages take precedence over the built-in English defaults.
    Unknown ids fall back to the supplied fallback or to the id itself.
    """

    def __init__(self, messages: Optional[Mapping[str, str]] = None) -> None:
        self.messages: Dict[str, str] = {**DEFAULT_MESSAGES, **(messages or {})}

    def translate(self, key: str, fallback: Optional[str] = None) -> str:
        if key in self.messages:
            return self.messages[key]
        return fallback if fallback is not None else key
