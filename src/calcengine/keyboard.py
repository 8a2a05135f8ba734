"""Translation of physical key events into actions."""

from __future__ import annotations

from dataclasses import dataclass

from calcengine.actions import Action
from calcengine.classifier import classify

# Key names that differ from the classifier's token for the same action
KEY_ALIASES = {
    "NumpadEnter": "Enter",
    "Return": "Enter",
    "Delete": "Backspace",
    "Esc": "Escape",
    ",": ".",
}


@dataclass(frozen=True)
class KeyEvent:
    """A key press as reported by a UI toolkit."""

    key: str
    ctrl: bool = False
    alt: bool = False
    meta: bool = False

    @property
    def has_command_modifier(self) -> bool:
        return self.ctrl or self.alt or self.meta


class KeyboardAdapter:
    """
    Turns key events into actions.

    Presses with Ctrl, Alt or Meta held are shortcuts for the host
    application (copy, paste, ...) and produce no action.

    Example:
        >>> KeyboardAdapter().translate(KeyEvent("Escape"))
        AllClear()
    """

    def __init__(self, aliases: dict[str, str] | None = None) -> None:
        self.aliases = dict(KEY_ALIASES)
        if aliases:
            self.aliases.update(aliases)

    def to_token(self, event: KeyEvent) -> str | None:
        if event.has_command_modifier:
            return None
        return self.aliases.get(event.key, event.key)

    def translate(self, event: KeyEvent) -> Action | None:
        token = self.to_token(event)
        if token is None:
            return None
        return classify(token)
