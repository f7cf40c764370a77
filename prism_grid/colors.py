"""Additive light color model."""

from __future__ import annotations

from enum import IntFlag
from typing import Union


class LightColor(IntFlag):
    """Three-bit additive color. Mixing is bitwise union."""

    NONE = 0
    RED = 1
    GREEN = 2
    BLUE = 4

    YELLOW = RED | GREEN
    PURPLE = RED | BLUE
    CYAN = GREEN | BLUE
    WHITE = RED | GREEN | BLUE

    def contains(self, component: "LightColor") -> bool:
        """Return True when every component of *component* is present in this color.

        ``WHITE.contains(PURPLE)`` is True, ``RED.contains(BLUE)`` is False and
        every color contains ``NONE``.
        """
        return (self & component) == component

    def is_primary(self) -> bool:
        return self in (LightColor.RED, LightColor.GREEN, LightColor.BLUE)

    def component_count(self) -> int:
        return sum(1 for primary in PRIMARIES if self & primary)

    @staticmethod
    def from_value(value: int) -> "LightColor":
        value = int(value)
        if not 0 <= value <= int(LightColor.WHITE):
            raise ValueError(f"Light color value out of range: {value}")
        return LightColor(value)

    @staticmethod
    def from_name(name: Union[str, int]) -> "LightColor":
        """Parse a color from level data: a name such as ``"purple"`` or an int."""
        if isinstance(name, LightColor):
            return name
        if isinstance(name, int):
            return LightColor.from_value(name)
        key = str(name).strip().upper()
        if key.isdigit():
            return LightColor.from_value(int(key))
        if key == "MAGENTA":
            key = "PURPLE"
        try:
            return LightColor[key]
        except KeyError as exc:
            raise ValueError(f"Unknown light color: {name}") from exc


PRIMARIES = (LightColor.RED, LightColor.GREEN, LightColor.BLUE)


def mix(*colors: LightColor) -> LightColor:
    """Additively mix any number of colors. ``mix()`` is ``NONE``."""
    result = LightColor.NONE
    for color in colors:
        result |= color
    return LightColor(result)
