from __future__ import annotations

from enum import Enum, IntEnum, auto


class JamoRole(Enum):
    """Discriminant for the six kinds of code point the classifier knows."""

    NON_HANGUL = auto()
    # Positional forms, only meaningful inside a syllable block
    INITIAL = auto()
    MEDIAL = auto()
    FINAL = auto()
    # Compatibility forms, displayable on their own
    CONSONANT = auto()
    VOWEL = auto()

    @property
    def is_positional(self) -> bool:
        return self in (JamoRole.INITIAL, JamoRole.MEDIAL, JamoRole.FINAL)

    @property
    def is_compatibility(self) -> bool:
        return self in (JamoRole.CONSONANT, JamoRole.VOWEL)


class KeyCode(IntEnum):
    """Key codes carried by input events.

    Printable keys use their own code point; special keys are negative so they
    never collide with a character.
    """

    NOT_SPECIFIED = 0
    TAB = 0x09
    ENTER = 0x0A
    SPACE = 0x20

    SHIFT = -1
    DELETE = -5
    ARROW_LEFT = -21
    ARROW_RIGHT = -22
    ARROW_UP = -23
    ARROW_DOWN = -24

    # Marks a synthetic event that carries a whole string
    MULTIPLE_CODE_POINTS = -902
