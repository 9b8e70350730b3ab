"""Jamo classification and role conversion (domain layer).

This module contains *no* Qt/UI dependencies.

It centralises:
- The Unicode ranges that decide a code point's jamo role
- The fixed index tables used to convert between positional jamo
  (initial / medial / final, only valid inside a syllable block) and
  compatibility jamo (standalone consonants / vowels)

Primary API:
- classify(code_point) -> Jamo
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Optional

from hangul_ime.domain.enums import JamoRole


# -----------------------------------------------------------------------------
# Unicode ranges
# -----------------------------------------------------------------------------

# (first, last) inclusive. Classification ranges are wider than the "modern"
# ranges: archaic jamo still get a role but never combine.
_CLASSIFY_RANGES: Final[tuple[tuple[JamoRole, int, int], ...]] = (
    (JamoRole.CONSONANT, 0x3131, 0x314E),
    (JamoRole.VOWEL, 0x314F, 0x3163),
    (JamoRole.INITIAL, 0x1100, 0x115F),
    (JamoRole.MEDIAL, 0x1160, 0x11A7),
    (JamoRole.FINAL, 0x11A8, 0x11FF),
)

_MODERN_RANGES: Final[dict[JamoRole, tuple[int, int]]] = {
    JamoRole.INITIAL: (0x1100, 0x1112),
    JamoRole.MEDIAL: (0x1161, 0x1175),
    JamoRole.FINAL: (0x11A8, 0x11C2),
    JamoRole.CONSONANT: (0x3131, 0x314E),
    JamoRole.VOWEL: (0x314F, 0x3163),
}

# Finals are 1-based: ordinal 0 means "no final" in the syllable formula.
_ORDINAL_BASE: Final[dict[JamoRole, int]] = {
    JamoRole.INITIAL: 0x1100,
    JamoRole.MEDIAL: 0x1161,
    JamoRole.FINAL: 0x11A7,
    JamoRole.CONSONANT: 0x3131,
    JamoRole.VOWEL: 0x314F,
}


# -----------------------------------------------------------------------------
# Conversion tables
# -----------------------------------------------------------------------------
#
# Index-aligned with COMPAT_CONSONANTS / COMPAT_VOWELS. None marks a
# compatibility jamo that has no positional form in that role (e.g. ㄳ can
# end a syllable but never start one).

COMPAT_CONSONANTS: Final[tuple[str, ...]] = (
    "ㄱ", "ㄲ", "ㄳ", "ㄴ", "ㄵ", "ㄶ", "ㄷ", "ㄸ", "ㄹ", "ㄺ",
    "ㄻ", "ㄼ", "ㄽ", "ㄾ", "ㄿ", "ㅀ", "ㅁ", "ㅂ", "ㅃ", "ㅄ",
    "ㅅ", "ㅆ", "ㅇ", "ㅈ", "ㅉ", "ㅊ", "ㅋ", "ㅌ", "ㅍ", "ㅎ",
)

COMPAT_VOWELS: Final[tuple[str, ...]] = (
    "ㅏ", "ㅐ", "ㅑ", "ㅒ", "ㅓ", "ㅔ", "ㅕ", "ㅖ", "ㅗ", "ㅘ", "ㅙ",
    "ㅚ", "ㅛ", "ㅜ", "ㅝ", "ㅞ", "ㅟ", "ㅠ", "ㅡ", "ㅢ", "ㅣ",
)

CONVERT_INITIALS: Final[tuple[Optional[str], ...]] = (
    "ᄀ", "ᄁ", None, "ᄂ", None, None, "ᄃ", "ᄄ", "ᄅ", None,
    None, None, None, None, None, None, "ᄆ", "ᄇ", "ᄈ", None,
    "ᄉ", "ᄊ", "ᄋ", "ᄌ", "ᄍ", "ᄎ", "ᄏ", "ᄐ", "ᄑ", "ᄒ",
)

CONVERT_MEDIALS: Final[tuple[Optional[str], ...]] = (
    "ᅡ", "ᅢ", "ᅣ", "ᅤ", "ᅥ", "ᅦ", "ᅧ", "ᅨ", "ᅩ", "ᅪ", "ᅫ",
    "ᅬ", "ᅭ", "ᅮ", "ᅯ", "ᅰ", "ᅱ", "ᅲ", "ᅳ", "ᅴ", "ᅵ",
)

CONVERT_FINALS: Final[tuple[Optional[str], ...]] = (
    "ᆨ", "ᆩ", "ᆪ", "ᆫ", "ᆬ", "ᆭ", "ᆮ", None, "ᆯ", "ᆰ",
    "ᆱ", "ᆲ", "ᆳ", "ᆴ", "ᆵ", "ᆶ", "ᆷ", "ᆸ", None, "ᆹ",
    "ᆺ", "ᆻ", "ᆼ", "ᆽ", None, "ᆾ", "ᆿ", "ᇀ", "ᇁ", "ᇂ",
)

_CONSONANT_INDEX: Final[dict[str, int]] = {j: i for i, j in enumerate(COMPAT_CONSONANTS)}
_VOWEL_INDEX: Final[dict[str, int]] = {j: i for i, j in enumerate(COMPAT_VOWELS)}
_INITIAL_INDEX: Final[dict[str, int]] = {j: i for i, j in enumerate(CONVERT_INITIALS) if j}
_MEDIAL_INDEX: Final[dict[str, int]] = {j: i for i, j in enumerate(CONVERT_MEDIALS) if j}
_FINAL_INDEX: Final[dict[str, int]] = {j: i for i, j in enumerate(CONVERT_FINALS) if j}


def _lookup(
    index: dict[str, int], table: tuple[Optional[str], ...], code_point: int
) -> Optional[int]:
    """Map a code point through an index dict into an aligned table."""
    try:
        i = index.get(chr(code_point))
    except (ValueError, OverflowError):
        return None
    if i is None:
        return None
    target = table[i]
    return ord(target) if target else None


# -----------------------------------------------------------------------------
# Jamo value
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Jamo:
    """A code point tagged with its jamo role.

    The role set is closed (see JamoRole). Conversions return None rather than
    raising when there is no equivalent, including when called on a role the
    conversion does not apply to.
    """

    role: JamoRole
    code_point: int

    @property
    def modern(self) -> bool:
        bounds = _MODERN_RANGES.get(self.role)
        if bounds is None:
            return False
        return bounds[0] <= self.code_point <= bounds[1]

    @property
    def ordinal(self) -> int:
        """Position inside the role's modern subrange (-1 for non-Hangul)."""
        base = _ORDINAL_BASE.get(self.role)
        if base is None:
            return -1
        return self.code_point - base

    @property
    def text(self) -> str:
        try:
            return chr(self.code_point)
        except (ValueError, OverflowError):
            return ""

    # --- positional -> compatibility ---

    def to_consonant(self) -> Optional[Jamo]:
        if self.role is JamoRole.INITIAL:
            cp = _lookup(_INITIAL_INDEX, COMPAT_CONSONANTS, self.code_point)
        elif self.role is JamoRole.FINAL:
            cp = _lookup(_FINAL_INDEX, COMPAT_CONSONANTS, self.code_point)
        else:
            return None
        return Jamo(JamoRole.CONSONANT, cp) if cp is not None else None

    def to_vowel(self) -> Optional[Jamo]:
        if self.role is not JamoRole.MEDIAL:
            return None
        cp = _lookup(_MEDIAL_INDEX, COMPAT_VOWELS, self.code_point)
        return Jamo(JamoRole.VOWEL, cp) if cp is not None else None

    # --- compatibility -> positional ---

    def to_initial(self) -> Optional[Jamo]:
        if self.role is not JamoRole.CONSONANT:
            return None
        cp = _lookup(_CONSONANT_INDEX, CONVERT_INITIALS, self.code_point)
        return Jamo(JamoRole.INITIAL, cp) if cp is not None else None

    def to_final(self) -> Optional[Jamo]:
        if self.role is not JamoRole.CONSONANT:
            return None
        cp = _lookup(_CONSONANT_INDEX, CONVERT_FINALS, self.code_point)
        return Jamo(JamoRole.FINAL, cp) if cp is not None else None

    def to_medial(self) -> Optional[Jamo]:
        if self.role is not JamoRole.VOWEL:
            return None
        cp = _lookup(_VOWEL_INDEX, CONVERT_MEDIALS, self.code_point)
        return Jamo(JamoRole.MEDIAL, cp) if cp is not None else None

    def to_compatibility(self) -> Optional[Jamo]:
        """Return the standalone form of this jamo, if it has one."""
        if self.role.is_compatibility:
            return self
        if self.role is JamoRole.MEDIAL:
            return self.to_vowel()
        return self.to_consonant()


# -----------------------------------------------------------------------------
# Classification
# -----------------------------------------------------------------------------

def classify(code_point: int) -> Jamo:
    """Classify any integer code point into a Jamo. Never raises."""
    for role, first, last in _CLASSIFY_RANGES:
        if first <= code_point <= last:
            return Jamo(role, code_point)
    return Jamo(JamoRole.NON_HANGUL, code_point)


def classify_char(ch: str) -> Jamo:
    """Classify the first character of `ch` (NON_HANGUL for an empty string)."""
    if not ch:
        return Jamo(JamoRole.NON_HANGUL, -1)
    return classify(ord(ch[0]))


def is_hangul_jamo(code_point: int) -> bool:
    return classify(code_point).role is not JamoRole.NON_HANGUL
