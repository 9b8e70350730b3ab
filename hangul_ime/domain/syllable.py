"""Syllable state: up to one jamo per position (domain layer).

A syllable renders as a single precomposed block when all of its parts are
modern jamo, using the Unicode Hangul Syllables algorithm:

    SBase + (LIndex * VCount + VIndex) * TCount + TIndex

Otherwise it renders as the concatenation of its compatibility jamo. A slot
with no compatibility form (archaic jamo) renders as nothing.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Final, Optional

from hangul_ime.domain.enums import JamoRole
from hangul_ime.domain.jamo import Jamo


S_BASE: Final[int] = 0xAC00
S_LAST: Final[int] = 0xD7A3
V_COUNT: Final[int] = 21
T_COUNT: Final[int] = 28


def _slot_text(jamo: Optional[Jamo]) -> str:
    if jamo is None:
        return ""
    compat = jamo.to_compatibility()
    # Archaic jamo have no standalone form and contribute nothing.
    return compat.text if compat is not None else ""


@dataclass(frozen=True)
class HangulSyllable:
    initial: Optional[Jamo] = None
    medial: Optional[Jamo] = None
    final: Optional[Jamo] = None

    def __post_init__(self) -> None:
        for slot, role in (
            (self.initial, JamoRole.INITIAL),
            (self.medial, JamoRole.MEDIAL),
            (self.final, JamoRole.FINAL),
        ):
            if slot is not None and slot.role is not role:
                raise ValueError("Expected %s jamo, got %r" % (role.name, slot))

    @property
    def is_empty(self) -> bool:
        return self.initial is None and self.medial is None and self.final is None

    @property
    def combinable(self) -> bool:
        return (
            self.initial is not None
            and self.initial.modern
            and self.medial is not None
            and self.medial.modern
            and (self.final is None or self.final.modern)
        )

    @property
    def combined(self) -> str:
        """The precomposed syllable block.

        Raises:
            ValueError: if the syllable is not combinable.
        """
        if not self.combinable:
            raise ValueError("Syllable is not combinable: %r" % (self,))
        if self.initial is None or self.medial is None:
            raise ValueError("Syllable needs an initial and a medial: %r" % (self,))
        t_index = self.final.ordinal if self.final is not None else 0
        return chr(S_BASE + (self.initial.ordinal * V_COUNT + self.medial.ordinal) * T_COUNT + t_index)

    @property
    def decomposed(self) -> str:
        return _slot_text(self.initial) + _slot_text(self.medial) + _slot_text(self.final)

    @property
    def uncombined(self) -> str:
        """The positional jamo as-is, without conversion."""
        return "".join(j.text for j in (self.initial, self.medial, self.final) if j is not None)

    @property
    def text(self) -> str:
        return self.combined if self.combinable else self.decomposed

    def with_initial(self, jamo: Jamo) -> HangulSyllable:
        return replace(self, initial=jamo)

    def with_medial(self, jamo: Jamo) -> HangulSyllable:
        return replace(self, medial=jamo)

    def with_final(self, jamo: Jamo) -> HangulSyllable:
        return replace(self, final=jamo)

    @classmethod
    def from_combined(cls, ch: str) -> Optional[HangulSyllable]:
        """Rebuild the positional slots of a precomposed syllable block."""
        if len(ch) != 1:
            return None
        ordinals = decompose_syllable(ord(ch))
        if ordinals is None:
            return None
        li, vi, ti = ordinals
        return cls(
            initial=Jamo(JamoRole.INITIAL, 0x1100 + li),
            medial=Jamo(JamoRole.MEDIAL, 0x1161 + vi),
            final=Jamo(JamoRole.FINAL, 0x11A7 + ti) if ti else None,
        )


def decompose_syllable(code_point: int) -> Optional[tuple[int, int, int]]:
    """Return (initial, medial, final) ordinals of a precomposed block.

    The final ordinal is 0 when the block has no final consonant. Returns None
    outside U+AC00..U+D7A3.
    """
    if not S_BASE <= code_point <= S_LAST:
        return None
    s_index = code_point - S_BASE
    return (
        s_index // (V_COUNT * T_COUNT),
        (s_index % (V_COUNT * T_COUNT)) // T_COUNT,
        s_index % T_COUNT,
    )
