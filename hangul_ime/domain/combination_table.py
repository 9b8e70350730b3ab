"""Compound jamo lookup (domain layer).

Maps an ordered pair of same-role positional jamo to the compound jamo they
form: double initials (ᄉ+ᄃ -> ᄄ), diphthongs (ᅩ+ᅡ -> ᅪ) and final
clusters (ᆨ+ᆺ -> ᆪ). Every triple is inserted in both orders.

The default table is built once at import time and wrapped in a read-only
mapping, so one instance can be shared by any number of combiners.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Final, Iterable, Mapping, Optional

from hangul_ime.domain.enums import JamoRole
from hangul_ime.domain.jamo import classify

logger = logging.getLogger(__name__)

Triple = tuple[int, int, int]


# -----------------------------------------------------------------------------
# Default triples: (first, second) -> combined
# -----------------------------------------------------------------------------

INITIAL_TRIPLES: Final[tuple[Triple, ...]] = (
    (0x1100, 0x1103, 0x1112),  # ᄀ+ᄃ -> ᄒ
    (0x1107, 0x110C, 0x110A),  # ᄇ+ᄌ -> ᄊ
    (0x110B, 0x1100, 0x110F),  # ᄋ+ᄀ -> ᄏ
    (0x110B, 0x1103, 0x1110),  # ᄋ+ᄃ -> ᄐ
    (0x110B, 0x1107, 0x1111),  # ᄋ+ᄇ -> ᄑ
    (0x110B, 0x110C, 0x110D),  # ᄋ+ᄌ -> ᄍ
    (0x1109, 0x1100, 0x1101),  # ᄉ+ᄀ -> ᄁ
    (0x1109, 0x1103, 0x1104),  # ᄉ+ᄃ -> ᄄ
    (0x1109, 0x1107, 0x1108),  # ᄉ+ᄇ -> ᄈ
    (0x1109, 0x110C, 0x110E),  # ᄉ+ᄌ -> ᄎ
)

MEDIAL_TRIPLES: Final[tuple[Triple, ...]] = (
    (0x1173, 0x1175, 0x1174),  # ᅳ+ᅵ -> ᅴ
    (0x1173, 0x1162, 0x1166),  # ᅳ+ᅢ -> ᅦ
    (0x1175, 0x1162, 0x1164),  # ᅵ+ᅢ -> ᅤ
    (0x1164, 0x1173, 0x1168),  # ᅤ+ᅳ -> ᅨ
    (0x1166, 0x1175, 0x1168),  # ᅦ+ᅵ -> ᅨ
    (0x1174, 0x1162, 0x1168),  # ᅴ+ᅢ -> ᅨ
    (0x1169, 0x1175, 0x116C),  # ᅩ+ᅵ -> ᅬ
    (0x1169, 0x1162, 0x116D),  # ᅩ+ᅢ -> ᅭ
    (0x116C, 0x1162, 0x116B),  # ᅬ+ᅢ -> ᅫ
    (0x116D, 0x1175, 0x116B),  # ᅭ+ᅵ -> ᅫ
    (0x1164, 0x1169, 0x116B),  # ᅤ+ᅩ -> ᅫ
    (0x116E, 0x1175, 0x1171),  # ᅮ+ᅵ -> ᅱ
    (0x116E, 0x1162, 0x1172),  # ᅮ+ᅢ -> ᅲ
    (0x1171, 0x1162, 0x1170),  # ᅱ+ᅢ -> ᅰ
    (0x1172, 0x1175, 0x1170),  # ᅲ+ᅵ -> ᅰ
    (0x1164, 0x116E, 0x1170),  # ᅤ+ᅮ -> ᅰ
    (0x1161, 0x1162, 0x1163),  # ᅡ+ᅢ -> ᅣ
    (0x1165, 0x1162, 0x1167),  # ᅥ+ᅢ -> ᅧ
    # Standard diphthongs
    (0x1169, 0x1161, 0x116A),  # ᅩ+ᅡ -> ᅪ
    (0x116E, 0x1165, 0x116F),  # ᅮ+ᅥ -> ᅯ
    (0x116A, 0x1175, 0x116B),  # ᅪ+ᅵ -> ᅫ
    (0x116F, 0x1175, 0x1170),  # ᅯ+ᅵ -> ᅰ
    (0x116E, 0x1166, 0x1170),  # ᅮ+ᅦ -> ᅰ
)

FINAL_TRIPLES: Final[tuple[Triple, ...]] = (
    (0x11BC, 0x11AB, 0x11AD),  # ᆼ+ᆫ -> ᆭ
    (0x11BC, 0x11AF, 0x11B6),  # ᆼ+ᆯ -> ᆶ
    (0x11BC, 0x11A8, 0x11BF),  # ᆼ+ᆨ -> ᆿ
    (0x11BC, 0x11AE, 0x11C0),  # ᆼ+ᆮ -> ᇀ
    (0x11BC, 0x11B8, 0x11C1),  # ᆼ+ᆸ -> ᇁ
    (0x11B7, 0x11AB, 0x11C2),  # ᆷ+ᆫ -> ᇂ
    (0x11B7, 0x11AF, 0x11B1),  # ᆷ+ᆯ -> ᆱ
    (0x11B7, 0x11A8, 0x11B0),  # ᆷ+ᆨ -> ᆰ
    (0x11B7, 0x11AE, 0x11B4),  # ᆷ+ᆮ -> ᆴ
    (0x11B7, 0x11B8, 0x11A9),  # ᆷ+ᆸ -> ᆩ
    (0x11BA, 0x11AB, 0x11BB),  # ᆺ+ᆫ -> ᆻ
    (0x11BA, 0x11AF, 0x11B3),  # ᆺ+ᆯ -> ᆳ
    (0x11BA, 0x11A8, 0x11AA),  # ᆺ+ᆨ -> ᆪ
    (0x11BA, 0x11B8, 0x11B9),  # ᆺ+ᆸ -> ᆹ
    (0x11BA, 0x11AE, 0x11B5),  # ᆺ+ᆮ -> ᆵ
    (0x11B8, 0x11AF, 0x11B2),  # ᆸ+ᆯ -> ᆲ
    (0x11AE, 0x11A8, 0x11B2),  # ᆮ+ᆨ -> ᆲ
    (0x11B2, 0x11BC, 0x11BD),  # ᆲ+ᆼ -> ᆽ
    (0x11C1, 0x11AF, 0x11BD),  # ᇁ+ᆯ -> ᆽ
    (0x11B6, 0x11B8, 0x11BD),  # ᆶ+ᆸ -> ᆽ
    (0x11B2, 0x11BA, 0x11AC),  # ᆲ+ᆺ -> ᆬ
    (0x11B9, 0x11AF, 0x11AC),  # ᆹ+ᆯ -> ᆬ
    (0x11B3, 0x11B8, 0x11AC),  # ᆳ+ᆸ -> ᆬ
    (0x11B2, 0x11B7, 0x11BE),  # ᆲ+ᆷ -> ᆾ
    (0x11B4, 0x11A8, 0x11BE),  # ᆴ+ᆨ -> ᆾ
    (0x11B0, 0x11AE, 0x11BE),  # ᆰ+ᆮ -> ᆾ
)


def _role_of_triple(triple: Triple) -> Optional[JamoRole]:
    """Return the shared positional role of a triple, or None if mixed."""
    roles = {classify(cp).role for cp in triple}
    if len(roles) != 1:
        return None
    role = roles.pop()
    return role if role.is_positional else None


# -----------------------------------------------------------------------------
# Table
# -----------------------------------------------------------------------------

class CombinationTable:
    """Immutable, symmetric (a, b) -> combined lookup."""

    __slots__ = ("_pairs",)

    def __init__(self, pairs: Mapping[tuple[int, int], int]) -> None:
        self._pairs: Mapping[tuple[int, int], int] = MappingProxyType(dict(pairs))

    @classmethod
    def from_triples(cls, triples: Iterable[Triple]) -> CombinationTable:
        """Build a table from (a, b, combined) triples.

        Raises:
            ValueError: if a triple mixes roles or uses non-positional jamo.
        """
        pairs: dict[tuple[int, int], int] = {}
        for triple in triples:
            a, b, combined = (int(v) for v in triple)
            if _role_of_triple((a, b, combined)) is None:
                raise ValueError(
                    "Combination must use positional jamo of one role: %r" % ((a, b, combined),)
                )
            pairs[(a, b)] = combined
            pairs[(b, a)] = combined
        return cls(pairs)

    @property
    def pairs(self) -> Mapping[tuple[int, int], int]:
        return self._pairs

    def combine(self, first: int, second: int) -> Optional[int]:
        """Return the compound for (first, second), or None if unlisted."""
        return self._pairs.get((first, second))

    def merged(self, triples: Iterable[Triple]) -> CombinationTable:
        """Return a new table with `triples` added (later entries win)."""
        extra = CombinationTable.from_triples(triples)
        pairs = dict(self._pairs)
        pairs.update(extra.pairs)
        return CombinationTable(pairs)

    def merged_from_settings(self, entries: Iterable[Any]) -> CombinationTable:
        """Merge loosely typed settings entries, skipping invalid ones.

        Each entry is a 3-item sequence of single characters or integers.
        """
        valid: list[Triple] = []
        for entry in entries or ():
            triple = _coerce_triple(entry)
            if triple is None or _role_of_triple(triple) is None:
                logger.warning("Ignoring invalid combination entry: %r", entry)
                continue
            valid.append(triple)
        if not valid:
            return self
        return self.merged(valid)

    def __contains__(self, pair: object) -> bool:
        return pair in self._pairs

    def __len__(self) -> int:
        return len(self._pairs)

    def __repr__(self) -> str:
        return "CombinationTable(%d pairs)" % len(self._pairs)


def _coerce_triple(entry: Any) -> Optional[Triple]:
    if not isinstance(entry, (list, tuple)) or len(entry) != 3:
        return None
    out: list[int] = []
    for v in entry:
        if isinstance(v, str) and len(v) == 1:
            out.append(ord(v))
        elif isinstance(v, int) and not isinstance(v, bool):
            out.append(v)
        else:
            return None
    return out[0], out[1], out[2]


DEFAULT_COMBINATIONS: Final[CombinationTable] = CombinationTable.from_triples(
    INITIAL_TRIPLES + MEDIAL_TRIPLES + FINAL_TRIPLES
)
