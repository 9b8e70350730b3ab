"""Hangul composition engine.

Consumes one decoded input event at a time and keeps two pieces of state for
the current word:

- flushed text: characters already decided (appended to, trimmed by delete)
- active syllable: at most one syllable still being assembled

The engine is IDLE when there is no active syllable and COMPOSING otherwise.
Whitespace, functional keys other than delete, and reset() end the word.
"""

from __future__ import annotations

import logging
from typing import Final, Optional

from hangul_ime.domain.combination_table import DEFAULT_COMBINATIONS, CombinationTable
from hangul_ime.domain.enums import JamoRole, KeyCode
from hangul_ime.domain.events import (
    CombinerResult,
    CommittedText,
    Consumed,
    InputEvent,
    PassThrough,
    SynthesizedKeypress,
)
from hangul_ime.domain.jamo import Jamo, classify
from hangul_ime.domain.syllable import HangulSyllable

logger = logging.getLogger(__name__)

# Characters that str.isspace() accepts but that do not break words
_NON_BREAKING_SPACES: Final[frozenset[int]] = frozenset((0x00A0, 0x2007, 0x202F))


def is_whitespace(code_point: int) -> bool:
    if code_point < 0 or code_point in _NON_BREAKING_SPACES:
        return False
    try:
        return chr(code_point).isspace()
    except (ValueError, OverflowError):
        return False


class HangulCombiner:
    """Turns jamo events into syllable blocks, one event at a time."""

    def __init__(self, table: Optional[CombinationTable] = None) -> None:
        self._table: CombinationTable = table if table is not None else DEFAULT_COMBINATIONS
        self._flushed: list[str] = []
        self._syllable: Optional[HangulSyllable] = None

    # ---------------------------
    # Read-only state
    # ---------------------------

    @property
    def table(self) -> CombinationTable:
        return self._table

    @property
    def flushed_text(self) -> str:
        return "".join(self._flushed)

    @property
    def active_syllable(self) -> Optional[HangulSyllable]:
        return self._syllable

    @property
    def is_composing(self) -> bool:
        return self._syllable is not None

    @property
    def combining_state_feedback(self) -> str:
        """Everything currently shown in the composing region."""
        active = self._syllable.text if self._syllable is not None else ""
        return self.flushed_text + active

    def reset(self) -> None:
        self._flushed.clear()
        self._syllable = None

    # ---------------------------
    # Event processing
    # ---------------------------

    def process_event(self, event: InputEvent) -> CombinerResult:
        if event.key_code == KeyCode.SHIFT:
            return PassThrough(event)

        if is_whitespace(event.code_point):
            return self._commit_and_chain(event)

        if event.is_functional_key_event:
            if event.key_code == KeyCode.DELETE:
                return self._delete(event)
            return self._commit_and_chain(event)

        self._combine(event)
        return Consumed(event)

    def _commit_and_chain(self, event: InputEvent) -> CommittedText:
        text = self.combining_state_feedback
        self.reset()
        logger.debug("Committed %r before key %s", text, event.key_code.name)
        return CommittedText(text=text, original=event)

    def _delete(self, event: InputEvent) -> CombinerResult:
        one_unit_left = (self._syllable is not None and not self._flushed) or (
            self._syllable is None and len(self._flushed) == 1
        )
        if one_unit_left:
            # The host's own backspace handles the last unit: send it a space
            # to delete along with the original delete.
            self.reset()
            logger.debug("Delete on last unit; synthesizing space")
            return SynthesizedKeypress(
                code_point=0x20,
                key_code=KeyCode.SPACE,
                original=event,
                is_key_repeat=event.is_key_repeat,
            )
        if self._syllable is not None:
            logger.debug("Delete removed active syllable %r", self._syllable.text)
            self._syllable = None
            return Consumed(event)
        if self._flushed:
            removed = self._flushed.pop()
            logger.debug("Delete removed flushed character %r", removed)
            return Consumed(event)
        return PassThrough(event)

    def _combine(self, event: InputEvent) -> None:
        jamo = classify(event.code_point)

        if not event.is_combining or jamo.role is JamoRole.NON_HANGUL:
            self._flush_literal(jamo)
            return

        current = self._syllable or HangulSyllable()

        if jamo.role is JamoRole.INITIAL:
            if current.initial is None:
                self._syllable = current.with_initial(jamo)
                return
            compound = self._table.combine(current.initial.code_point, jamo.code_point)
            if compound is not None and current.medial is None and current.final is None:
                self._syllable = current.with_initial(Jamo(JamoRole.INITIAL, compound))
            else:
                self._restart(HangulSyllable(initial=jamo))

        elif jamo.role is JamoRole.MEDIAL:
            if current.medial is None:
                self._syllable = current.with_medial(jamo)
                return
            compound = self._table.combine(current.medial.code_point, jamo.code_point)
            if compound is not None and current.final is None:
                self._syllable = current.with_medial(Jamo(JamoRole.MEDIAL, compound))
            else:
                self._restart(HangulSyllable(medial=jamo))

        elif jamo.role is JamoRole.FINAL:
            if current.final is None:
                self._syllable = current.with_final(jamo)
                return
            compound = self._table.combine(current.final.code_point, jamo.code_point)
            if compound is not None:
                self._syllable = current.with_final(Jamo(JamoRole.FINAL, compound))
            else:
                self._restart(HangulSyllable(final=jamo))

        elif jamo.role is JamoRole.CONSONANT:
            initial = jamo.to_initial()
            if initial is None:
                self._flush_literal(jamo)
            else:
                self._restart(HangulSyllable(initial=initial))

        elif jamo.role is JamoRole.VOWEL:
            medial = jamo.to_medial()
            if medial is None:
                self._flush_literal(jamo)
            else:
                self._restart(HangulSyllable(medial=medial))

    def _flush_active(self) -> None:
        if self._syllable is not None:
            text = self._syllable.text
            self._flushed.extend(text)
            logger.debug("Flushed syllable %r", text)
        self._syllable = None

    def _restart(self, syllable: HangulSyllable) -> None:
        self._flush_active()
        self._syllable = syllable

    def _flush_literal(self, jamo: Jamo) -> None:
        self._flush_active()
        self._flushed.extend(jamo.text)
