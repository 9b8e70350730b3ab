"""Input and output events for the combiner.

Input events arrive already decoded (one code point or one functional key).
The combiner answers every input with exactly one result from a closed set:

- Consumed:            absorbed; only the composing feedback changed
- CommittedText:       commit `text`, then replay `original`
- SynthesizedKeypress: emit this key, then replay `original`
- PassThrough:         hand `event` to the host unchanged

Chaining (commit, then replay) is the caller's job.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Union

from hangul_ime.domain.enums import KeyCode


NOT_A_CODE_POINT: Final[int] = -1


@dataclass(frozen=True)
class InputEvent:
    code_point: int
    key_code: KeyCode = KeyCode.NOT_SPECIFIED
    is_key_repeat: bool = False
    is_functional_key_event: bool = False
    # Set by the decoder when the code point may take part in a syllable
    is_combining: bool = False

    @property
    def text(self) -> str:
        if self.code_point < 0:
            return ""
        try:
            return chr(self.code_point)
        except (ValueError, OverflowError):
            return ""

    @classmethod
    def for_character(
        cls, ch: str, *, combining: bool = True, is_key_repeat: bool = False
    ) -> InputEvent:
        if len(ch) != 1:
            raise ValueError("Expected a single character, got %r" % (ch,))
        cp = ord(ch)
        key_code = KeyCode.SPACE if cp == KeyCode.SPACE else KeyCode.NOT_SPECIFIED
        return cls(
            code_point=cp,
            key_code=key_code,
            is_key_repeat=is_key_repeat,
            is_combining=combining,
        )

    @classmethod
    def functional(cls, key_code: KeyCode, *, is_key_repeat: bool = False) -> InputEvent:
        return cls(
            code_point=NOT_A_CODE_POINT,
            key_code=key_code,
            is_key_repeat=is_key_repeat,
            is_functional_key_event=True,
        )


@dataclass(frozen=True)
class Consumed:
    original: InputEvent


@dataclass(frozen=True)
class CommittedText:
    text: str
    original: InputEvent

    @property
    def key_code(self) -> KeyCode:
        return KeyCode.MULTIPLE_CODE_POINTS


@dataclass(frozen=True)
class SynthesizedKeypress:
    code_point: int
    key_code: KeyCode
    original: InputEvent
    is_key_repeat: bool = False


@dataclass(frozen=True)
class PassThrough:
    event: InputEvent


CombinerResult = Union[Consumed, CommittedText, SynthesizedKeypress, PassThrough]
