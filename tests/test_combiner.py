from __future__ import annotations

import logging

import pytest

from hangul_ime.domain.combination_table import DEFAULT_COMBINATIONS
from hangul_ime.domain.combiner import HangulCombiner, is_whitespace
from hangul_ime.domain.enums import KeyCode
from hangul_ime.domain.events import (
    CommittedText,
    Consumed,
    InputEvent,
    PassThrough,
    SynthesizedKeypress,
)

DELETE = InputEvent.functional(KeyCode.DELETE)


def feed(combiner: HangulCombiner, text: str, *, combining: bool = True) -> list:
    """Send each character of `text` as a character event; return the results."""
    return [combiner.process_event(InputEvent.for_character(ch, combining=combining)) for ch in text]


def test_initial_and_medial_compose(combiner: HangulCombiner) -> None:
    results = feed(combiner, "\u1100\u1161")  # ᄀ ᅡ
    assert all(isinstance(r, Consumed) for r in results)
    assert combiner.combining_state_feedback == "가"
    assert combiner.is_composing


def test_initial_medial_final_compose(combiner: HangulCombiner) -> None:
    feed(combiner, "\u1112\u1161\u11AB")  # ᄒ ᅡ ᆫ
    assert combiner.combining_state_feedback == "한"


def test_double_initial_then_medial(combiner: HangulCombiner) -> None:
    feed(combiner, "\u1109\u1103")  # ᄉ ᄃ
    assert combiner.active_syllable is not None
    assert combiner.active_syllable.initial.code_point == 0x1104  # ᄄ
    assert combiner.combining_state_feedback == "ㄸ"
    feed(combiner, "\u1161")
    assert combiner.combining_state_feedback == "따"


def test_initial_compound_only_while_initial_is_last(combiner: HangulCombiner) -> None:
    # ᄀ+ᄃ is in the table, but a medial is already present
    feed(combiner, "\u1100\u1161\u1103")
    assert combiner.combining_state_feedback == "가ㄷ"
    assert combiner.flushed_text == "가"


def test_initial_without_compound_restarts(combiner: HangulCombiner) -> None:
    feed(combiner, "\u1100\u1100")
    assert combiner.combining_state_feedback == "ㄱㄱ"
    assert combiner.flushed_text == "ㄱ"


def test_diphthong(combiner: HangulCombiner) -> None:
    feed(combiner, "\u1100\u1169\u1161")  # ᄀ ᅩ ᅡ
    assert combiner.combining_state_feedback == "과"


def test_medial_compound_blocked_by_final(combiner: HangulCombiner) -> None:
    feed(combiner, "\u1100\u1169\u11A8\u1161")  # ᄀ ᅩ ᆨ ᅡ
    assert combiner.combining_state_feedback == "곡ㅏ"


def test_final_cluster(combiner: HangulCombiner) -> None:
    feed(combiner, "\u1100\u1161\u11A8\u11BA")  # ᄀ ᅡ ᆨ ᆺ
    assert combiner.combining_state_feedback == "갃"


def test_final_without_compound_restarts(combiner: HangulCombiner) -> None:
    feed(combiner, "\u1100\u1161\u11A8\u11A8")
    assert combiner.combining_state_feedback == "각ㄱ"


def test_compatibility_consonant_starts_new_syllable(combiner: HangulCombiner) -> None:
    feed(combiner, "\u3131\u1161")
    assert combiner.combining_state_feedback == "가"
    feed(combiner, "\u3134")
    assert combiner.flushed_text == "가"
    assert combiner.combining_state_feedback == "가ㄴ"


def test_archaic_initial_is_dropped_from_feedback(combiner: HangulCombiner) -> None:
    results = feed(combiner, "\u1113\u1161")  # archaic initial, then ᅡ
    assert all(isinstance(r, Consumed) for r in results)
    assert combiner.active_syllable is not None
    assert not combiner.active_syllable.combinable
    assert combiner.combining_state_feedback == "ㅏ"


def test_compatibility_vowel_always_flushes(combiner: HangulCombiner) -> None:
    feed(combiner, "\u1100\u314F")
    assert combiner.flushed_text == "ㄱ"
    assert combiner.combining_state_feedback == "ㄱㅏ"


def test_compatibility_cluster_without_initial_is_literal(combiner: HangulCombiner) -> None:
    feed(combiner, "\u1100\u3133")
    assert not combiner.is_composing
    assert combiner.combining_state_feedback == "ㄱㄳ"


@pytest.mark.parametrize("ch", ["a", "Z", "?", ".", "1", " "])
def test_non_hangul_while_idle_never_composes(combiner: HangulCombiner, ch: str) -> None:
    result = combiner.process_event(InputEvent.for_character(ch))
    assert isinstance(result, Consumed)
    assert not combiner.is_composing
    assert combiner.combining_state_feedback == ch


def test_non_combining_event_is_flushed_as_literal(combiner: HangulCombiner) -> None:
    feed(combiner, "\u1100\u1161")
    feed(combiner, "\u1102", combining=False)
    assert not combiner.is_composing
    assert combiner.flushed_text == "가ᄂ"


def test_whitespace_commits_feedback_and_chains_event(combiner: HangulCombiner) -> None:
    feed(combiner, "a\u1112\u1161\u11AB")
    space = InputEvent.for_character(" ")
    result = combiner.process_event(space)
    assert result == CommittedText(text="a한", original=space)
    assert result.key_code == KeyCode.MULTIPLE_CODE_POINTS
    assert not combiner.is_composing
    assert combiner.combining_state_feedback == ""


def test_whitespace_while_idle_commits_empty_text(combiner: HangulCombiner) -> None:
    newline = InputEvent.for_character("\n")
    assert combiner.process_event(newline) == CommittedText(text="", original=newline)


def test_functional_key_flushes_and_chains(combiner: HangulCombiner) -> None:
    feed(combiner, "\u1100\u1161")
    enter = InputEvent.functional(KeyCode.ENTER)
    assert combiner.process_event(enter) == CommittedText(text="가", original=enter)
    assert combiner.combining_state_feedback == ""


def test_shift_passes_through_without_state_change(combiner: HangulCombiner) -> None:
    feed(combiner, "\u1100")
    shift = InputEvent(code_point=-1, key_code=KeyCode.SHIFT)
    assert combiner.process_event(shift) == PassThrough(shift)
    assert combiner.combining_state_feedback == "ㄱ"


def test_delete_on_single_syllable_synthesizes_space(combiner: HangulCombiner) -> None:
    feed(combiner, "\u1100")
    result = combiner.process_event(DELETE)
    assert isinstance(result, SynthesizedKeypress)
    assert result.code_point == 0x20
    assert result.key_code == KeyCode.SPACE
    assert result.original is DELETE
    assert not combiner.is_composing
    assert combiner.combining_state_feedback == ""


def test_delete_on_single_flushed_character_synthesizes_space(combiner: HangulCombiner) -> None:
    feed(combiner, "a")
    assert isinstance(combiner.process_event(DELETE), SynthesizedKeypress)
    assert combiner.flushed_text == ""


def test_delete_propagates_key_repeat(combiner: HangulCombiner) -> None:
    feed(combiner, "\u1100\u1161")
    repeat = InputEvent.functional(KeyCode.DELETE, is_key_repeat=True)
    result = combiner.process_event(repeat)
    assert isinstance(result, SynthesizedKeypress)
    assert result.is_key_repeat


def test_delete_removes_whole_active_syllable_only(combiner: HangulCombiner) -> None:
    feed(combiner, "ab\u1112\u1161\u11AB")
    assert isinstance(combiner.process_event(DELETE), Consumed)
    assert not combiner.is_composing
    assert combiner.flushed_text == "ab"
    assert combiner.combining_state_feedback == "ab"


def test_delete_trims_flushed_text(combiner: HangulCombiner) -> None:
    feed(combiner, "abc")
    assert isinstance(combiner.process_event(DELETE), Consumed)
    assert combiner.combining_state_feedback == "ab"


def test_delete_with_nothing_passes_through(combiner: HangulCombiner) -> None:
    assert combiner.process_event(DELETE) == PassThrough(DELETE)


def test_delete_branches_log_at_debug(combiner: HangulCombiner, caplog) -> None:
    feed(combiner, "ab\u1100\u1161")
    with caplog.at_level(logging.DEBUG, logger="hangul_ime.domain.combiner"):
        combiner.process_event(DELETE)  # active syllable
        combiner.process_event(DELETE)  # flushed character
        combiner.process_event(DELETE)  # last unit
    messages = [r.getMessage() for r in caplog.records]
    assert "Delete removed active syllable '가'" in messages
    assert "Delete removed flushed character 'b'" in messages
    assert "Delete on last unit; synthesizing space" in messages
    assert all(r.levelno == logging.DEBUG for r in caplog.records)


def test_reset_clears_everything(combiner: HangulCombiner) -> None:
    feed(combiner, "x\u1100\u1161")
    combiner.reset()
    assert combiner.flushed_text == ""
    assert combiner.active_syllable is None
    assert combiner.combining_state_feedback == ""


def test_injected_table_is_used() -> None:
    combiner = HangulCombiner(DEFAULT_COMBINATIONS.merged([(0x1100, 0x1100, 0x1101)]))
    feed(combiner, "\u1100\u1100\u1161")
    assert combiner.combining_state_feedback == "까"


def test_is_whitespace_follows_word_breaking_rules() -> None:
    assert is_whitespace(0x20)
    assert is_whitespace(0x0A)
    assert is_whitespace(0x3000)
    assert not is_whitespace(0x00A0)
    assert not is_whitespace(0x202F)
    assert not is_whitespace(-1)
    assert not is_whitespace(0x110000)
