from __future__ import annotations

import logging
from typing import Final, Mapping, Optional

from PyQt6.QtCore import QEvent, QObject, Qt, pyqtSignal
from PyQt6.QtGui import QKeyEvent
from PyQt6.QtWidgets import QLabel, QLineEdit

from hangul_ime.domain.combiner import HangulCombiner
from hangul_ime.domain.enums import KeyCode
from hangul_ime.domain.events import (
    CombinerResult,
    CommittedText,
    Consumed,
    InputEvent,
    PassThrough,
    SynthesizedKeypress,
)
from hangul_ime.domain.jamo import is_hangul_jamo

logger = logging.getLogger(__name__)


_FUNCTIONAL_KEYS: Final[dict[int, KeyCode]] = {
    Qt.Key.Key_Backspace.value: KeyCode.DELETE,
    Qt.Key.Key_Return.value: KeyCode.ENTER,
    Qt.Key.Key_Enter.value: KeyCode.ENTER,
    Qt.Key.Key_Tab.value: KeyCode.TAB,
    Qt.Key.Key_Left.value: KeyCode.ARROW_LEFT,
    Qt.Key.Key_Right.value: KeyCode.ARROW_RIGHT,
    Qt.Key.Key_Up.value: KeyCode.ARROW_UP,
    Qt.Key.Key_Down.value: KeyCode.ARROW_DOWN,
}

_SHIFT_KEY: Final[int] = Qt.Key.Key_Shift.value


def decode_key_event(
    key: int,
    text: str,
    is_auto_repeat: bool = False,
    keymap: Optional[Mapping[str, str]] = None,
) -> Optional[InputEvent]:
    """Turn a Qt key + its text into a combiner input event.

    Returns None for keys the combiner has no opinion about (modifiers other
    than Shift, function keys, ...).
    """
    key = int(key)
    if key == _SHIFT_KEY:
        return InputEvent(code_point=-1, key_code=KeyCode.SHIFT, is_key_repeat=is_auto_repeat)

    functional = _FUNCTIONAL_KEYS.get(key)
    if functional is not None:
        return InputEvent.functional(functional, is_key_repeat=is_auto_repeat)

    if not text or len(text) != 1 or not text.isprintable():
        return None

    ch = (keymap or {}).get(text, text)
    return InputEvent.for_character(
        ch, combining=is_hangul_jamo(ord(ch)), is_key_repeat=is_auto_repeat
    )


class ComposingController(QObject):
    """Routes key presses on a QLineEdit through a HangulCombiner.

    Responsibilities:
    - decode key presses into InputEvents
    - apply combiner results: commit text into the line edit, then replay
      the original key
    - keep the composing label in sync with the combiner feedback

    The line edit only ever receives committed text; the composing region
    lives in the label.
    """

    preeditChanged = pyqtSignal(str)
    committed = pyqtSignal(str)
    submitted = pyqtSignal(str)

    def __init__(
        self,
        line_edit: QLineEdit,
        preedit_label: Optional[QLabel] = None,
        *,
        combiner: Optional[HangulCombiner] = None,
        keymap: Optional[Mapping[str, str]] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._line_edit = line_edit
        self._label = preedit_label
        self._combiner = combiner if combiner is not None else HangulCombiner()
        self._keymap: dict[str, str] = dict(keymap or {})
        self._wired = False

    @property
    def combiner(self) -> HangulCombiner:
        return self._combiner

    def wire(self) -> None:
        """Install the key filter on the line edit (idempotent)."""
        if self._wired:
            return
        self._line_edit.installEventFilter(self)
        self._wired = True

    def eventFilter(self, obj: Optional[QObject], event: Optional[QEvent]) -> bool:  # noqa: N802
        if obj is not self._line_edit or event is None:
            return False
        try:
            if event.type() == QEvent.Type.KeyPress and isinstance(event, QKeyEvent):
                mods = event.modifiers()
                if mods & (
                    Qt.KeyboardModifier.ControlModifier
                    | Qt.KeyboardModifier.AltModifier
                    | Qt.KeyboardModifier.MetaModifier
                ):
                    # Shortcuts belong to the widget; end the word first.
                    self.flush()
                    return False
                decoded = decode_key_event(
                    event.key(), event.text(), event.isAutoRepeat(), self._keymap
                )
                if decoded is None:
                    return False
                self.handle(decoded)
                return True
            if event.type() == QEvent.Type.FocusOut:
                self.flush()
        except (RuntimeError, ValueError):
            logger.exception("ComposingController failed to handle key event")
        return False

    # ---------------------------
    # Result application
    # ---------------------------

    def handle(self, event: InputEvent) -> CombinerResult:
        result = self._combiner.process_event(event)
        if isinstance(result, CommittedText):
            self._commit(result.text)
            self._replay(result.original)
        elif isinstance(result, SynthesizedKeypress):
            self._replay(
                InputEvent(
                    code_point=result.code_point,
                    key_code=result.key_code,
                    is_key_repeat=result.is_key_repeat,
                )
            )
            self._replay(result.original)
        elif isinstance(result, PassThrough):
            self._replay(result.event)
        elif isinstance(result, Consumed):
            pass
        self._refresh_preedit()
        return result

    def flush(self) -> None:
        """Commit whatever is composing and start a new word."""
        text = self._combiner.combining_state_feedback
        self._combiner.reset()
        self._commit(text)
        self._refresh_preedit()

    def _commit(self, text: str) -> None:
        if not text:
            return
        self._line_edit.insert(text)
        self.committed.emit(text)

    def _replay(self, event: InputEvent) -> None:
        kc = event.key_code
        if kc == KeyCode.DELETE:
            self._line_edit.backspace()
        elif kc == KeyCode.ENTER:
            self.submitted.emit(self._line_edit.text())
        elif kc == KeyCode.ARROW_LEFT:
            self._line_edit.cursorBackward(False)
        elif kc == KeyCode.ARROW_RIGHT:
            self._line_edit.cursorForward(False)
        elif not event.is_functional_key_event and event.code_point >= 0:
            self._line_edit.insert(event.text)
        # SHIFT, TAB, up/down: nothing to do in a single-line edit

    def _refresh_preedit(self) -> None:
        text = self._combiner.combining_state_feedback
        if self._label is not None:
            self._label.setText(text)
        self.preeditChanged.emit(text)
