"""Composer window factory.

Public API:
- create_composer_window(...): builds and returns a small window with a
  committed-text line edit and a composing-region label, wired to a
  HangulCombiner. It does not start the Qt event loop, so UI tests can
  instantiate it headlessly.
"""

from __future__ import annotations

import logging

from PyQt6.QtWidgets import QLabel, QLineEdit, QVBoxLayout, QWidget

from hangul_ime.controllers.composing_controller import ComposingController
from hangul_ime.domain.combination_table import DEFAULT_COMBINATIONS
from hangul_ime.domain.combiner import HangulCombiner
from hangul_ime.services.logging_setup import configure_logging
from hangul_ime.services.settings_store import SettingsStore

logger = logging.getLogger(__name__)


def create_composer_window(*, settings_path: str | None = None) -> QWidget:
    """Create and return the composer window.

    This function must NOT call app.exec(). It assumes a QApplication exists.

    The engine only composes positional jamo; compatibility jamo always
    flush. Latin keys therefore need the keymap from settings.yaml to build
    syllables. The settings.yaml shipped at the project root maps a 2-set
    layout to positional jamo; without a keymap, typed keys are committed
    literally.

    Args:
        settings_path: Optional path to a settings.yaml (log level, keymap and
            extra combinations). Defaults to the project root file.

    Returns:
        QWidget: the wired window. The controller is reachable as
        `window._controller`.
    """
    store = SettingsStore(settings_path=settings_path)
    configure_logging(store.get_log_level())

    table = DEFAULT_COMBINATIONS.merged_from_settings(store.get_extra_combinations())
    combiner = HangulCombiner(table)

    window = QWidget()
    window.setObjectName("ComposerWindow")
    window.setWindowTitle("Hangul composer")

    preedit = QLabel("")
    preedit.setObjectName("labelPreedit")
    line = QLineEdit()
    line.setObjectName("lineCommitted")

    layout = QVBoxLayout(window)
    layout.addWidget(preedit)
    layout.addWidget(line)

    controller = ComposingController(
        line, preedit, combiner=combiner, keymap=store.get_keymap(), parent=window
    )
    controller.wire()
    setattr(window, "_controller", controller)

    logger.debug("Composer window ready (%r, settings=%s)", table, store.path)
    return window
