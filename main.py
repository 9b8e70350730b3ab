import sys

from PyQt6.QtWidgets import QApplication

from hangul_ime.ui.composer_window import create_composer_window


def main() -> int:
    app = QApplication(sys.argv)
    window = create_composer_window()
    window.resize(420, 120)
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
