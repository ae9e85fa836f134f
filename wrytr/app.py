from __future__ import annotations

import logging
import os
import sys
from typing import Optional

from PyQt5.QtGui import QColor, QPalette
from PyQt5.QtWidgets import QApplication, QMessageBox

from wrytr.i18n import apply_application_font, normalize_language, set_current_language, tr
from wrytr.settings_store import coerce_server_url, get_settings_path, load_settings
from wrytr.ui.main_window import MainWindow

LOG_FORMAT = "[wrytr] %(levelname)s %(name)s: %(message)s"


def _force_light_qt_theme(app: QApplication) -> None:
    # Fusion + explicit light palette so the OS dark appearance is not inherited.
    app.setStyle("Fusion")
    palette = QPalette()
    palette.setColor(QPalette.Window, QColor(240, 240, 240))
    palette.setColor(QPalette.WindowText, QColor(0, 0, 0))
    palette.setColor(QPalette.Base, QColor(255, 255, 255))
    palette.setColor(QPalette.AlternateBase, QColor(245, 245, 245))
    palette.setColor(QPalette.Text, QColor(0, 0, 0))
    palette.setColor(QPalette.Button, QColor(240, 240, 240))
    palette.setColor(QPalette.ButtonText, QColor(0, 0, 0))
    palette.setColor(QPalette.Highlight, QColor(0, 120, 215))
    palette.setColor(QPalette.HighlightedText, QColor(255, 255, 255))
    app.setPalette(palette)


def _parse_startup_args(argv: list[str]) -> tuple[list[str], bool, bool, Optional[str]]:
    """Split wrytr flags from the Qt argument list.

    Returns ``(qt_argv, cleanstart, debug, server_url)``. ``--server-url`` takes
    either the next token or an ``=value`` suffix.
    """
    clean_tokens = {"--cleanstart", "/cleanstart"}
    debug_tokens = {"-debug", "--debug", "/debug"}
    cleanstart = False
    debug = False
    server_url: Optional[str] = None
    filtered = [argv[0]] if argv else [""]
    args = list(argv[1:])
    idx = 0
    while idx < len(args):
        arg = args[idx]
        token = str(arg or "").strip()
        lowered = token.lower()
        idx += 1
        if lowered in clean_tokens:
            cleanstart = True
            continue
        if lowered in debug_tokens:
            debug = True
            continue
        if lowered.startswith("--server-url="):
            server_url = token.split("=", 1)[1]
            continue
        if lowered == "--server-url":
            if idx < len(args):
                server_url = str(args[idx])
                idx += 1
            continue
        filtered.append(arg)
    return filtered, cleanstart, debug, server_url


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(level=logging.DEBUG if debug else logging.WARNING, format=LOG_FORMAT)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def _confirm_cleanstart_warning() -> bool:
    answer = QMessageBox.warning(
        None,
        tr("Cleanstart Warning"),
        tr("Cleanstart will reset all settings to defaults. Continue?"),
        QMessageBox.Yes | QMessageBox.No,
        QMessageBox.No,
    )
    return answer == QMessageBox.Yes


def _apply_cleanstart() -> bool:
    settings_path = get_settings_path()
    if not settings_path.exists():
        return True
    try:
        os.remove(settings_path)
        return True
    except OSError as exc:
        QMessageBox.critical(
            None,
            tr("Cleanstart Failed"),
            f"{tr('Could not remove settings.ini for cleanstart.')}\n\n"
            f"{exc}",
        )
        return False


def main() -> int:
    qt_argv, cleanstart_requested, debug_requested, server_url = _parse_startup_args(list(sys.argv))
    _configure_logging(debug_requested)
    app = QApplication(qt_argv)
    _force_light_qt_theme(app)
    if cleanstart_requested:
        if not _confirm_cleanstart_warning():
            return 0
        if not _apply_cleanstart():
            return 1
    settings = load_settings()
    if server_url:
        settings.server_url = coerce_server_url(server_url, settings.server_url)
    language = set_current_language(normalize_language(settings.ui_language))
    apply_application_font(app, language)
    logging.getLogger(__name__).debug("Using transcription server %s", settings.server_url)
    win = MainWindow(settings=settings)
    win.show()
    return app.exec_()


if __name__ == "__main__":
    raise SystemExit(main())
