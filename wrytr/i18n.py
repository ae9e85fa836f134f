from __future__ import annotations

from typing import Optional

from PyQt5.QtGui import QFont, QFontDatabase
from PyQt5.QtWidgets import QApplication, QCheckBox, QLabel, QPushButton, QWidget

LANG_EN = "en"
LANG_ZH_CN = "zh_cn"

_TRANSLATIONS = {
    LANG_ZH_CN: {
        "Wrytr": "Wrytr 转写",
        "Start Time:": "开始时间:",
        "End Time:": "结束时间:",
        "Hours": "时",
        "Minutes": "分",
        "Seconds": "秒",
        "Transcribe": "转写",
        "Transcription:": "转写结果:",
        "Uploading and transcribing...": "正在上传并转写...",
        "Drag and drop an audio file here, or click to select a file": "将音频文件拖放到此处，或点击选择文件",
        "Drop the audio file here...": "在此处放下音频文件...",
        "Select Audio File": "选择音频文件",
        "Reading audio length...": "正在读取音频时长...",
        "Audio length unknown": "音频时长未知",
        "Transcription successful.": "转写成功。",
        "An error occurred during transcription.": "转写过程中发生错误。",
        "Cleanstart Warning": "重置警告",
        "Cleanstart will reset all settings to defaults. Continue?": "重置将把所有设置恢复为默认值。是否继续？",
        "Cleanstart Failed": "重置失败",
        "Could not remove settings.ini for cleanstart.": "无法删除 settings.ini 以完成重置。",
    }
}

_PREFIX_TRANSLATIONS = {
    LANG_ZH_CN: {
        "Selected file: ": "已选择文件: ",
        "Audio length: ": "音频时长: ",
    }
}


def normalize_language(value: str) -> str:
    raw = str(value or "").strip().lower().replace("-", "_")
    if raw in {"zh", "zh_cn", "zh_hans", "cn"}:
        return LANG_ZH_CN
    return LANG_EN


def set_current_language(value: str) -> str:
    global _current_language
    _current_language = normalize_language(value)
    return _current_language


def get_current_language() -> str:
    return _current_language


def tr(text: str, language: Optional[str] = None) -> str:
    return translate_text(text, language)


def translate_text(text: str, language: Optional[str] = None) -> str:
    if not isinstance(text, str) or not text:
        return text
    lang = normalize_language(language or _current_language)
    if lang == LANG_EN:
        return text
    table = _TRANSLATIONS.get(lang, {})
    if text in table:
        return table[text]
    for prefix, translated_prefix in _PREFIX_TRANSLATIONS.get(lang, {}).items():
        if text.startswith(prefix):
            return translated_prefix + text[len(prefix):]
    return text


def _ensure_source_property(obj, prop_name: str, current_value: str, language: str) -> str:
    source = obj.property(prop_name)
    if isinstance(source, str) and source:
        return source
    if language != LANG_EN and isinstance(current_value, str) and current_value:
        obj.setProperty(prop_name, current_value)
        return current_value
    return current_value


def localize_widget_tree(widget: QWidget, language: Optional[str] = None) -> None:
    lang = normalize_language(language or _current_language)
    _localize_widget(widget, lang)
    for child in widget.findChildren(QWidget):
        _localize_widget(child, lang)


def _localize_widget(widget: QWidget, language: str) -> None:
    title = widget.windowTitle()
    if title:
        source_title = _ensure_source_property(widget, "_i18n_source_window_title", title, language)
        widget.setWindowTitle(source_title if language == LANG_EN else translate_text(source_title, language))

    if isinstance(widget, (QLabel, QPushButton, QCheckBox)):
        source = _ensure_source_property(widget, "_i18n_source_text", widget.text(), language)
        target = source if language == LANG_EN else translate_text(source, language)
        if widget.text() != target:
            widget.setText(target)


def apply_application_font(app: QApplication, language: Optional[str] = None) -> None:
    if app is None:
        return
    lang = normalize_language(language or _current_language)
    if _font_state["default"] is None:
        _font_state["default"] = QFont(app.font())
    if lang == LANG_EN:
        app.setFont(QFont(_font_state["default"]))
        return
    preferred = [
        "Microsoft YaHei UI",
        "Microsoft YaHei",
        "PingFang SC",
        "Noto Sans CJK SC",
        "Source Han Sans SC",
        "SimHei",
    ]
    families = {name.lower(): name for name in QFontDatabase().families()}
    chosen = None
    for name in preferred:
        if name.lower() in families:
            chosen = families[name.lower()]
            break
    if not chosen:
        return
    font = QFont(app.font())
    font.setFamily(chosen)
    app.setFont(font)


_current_language = LANG_EN
_font_state = {"default": None}
