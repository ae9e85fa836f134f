import unittest

from PyQt5.QtWidgets import QApplication, QLabel, QPushButton

from wrytr.i18n import LANG_EN, LANG_ZH_CN, localize_widget_tree, normalize_language, translate_text


class TestI18n(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls._app = QApplication.instance() or QApplication([])

    def test_translate_known_text(self):
        self.assertEqual(translate_text("Start Time:", LANG_ZH_CN), "开始时间:")
        self.assertEqual(translate_text("Transcribe", LANG_ZH_CN), "转写")
        self.assertEqual(translate_text("Transcription successful.", LANG_ZH_CN), "转写成功。")
        self.assertEqual(translate_text("Start Time:", LANG_EN), "Start Time:")

    def test_translate_prefix_text(self):
        self.assertEqual(translate_text("Selected file: talk.mp3", LANG_ZH_CN), "已选择文件: talk.mp3")
        self.assertEqual(translate_text("Audio length: 00:08:20", LANG_ZH_CN), "音频时长: 00:08:20")

    def test_unknown_text_passes_through(self):
        self.assertEqual(translate_text("Something else", LANG_ZH_CN), "Something else")

    def test_normalize_language(self):
        self.assertEqual(normalize_language("zh-CN"), LANG_ZH_CN)
        self.assertEqual(normalize_language("fr"), LANG_EN)
        self.assertEqual(normalize_language(""), LANG_EN)

    def test_localize_and_restore_widget_text(self):
        label = QLabel("End Time:")
        button = QPushButton("Transcribe", label)
        localize_widget_tree(label, LANG_ZH_CN)
        self.assertEqual(label.text(), "结束时间:")
        self.assertEqual(button.text(), "转写")
        localize_widget_tree(label, LANG_EN)
        self.assertEqual(label.text(), "End Time:")
        self.assertEqual(button.text(), "Transcribe")


if __name__ == "__main__":
    unittest.main()
