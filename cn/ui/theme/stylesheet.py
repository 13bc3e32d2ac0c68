from .colors import THEMES, DEFAULT_THEME


def build_stylesheet(theme_name):
    t = THEMES.get(theme_name, THEMES[DEFAULT_THEME])
    return (
        f"QWidget {{ background-color: {t['bg']}; color: {t['text']}; }}"
        f"QPushButton {{ color: {t['button_text']};"
        f"  background-color: {t['button_bg']};"
        f"  border: {t['border']}px solid rgba(128,128,128,0.4);"
        f"  padding: 4px 8px; }}"
        f"QPushButton:hover, QPushButton:pressed {{"
        f"  background-color: {t['button_active']}; }}"
        f"QPushButton:disabled {{ color: {t['text_muted']}; }}"
        f"QLineEdit, QComboBox, QSpinBox, QTimeEdit {{"
        f"  background-color: {t['input_bg']}; color: {t['text']};"
        f"  border: {t['border']}px solid {t['separator']}; padding: 2px 4px; }}"
        f"QScrollArea {{ border: none; }}"
        f"QToolTip {{ color: {t['text']}; background-color: {t['button_bg']};"
        f"  border: 1px solid {t['separator']}; }}"
    )
