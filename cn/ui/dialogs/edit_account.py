"""Edit dialog for a single account's name and last drop time."""

from PySide6.QtCore import Qt
from PySide6.QtGui import QFont
from PySide6.QtWidgets import (
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QLabel,
    QLineEdit,
    QVBoxLayout,
)
from cn.core.clock import utc_now
from cn.util import format_date, parse_date


# Error text for the edit fields, empty when they are fine. A last drop has to be in the past.
def edit_error(name, date_text, date_format, now):
    if not name.strip():
        return "Name can't be empty."
    try:
        last_drop = parse_date(date_text, date_format)
    except ValueError:
        return f"Last drop must look like {date_format}."
    if last_drop > now:
        return "Last drop can't be in the future."
    return ""


# Modal dialog opened from a row's Edit button. The last drop text is parsed as the user types, and OK stays
# disabled until both fields are valid, so MainWindow never receives a bad date.
class EditAccountDialog(QDialog):

    def __init__(self, parent, name, last_drop, date_format, theme, clock=utc_now):
        super().__init__(parent)
        self.setWindowTitle("Edit account")
        self.setWindowFlags(self.windowFlags() | Qt.WindowStaysOnTopHint)
        self.setModal(True)

        # Output attributes, read by MainWindow after the dialog closes
        self.chosen_name = name
        self.chosen_last_drop = last_drop

        self._date_format = date_format
        self._clock = clock
        self._theme = theme

        outer = QVBoxLayout(self)
        form = QFormLayout()

        self._name = QLineEdit(name)
        self._name.setFont(QFont("Calibri", 12))
        self._name.textChanged.connect(self._validate)
        form.addRow("Account name:", self._name)

        self._initial_date_text = format_date(last_drop, date_format)
        self._date = QLineEdit(self._initial_date_text)
        self._date.setFont(QFont("Calibri", 12))
        self._date.setToolTip(f"Local time, formatted as {date_format}")
        self._date.textChanged.connect(self._validate)
        form.addRow("Last drop:", self._date)
        outer.addLayout(form)

        self._error_lbl = QLabel("")
        self._error_lbl.setStyleSheet(f"color: {theme['remaining']};")
        outer.addWidget(self._error_lbl)

        self._buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        self._buttons.accepted.connect(self._apply)
        self._buttons.rejected.connect(self.reject)
        outer.addWidget(self._buttons)

        self._validate()

    def _validate(self):
        error = edit_error(self._name.text(), self._date.text(), self._date_format, self._clock())
        self._error_lbl.setText(error)
        self._buttons.button(QDialogButtonBox.Ok).setEnabled(not error)
        return not error

    def _apply(self):
        if not self._validate():
            return
        self.chosen_name = self._name.text().strip()
        # Untouched text keeps the exact stored instant, the display format drops sub-second precision
        if self._date.text() != self._initial_date_text:
            self.chosen_last_drop = parse_date(self._date.text(), self._date_format)
        self.accept()
