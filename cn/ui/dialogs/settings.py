"""Configuration dialog for Cases Notifier with a tabbed sidebar layout."""

from PySide6.QtCore import Qt, QTime, QUrl
from PySide6.QtGui import QDesktopServices, QFont
from PySide6.QtWidgets import (
    QAbstractSpinBox,
    QComboBox,
    QDialog,
    QFrame,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QPushButton,
    QSpinBox,
    QStackedWidget,
    QTimeEdit,
    QVBoxLayout,
    QWidget,
)
from cn.common.setup import PATHS
from cn.core.schedule import WEEKDAY_NAMES, ResetRule
from cn.ui.theme import THEMES, DEFAULT_THEME

_TIMEZONES = ["UTC", "local"]

# Simple tabbed settings dialog with a left sidebar for different categories. Opens from the gear in the footer.
class ConfigDialog(QDialog):

    def __init__(self, parent, cfg):
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setWindowFlags(self.windowFlags() | Qt.WindowStaysOnTopHint)
        self.setModal(True)

        # Output attributes, read by MainWindow after dialog closes
        self.chosen = dict(cfg)
        self.changed = False

        outer = QVBoxLayout(self)
        body = QHBoxLayout()

        # Left sidebar
        self._tab_list = QListWidget()
        self._tab_list.setFixedWidth(140)
        self._tab_list.setFont(QFont("Calibri", 12))
        self._tab_list.addItem("General")
        self._tab_list.addItem("Weekly Reset")
        self._tab_list.addItem("Appearance")
        self._tab_list.setCurrentRow(0)
        self._tab_list.currentRowChanged.connect(self._on_tab_changed)
        body.addWidget(self._tab_list)

        # Right content
        self._stack = QStackedWidget()
        self._stack.addWidget(self._build_general_page(cfg))
        self._stack.addWidget(self._build_reset_page(cfg))
        self._stack.addWidget(self._build_appearance_page(cfg))
        body.addWidget(self._stack, 1)
        outer.addLayout(body, 1)

        btn_row = QHBoxLayout()
        btn_row.addStretch()
        apply_btn = QPushButton("Apply")
        apply_btn.setFont(QFont("Calibri", 12))
        apply_btn.clicked.connect(self._apply)
        btn_row.addWidget(apply_btn)
        outer.addLayout(btn_row)

    def _on_tab_changed(self, index):
        self._stack.setCurrentIndex(index)

    # Label + combo row, the layout every simple setting here uses.
    @staticmethod
    def _combo_row(lay, label, tooltip, items, current):
        row = QHBoxLayout()
        lbl = QLabel(label)
        lbl.setFont(QFont("Calibri", 12, QFont.Bold))
        lbl.setToolTip(tooltip)
        combo = QComboBox()
        combo.addItems(items)
        combo.setCurrentText(current)
        combo.setMinimumWidth(200)
        combo.setToolTip(tooltip)
        row.addWidget(lbl)
        row.addWidget(combo)
        lay.addLayout(row)
        return combo

    # ------------------------------------------------------------------ #
    #  General page                                                        #
    # ------------------------------------------------------------------ #

    def _build_general_page(self, cfg):
        page = QWidget()
        lay = QVBoxLayout(page)
        lay.setSpacing(12)

        self._always_on_top = self._combo_row(
            lay, "Window Behavior:",
            "Always On Top: stays above other windows.\n\nNormal Window: behaves like a normal window.",
            ["Always On Top", "Normal Window"],
            "Always On Top" if cfg.get("always_on_top", False) else "Normal Window",
        )
        self._confirm_delete = self._combo_row(
            lay, "Confirm Delete:",
            "Whether to ask before deleting an account.",
            ["Yes", "No"], "Yes" if cfg.get("confirm_delete", True) else "No",
        )
        self._confirm_reset = self._combo_row(
            lay, "Confirm Reset:",
            "Whether to ask before resetting an account's drop timer.",
            ["Yes", "No"], "Yes" if cfg.get("confirm_reset", True) else "No",
        )

        # Snapshot Interval
        row = QHBoxLayout()
        lbl = QLabel("Snapshot Interval:")
        snapshot_tooltip = "Keep a fresh backup of the account list at most every N minutes."
        lbl.setFont(QFont("Calibri", 12, QFont.Bold))
        lbl.setToolTip(snapshot_tooltip)
        self._snapshot_interval = QSpinBox()
        self._snapshot_interval.setRange(1, 60)
        self._snapshot_interval.setValue(cfg.get("snapshot_min_minutes", 5))
        self._snapshot_interval.setSuffix(" min")
        self._snapshot_interval.setMinimumWidth(200)
        self._snapshot_interval.setToolTip(snapshot_tooltip)
        row.addWidget(lbl)
        row.addWidget(self._snapshot_interval)
        lay.addLayout(row)

        sep = QFrame()
        sep.setFrameShape(QFrame.HLine)
        sep.setFrameShadow(QFrame.Sunken)
        lay.addWidget(sep)

        btn_row = QHBoxLayout()
        btn_row.addStretch()
        folder_btn = QPushButton("Open Snapshot Folder")
        folder_btn.setFont(QFont("Calibri", 11))
        folder_btn.clicked.connect(
            lambda: QDesktopServices.openUrl(QUrl.fromLocalFile(str(PATHS.snapshots)))
        )
        btn_row.addWidget(folder_btn)
        lay.addLayout(btn_row)

        lay.addStretch()
        return page

    # ------------------------------------------------------------------ #
    #  Weekly Reset page                                                   #
    # ------------------------------------------------------------------ #

    def _build_reset_page(self, cfg):
        page = QWidget()
        lay = QVBoxLayout(page)
        lay.setSpacing(12)

        self._reset_day = self._combo_row(
            lay, "Reset Day:",
            "Weekday on which a new case drop becomes available.",
            WEEKDAY_NAMES, WEEKDAY_NAMES[cfg.get("reset_weekday", 2)],
        )

        row = QHBoxLayout()
        lbl = QLabel("Reset Time:")
        reset_time_tooltip = "Time of day, in the zone below, when the weekly drop resets."
        lbl.setFont(QFont("Calibri", 12, QFont.Bold))
        lbl.setToolTip(reset_time_tooltip)
        self._reset_time = QTimeEdit()
        self._reset_time.setButtonSymbols(QAbstractSpinBox.NoButtons)
        self._reset_time.setTime(QTime(cfg.get("reset_hour", 0), cfg.get("reset_minute", 0)))
        self._reset_time.setDisplayFormat("HH:mm")
        self._reset_time.setMinimumWidth(200)
        self._reset_time.setToolTip(reset_time_tooltip)
        self._reset_time.timeChanged.connect(self._refresh_rule_preview)
        row.addWidget(lbl)
        row.addWidget(self._reset_time)
        lay.addLayout(row)

        current_zone = cfg.get("reset_timezone", "UTC")
        zones = _TIMEZONES if current_zone in _TIMEZONES else _TIMEZONES + [current_zone]
        self._reset_zone = self._combo_row(
            lay, "Time Zone:",
            "Zone the reset time is measured in. 'local' follows this machine's clock.",
            zones, current_zone,
        )

        self._reset_day.currentTextChanged.connect(self._refresh_rule_preview)
        self._reset_zone.currentTextChanged.connect(self._refresh_rule_preview)

        self._rule_preview = QLabel("")
        self._rule_preview.setFont(QFont("Calibri", 11))
        lay.addWidget(self._rule_preview)

        lay.addStretch()
        self._refresh_rule_preview()
        return page

    def _current_rule(self):
        t = self._reset_time.time()
        return ResetRule(
            weekday=WEEKDAY_NAMES.index(self._reset_day.currentText()),
            hour=t.hour(),
            minute=t.minute(),
            timezone=self._reset_zone.currentText(),
        )

    def _refresh_rule_preview(self):
        self._rule_preview.setText(f"Drops reset every {self._current_rule().describe()}")

    # ------------------------------------------------------------------ #
    #  Appearance page                                                     #
    # ------------------------------------------------------------------ #

    def _build_appearance_page(self, cfg):
        page = QWidget()
        lay = QVBoxLayout(page)
        lay.setSpacing(8)

        theme = cfg.get("theme", DEFAULT_THEME)
        self._theme = self._combo_row(
            lay, "Program Theme:", "Color scheme of the program.",
            list(THEMES), theme if theme in THEMES else DEFAULT_THEME,
        )

        lay.addStretch()
        return page

    # ------------------------------------------------------------------ #
    #  Apply                                                               #
    # ------------------------------------------------------------------ #

    def _apply(self):
        rule = self._current_rule()
        self.chosen.update({
            "always_on_top": self._always_on_top.currentText() == "Always On Top",
            "confirm_delete": self._confirm_delete.currentText() == "Yes",
            "confirm_reset": self._confirm_reset.currentText() == "Yes",
            "snapshot_min_minutes": self._snapshot_interval.value(),
            "reset_weekday": rule.weekday,
            "reset_hour": rule.hour,
            "reset_minute": rule.minute,
            "reset_timezone": rule.timezone,
            "theme": self._theme.currentText(),
        })
        self.changed = True
        self.accept()
