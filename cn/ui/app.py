import sys
import time
from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QIcon
from PySide6.QtWidgets import (
    QApplication,
    QDialog,
    QMainWindow,
    QMessageBox,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)
from cn.common.logger import log
from cn.common.setup import PATHS
from cn.core import config
from cn.core.snapshot import create_snapshot, prune_snapshots
from cn.ui.dialogs import ConfigDialog, EditAccountDialog
from cn.ui.theme import THEMES, DEFAULT_THEME, build_stylesheet
from cn.ui.widgets import (
    BuildContext,
    build_account_row,
    build_empty_label,
    build_footer,
    build_header,
    status_color,
)
from cn.util import format_date, format_status


# ---------------------------------------------------------------------------
# Main window
# ---------------------------------------------------------------------------

# Main window of the notifier. Shows every account with its last/next drop and a live countdown.
class MainWindow(QMainWindow):

    def __init__(self, clock=None):
        super().__init__()
        self.setWindowTitle("Cases Notifier")
        icon_path = PATHS.assets / "case_notifier.png"
        if icon_path.exists():
            self.setWindowIcon(QIcon(str(icon_path)))
        self.resize(480, 560)

        # -- Load state --
        state = config.load_state()
        self.settings = state["settings"]
        if self.settings["theme"] not in THEMES:
            self.settings["theme"] = DEFAULT_THEME
        if clock is None:
            self.accounts = config.accounts_from_state(state)
        else:
            self.accounts = config.accounts_from_state(state, clock)

        if self.settings["always_on_top"]:
            self.setWindowFlags(self.windowFlags() | Qt.WindowStaysOnTopHint)

        self._widgets = {}        # account id -> widget dict
        self._header = {}
        self._footer = {}

        # -- Snapshot handling --
        self._last_snapshot_time = 0.0

        # -- Build UI skeleton --
        central = QWidget()
        self.setCentralWidget(central)
        self._main_lay = QVBoxLayout(central)
        self._main_lay.setContentsMargins(10, 10, 10, 10)

        self._header_slot = QVBoxLayout()
        self._main_lay.addLayout(self._header_slot)

        self._scroll = QScrollArea()
        self._scroll.setWidgetResizable(True)
        self._list_widget = QWidget()
        self._list = QVBoxLayout(self._list_widget)
        self._list.setContentsMargins(0, 0, 0, 0)
        self._scroll.setWidget(self._list_widget)
        self._main_lay.addWidget(self._scroll, 1)

        self._footer_slot = QVBoxLayout()
        self._main_lay.addLayout(self._footer_slot)

        self._apply_style()
        self._rebuild_rows()

        # -- Tick timer (1 s) --
        self._timer = QTimer(self)
        self._timer.timeout.connect(self._tick)
        self._timer.start(1000)

        log.info(f"Main window ready with {len(self.accounts)} account(s), reset rule {self.accounts.rule.describe()}")

    # ------------------------------------------------------------------ #
    #  Style                                                               #
    # ------------------------------------------------------------------ #

    def _theme(self):
        return THEMES.get(self.settings["theme"], THEMES[DEFAULT_THEME])

    def _apply_style(self):
        style = build_stylesheet(self.settings["theme"])
        self.setStyleSheet(style)
        app = QApplication.instance()
        if app is not None:
            app.setStyleSheet(style)

    def _context(self):
        return BuildContext.compute(self._theme(), "Calibri", self.settings["date_format"])

    # ------------------------------------------------------------------ #
    #  Row building                                                        #
    # ------------------------------------------------------------------ #

    @staticmethod
    def _clear(layout):
        while layout.count():
            item = layout.takeAt(0)
            w = item.widget()
            if w:
                w.hide()
                w.deleteLater()

    def _rebuild_rows(self):
        """Tear down and recreate header, account rows and footer."""
        self._widgets.clear()
        for layout in (self._header_slot, self._list, self._footer_slot):
            self._clear(layout)

        ctx = self._context()
        pairs = self.accounts.statuses()
        ready = sum(1 for _, st in pairs if st.is_ready)

        header, self._header = build_header(ctx, ready, len(pairs))
        self._header_slot.addWidget(header)

        if not pairs:
            self._list.addWidget(build_empty_label(ctx))
        for timer, st in pairs:
            rc, wd = build_account_row(
                ctx, timer, st,
                on_edit=self._on_edit,
                on_delete=self._on_delete,
                on_reset=self._on_reset,
            )
            self._widgets[timer.id] = wd
            self._list.addWidget(rc)
        self._list.addStretch()

        footer, self._footer = build_footer(ctx, on_add=self._on_add, on_config=self._on_config)
        self._footer_slot.addWidget(footer)

    # ------------------------------------------------------------------ #
    #  Button handlers                                                     #
    # ------------------------------------------------------------------ #

    def _on_add(self):
        name = self._footer["add_input"].text().strip()
        if not name:
            return
        timer = self.accounts.add(name)
        log.info(f"Added account '{timer.name}'")
        self._save_state()
        self._try_snapshot(reason="account_added")
        self._rebuild_rows()

    def _on_edit(self, account_id):
        timer = self.accounts.get(account_id)
        dlg = EditAccountDialog(self, timer.name, timer.last_reset, self.settings["date_format"], self._theme(), clock=self.accounts.now)
        if dlg.exec() != QDialog.Accepted:
            return
        if dlg.chosen_name != timer.name:
            self.accounts.rename(account_id, dlg.chosen_name)
        if dlg.chosen_last_drop != timer.last_reset:
            self.accounts.set_last_drop(account_id, dlg.chosen_last_drop)
        self._save_state()
        self._rebuild_rows()

    def _on_delete(self, account_id):
        timer = self.accounts.get(account_id)
        if self.settings["confirm_delete"]:
            if QMessageBox.question(
                    self, "Confirm Delete",
                    f"Delete '{timer.name}'?"
            ) != QMessageBox.Yes:
                return
        self._try_snapshot(reason="before_delete", force=True)
        self.accounts.remove(account_id)
        self._save_state()
        self._rebuild_rows()

    def _on_reset(self, account_id):
        timer = self.accounts.get(account_id)
        if self.settings["confirm_reset"]:
            if QMessageBox.question(
                    self, "Confirm Reset",
                    f"Mark a case as dropped for '{timer.name}' right now?"
            ) != QMessageBox.Yes:
                return
        self._try_snapshot(reason="before_reset", force=True)
        self.accounts.reset(account_id)
        self._save_state()
        self._update_row(account_id)
        self._update_header()

    # ------------------------------------------------------------------ #
    #  Settings dialog                                                     #
    # ------------------------------------------------------------------ #

    def _on_config(self):
        dlg = ConfigDialog(self, self.settings)
        if dlg.exec() != QDialog.Accepted or not dlg.changed:
            return
        old_aot = self.settings["always_on_top"]
        self.settings = dlg.chosen
        self.accounts.set_rule(config.rule_from_settings(self.settings))

        self._save_state()
        self._try_snapshot(reason="settings_change", force=True)
        self._apply_style()
        self._rebuild_rows()

        if self.settings["always_on_top"] != old_aot:
            self.setWindowFlag(Qt.WindowStaysOnTopHint, self.settings["always_on_top"])
            self.show()

    # ------------------------------------------------------------------ #
    #  Display helpers                                                     #
    # ------------------------------------------------------------------ #

    def _update_row(self, account_id, now=None):
        w = self._widgets.get(account_id)
        if w is None:
            return
        timer = self.accounts.get(account_id)
        now = now or self.accounts.now()
        st = timer.current_status(now)
        fmt = self.settings["date_format"]
        w["last"].setText(f"Last drop: {format_date(timer.last_reset, fmt)}")
        w["next"].setText(f"Next drop: {format_date(timer.next_reset, fmt)}")
        w["status"].setText(format_status(st))
        w["status"].setStyleSheet(f"color: {status_color(self._theme(), st)};")

    def _update_header(self, now=None):
        ready, total = self.accounts.ready_count(now)
        self._header["ready"].setText(f"Accounts ready: {ready}/{total}")

    # ------------------------------------------------------------------ #
    #  Tick / snapshots                                                    #
    # ------------------------------------------------------------------ #

    def _tick(self):
        now = self.accounts.now()
        for timer in self.accounts:
            self._update_row(timer.id, now)
        self._update_header(now)
        self._try_snapshot(reason="tick")

    # ------------------------------------------------------------------ #
    #  Persistence helpers                                                 #
    # ------------------------------------------------------------------ #

    def _save_state(self):
        state = config.build_state(self.accounts, self.settings)
        config.save_state(state)
        return state

    def _try_snapshot(self, reason, force=False):
        now = time.monotonic()
        if not force and now - self._last_snapshot_time < self.settings["snapshot_min_minutes"] * 60:
            return None
        state = config.build_state(self.accounts, self.settings)
        created_snapshot_path = create_snapshot(state, reason)
        self._last_snapshot_time = now
        prune_snapshots()
        return created_snapshot_path

    # ------------------------------------------------------------------ #
    #  Window close                                                        #
    # ------------------------------------------------------------------ #

    def closeEvent(self, event):
        try:
            self._save_state()
            self._try_snapshot(reason="app_exit", force=True)
        except OSError as e:
            log.exception("Failed to save state on exit")
            QMessageBox.warning(self, "Save Error",
                                f"Failed to save state:\n{e}")
        event.accept()


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main():
    app = QApplication(sys.argv)
    window = MainWindow()
    window.show()
    sys.exit(app.exec())
