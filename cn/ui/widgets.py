"""Row widget builders: account rows, the ready-count header, and the footer.

Each builder returns a (container, widget_dict) tuple. The container is a QWidget
that can be inserted into the account list layout; widget_dict maps logical names
to sub-widgets so the tick loop can update text without rebuilding.
"""

from dataclasses import dataclass

from PySide6.QtCore import Qt
from PySide6.QtGui import QFont
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from cn.util import format_date, format_status


@dataclass
class BuildContext:
    """Values shared by every row builder in one rebuild pass."""
    theme: dict
    font_family: str
    date_format: str
    name_font: QFont
    body_font: QFont
    status_font: QFont

    @staticmethod
    def compute(theme, font_family, date_format):
        name_font = QFont(font_family, 14)
        name_font.setBold(True)
        status_font = QFont(font_family, 12)
        status_font.setBold(True)
        return BuildContext(
            theme=theme, font_family=font_family, date_format=date_format,
            name_font=name_font, body_font=QFont(font_family, 11),
            status_font=status_font,
        )


def status_color(theme, status):
    return theme["ready"] if status.is_ready else theme["remaining"]


def build_header(ctx, ready, total):
    """Top bar with the "Accounts ready: x/y" summary."""
    header = QWidget()
    header.setObjectName("header")
    lay = QHBoxLayout(header)
    lay.setContentsMargins(0, 0, 0, 0)

    ready_lbl = QLabel(f"Accounts ready: {ready}/{total}")
    ready_lbl.setFont(ctx.status_font)
    lay.addWidget(ready_lbl)
    lay.addStretch()

    return header, {"ready": ready_lbl}


def build_account_row(ctx, timer, status, on_edit, on_delete, on_reset):
    """One account block: name, last/next drop, live status and its three actions."""
    t = ctx.theme
    rc = QWidget()
    rc.setObjectName("accountRow")
    rc.setStyleSheet(
        f"#accountRow {{ border-bottom: 1px solid {t['separator']}; }}")
    rc_lay = QVBoxLayout(rc)
    rc_lay.setContentsMargins(0, 4, 0, 8)
    rc_lay.setSpacing(2)

    name_lbl = QLabel(timer.name)
    name_lbl.setFont(ctx.name_font)
    rc_lay.addWidget(name_lbl)

    last_lbl = QLabel(f"Last drop: {format_date(timer.last_reset, ctx.date_format)}")
    last_lbl.setFont(ctx.body_font)
    rc_lay.addWidget(last_lbl)

    next_lbl = QLabel(f"Next drop: {format_date(timer.next_reset, ctx.date_format)}")
    next_lbl.setFont(ctx.body_font)
    next_lbl.setStyleSheet(f"color: {t['text_muted']};")
    rc_lay.addWidget(next_lbl)

    status_lbl = QLabel(format_status(status))
    status_lbl.setFont(ctx.status_font)
    status_lbl.setStyleSheet(f"color: {status_color(t, status)};")
    rc_lay.addWidget(status_lbl)

    btn_row = QHBoxLayout()
    btn_row.setSpacing(4)
    edit_btn = QPushButton("Edit")
    edit_btn.clicked.connect(lambda _=False: on_edit(timer.id))
    delete_btn = QPushButton("Delete")
    delete_btn.clicked.connect(lambda _=False: on_delete(timer.id))
    reset_btn = QPushButton("Reset timer")
    reset_btn.setToolTip("Mark a case as dropped right now")
    reset_btn.clicked.connect(lambda _=False: on_reset(timer.id))
    for btn in (edit_btn, delete_btn, reset_btn):
        btn.setFont(ctx.body_font)
        btn_row.addWidget(btn)
    btn_row.addStretch()
    rc_lay.addLayout(btn_row)

    widget_dict = {
        "name": name_lbl, "last": last_lbl, "next": next_lbl,
        "status": status_lbl, "edit": edit_btn, "delete": delete_btn,
        "reset": reset_btn, "container": rc,
    }
    return rc, widget_dict


def build_footer(ctx, on_add, on_config):
    """Footer with the name input, Add Account and the settings gear."""
    footer = QWidget()
    footer.setObjectName("footer")
    f_lay = QHBoxLayout(footer)
    f_lay.setContentsMargins(0, 0, 0, 0)
    f_lay.setSpacing(4)

    add_input = QLineEdit()
    add_input.setFont(ctx.body_font)
    add_input.setPlaceholderText("Account name...")
    add_input.returnPressed.connect(on_add)

    add_btn = QPushButton("Add Account")
    add_btn.setFont(ctx.body_font)
    add_btn.setToolTip("Add an account whose last drop is right now")
    add_btn.clicked.connect(on_add)

    cfg_btn = QPushButton("⚙")
    cfg_btn.setFont(ctx.body_font)
    cfg_btn.setToolTip("Settings")
    cfg_btn.clicked.connect(on_config)

    f_lay.addWidget(add_input, 1)
    f_lay.addWidget(add_btn)
    f_lay.addWidget(cfg_btn)

    return footer, {"add_input": add_input, "add_btn": add_btn, "cfg_btn": cfg_btn}


def build_empty_label(ctx):
    lbl = QLabel("No accounts. Add one to begin!")
    lbl.setFont(ctx.body_font)
    lbl.setAlignment(Qt.AlignCenter)
    lbl.setStyleSheet(f"color: {ctx.theme['text_muted']};")
    return lbl
