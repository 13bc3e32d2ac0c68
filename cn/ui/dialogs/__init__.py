from .edit_account import EditAccountDialog
from .settings import ConfigDialog

__all__ = ["EditAccountDialog", "ConfigDialog"]
