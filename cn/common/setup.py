import os
import sys
from pathlib import Path
from dataclasses import dataclass

# Creates the directory (and parents) if missing.
def ensure_directory(path: Path):
    path.mkdir(parents=True, exist_ok=True)
    return path

# Picks the per-user data folder. CASESNOTIFIER_HOME always wins, then APPDATA on Windows, then XDG.
def _user_data_dir() -> Path:
    override = os.getenv("CASESNOTIFIER_HOME")
    if override:
        return Path(override)
    appdata = os.getenv("APPDATA")
    if sys.platform == "win32" and appdata:
        return Path(appdata) / "CasesNotifier"
    xdg = os.getenv("XDG_DATA_HOME")
    if xdg:
        return Path(xdg) / "casesnotifier"
    return Path.home() / ".local" / "share" / "casesnotifier"

# Dataclass for accessing paths across program.
@dataclass(frozen=False)
class ProjectPaths:

    root: Path
    data: Path
    assets: Path
    legacy: Path

    logs: Path
    current: Path
    snapshots: Path

    @staticmethod
    def build(data_dir: Path | None = None):
        # Install root when frozen, otherwise the checkout folder
        if getattr(sys, "frozen", False):
            root = Path(sys.executable).resolve().parent
        else:
            root = Path(__file__).resolve().parents[2]

        # Icons and such. Optional, the UI falls back to no icon.
        assets = root / "assets"

        data = ensure_directory(data_dir or _user_data_dir())

        # The 1.x notifier wrote accounts.dat into its working directory, so look there first.
        legacy = Path.cwd() / "accounts.dat"
        if not legacy.exists():
            legacy = root / "accounts.dat"

        logs = ensure_directory(data / "logs")
        current = ensure_directory(data / "current")
        snapshots = ensure_directory(data / "snapshots")

        return ProjectPaths(
            root=root,
            data=data,
            assets=assets,
            legacy=legacy,
            logs=logs,
            current=current,
            snapshots=snapshots,
        )
PATHS = ProjectPaths.build()
