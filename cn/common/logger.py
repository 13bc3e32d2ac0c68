import logging
from pathlib import Path
from logging.handlers import RotatingFileHandler
from cn.common.setup import PATHS
from datetime import datetime

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s:%(filename)s:%(lineno)d] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Returns the app logger, attaching each handler only once so repeat calls are harmless.
def get_logger(
        name = "casesnotifier",
        level = logging.INFO,
        log_dir: Path | None = None,
        max_bytes = 5 * 1024 * 1024,
        backup_count = 5,
        persistent = True,
        console = False,
        historical_debugs: int = 10
) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.propagate = False
    logger.setLevel(level)

    log_dir = log_dir or PATHS.logs
    log_dir.mkdir(parents=True, exist_ok=True)

    fmt = logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT)

    def _has(handler_name):
        return any(h.get_name() == handler_name for h in logger.handlers)

    def _attach(handler, handler_name, handler_level=level):
        handler.setLevel(handler_level)
        handler.setFormatter(fmt)
        handler.set_name(handler_name)
        logger.addHandler(handler)

    # Rotating log that survives across runs
    if persistent and not _has(f"{name}:persistent"):
        _attach(
            RotatingFileHandler(
                filename=log_dir / f"{name}.log",
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            ),
            f"{name}:persistent",
        )

    # latest.log only ever holds the current run
    if not _has(f"{name}:latest"):
        _attach(
            logging.FileHandler(filename=log_dir / "latest.log", mode="w", encoding="utf-8"),
            f"{name}:latest",
        )

    # One full debug log per run, keeping the newest `historical_debugs` of them
    if historical_debugs > 0 and not _has(f"{name}:historical_debug"):
        debug_dir = log_dir / "debug"
        debug_dir.mkdir(parents=True, exist_ok=True)
        run_path = debug_dir / f"{name}_{datetime.now():%Y-%m-%d_%H-%M-%S}.log"
        _attach(
            logging.FileHandler(filename=run_path, encoding="utf-8"),
            f"{name}:historical_debug",
            handler_level=logging.DEBUG,
        )

        runs = sorted(debug_dir.glob(f"{name}_*.log"), key=lambda p: p.stat().st_mtime, reverse=True)
        for run in runs[historical_debugs:]:
            try: run.unlink()
            except OSError: pass

    if console and not _has(f"{name}:console"):
        _attach(logging.StreamHandler(), f"{name}:console")

    return logger

log = get_logger(level=logging.DEBUG, console=False, historical_debugs=10)
log.info("=== CASES NOTIFIER SESSION STARTED ===")
