import sys
from cn.common.logger import log

# Entry point for `python -m cn` and the `casesnotifier` console script
def run() -> None:
    try:
        from cn.ui.app import main
        main()
    except SystemExit:
        raise
    except Exception:
        # Full stack trace, always
        log.exception("Uncaught exception in entrypoint, exiting")
        sys.exit(1)

if __name__ == "__main__":
    run()
