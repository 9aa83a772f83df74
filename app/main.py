# app/main.py

import argparse
import logging
import os
import sys

from PySide6 import QtWidgets

from leverlog.config import STORE_FILENAME, WINDOW_TITLE, AppConfig
from leverlog.io.entry_store import EntryStore, StoreError
from leverlog.ui.main_window import MainWindow


def parse_args(argv=None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Front lever hold timer and history.")
    ap.add_argument("--store", help=f"path to the entry store file (default: $LEVERLOG_HOME/{STORE_FILENAME})")
    ap.add_argument("--log-level", help="DEBUG, INFO, WARNING or ERROR (default: $LEVERLOG_LOG_LEVEL or INFO)")
    return ap.parse_args(argv)


def build_config(args: argparse.Namespace) -> AppConfig:
    cfg = AppConfig.from_env(store_path=os.path.abspath(args.store) if args.store else None)
    if args.log_level:
        cfg.log_level = args.log_level.upper()
    return cfg


def main(argv=None) -> int:
    args = parse_args(argv)
    cfg = build_config(args)
    logging.basicConfig(
        level=getattr(logging, cfg.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger(__name__).info("[Main] Using store %s", cfg.store_path)

    app = QtWidgets.QApplication(sys.argv[:1])
    app.setApplicationName(WINDOW_TITLE)
    try:
        store = EntryStore(cfg.store_path)
    except StoreError as e:
        logging.getLogger(__name__).error("[Main] %s", e)
        QtWidgets.QMessageBox.critical(None, WINDOW_TITLE, f"Could not open the workout store:\n{e}")
        return 1

    win = MainWindow(cfg, store)
    win.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
