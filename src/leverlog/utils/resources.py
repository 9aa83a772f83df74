import os, sys

APP_DIRNAME = "LeverLog"


def writable_dir() -> str:
    """
    Return a folder LeverLog may write its entry store into.
    Search order:
      1) Folder holding the AppImage (Linux bundle)
      2) Folder holding the frozen executable (PyInstaller)
      3) ~/LeverLog
    The folder is created if missing.
    """
    if "APPIMAGE" in os.environ:
        base = os.path.dirname(os.environ["APPIMAGE"])
    elif getattr(sys, "frozen", False):
        base = os.path.dirname(sys.executable)
    else:
        base = os.path.join(os.path.expanduser("~"), APP_DIRNAME)

    # bundle folders can be read-only (e.g. /Applications); fall back to home
    if os.path.isdir(base) and not os.access(base, os.W_OK):
        base = os.path.join(os.path.expanduser("~"), APP_DIRNAME)

    os.makedirs(base, exist_ok=True)
    return base
