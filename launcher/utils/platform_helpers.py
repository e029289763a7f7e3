"""
OS helpers for opening things the way the desktop shell would.
"""

import os
import subprocess
import sys
from pathlib import Path


def expand_path(text: str) -> str:
    """Expand ``~`` and environment variables without touching the filesystem."""
    return os.path.expandvars(os.path.expanduser(text.strip()))


def is_absolute_path(text: str) -> bool:
    """True for absolute (or ``~``-rooted) paths on the current platform."""
    if not text or not text.strip():
        return False
    return os.path.isabs(expand_path(text))


def shell_open(path: str) -> None:
    """Open path via the OS shell."""
    if sys.platform == "win32":
        os.startfile(path)  # type: ignore[attr-defined]
    elif sys.platform == "darwin":
        subprocess.Popen(["open", path])
    else:
        subprocess.Popen(["xdg-open", path])


def reveal_in_folder(path: str) -> None:
    """Open the folder containing path, selecting it where the OS supports that."""
    if sys.platform == "win32":
        subprocess.Popen(["explorer.exe", f"/select,{path}"])
    elif sys.platform == "darwin":
        subprocess.Popen(["open", "-R", path])
    else:
        subprocess.Popen(["xdg-open", str(Path(path).parent)])


def launch_desktop_entry(path: str) -> int:
    """Launch a Linux .desktop entry, falling back to xdg-open."""
    app_name = os.path.basename(path).replace(".desktop", "")
    try:
        proc = subprocess.Popen(["gtk-launch", app_name])
    except FileNotFoundError:
        proc = subprocess.Popen(["xdg-open", path])
    return proc.pid


def run_elevated(path: str) -> int:
    """Run a program elevated."""
    if sys.platform == "win32":
        import ctypes
        ctypes.windll.shell32.ShellExecuteW(  # type: ignore[attr-defined]
            None, "runas", path, "", None, 1
        )
        return 0
    proc = subprocess.Popen(["sudo", path])
    return proc.pid
