#!/usr/bin/env python3
"""
Open a file with the platform's default application.

The launcher (xdg-open / open / cmd.exe start) usually hands the file to a
browser and exits right away. The browser may read the file later, so
preview() always waits GRACE_PERIOD seconds before returning; the caller
deletes the file afterwards. A viewer slower than that will find the file
gone. This is a known race, not something preview() can guarantee.
"""

from __future__ import annotations

import platform
import shutil
import subprocess
import time
from typing import Optional

from mdp.errors import PreviewLaunchError

GRACE_PERIOD = 2.0

# platform.system().lower() -> (launcher, args placed before the file path)
LAUNCHERS: dict[str, tuple[str, tuple[str, ...]]] = {
    "linux": ("xdg-open", ()),
    "freebsd": ("xdg-open", ()),
    "openbsd": ("xdg-open", ()),
    "netbsd": ("xdg-open", ()),
    "windows": ("cmd.exe", ("/C", "start")),
    "darwin": ("open", ()),
}


def launch_command(path: str, system: Optional[str] = None) -> list[str]:
    system = (system or platform.system()).lower()
    try:
        name, prefix = LAUNCHERS[system]
    except KeyError:
        raise PreviewLaunchError(f"OS not supported: {system or 'unknown'}") from None

    exe = shutil.which(name)
    if exe is None:
        raise PreviewLaunchError(f"launcher not found in PATH: {name}")
    return [exe, *prefix, path]


def preview(path: str, grace: float = GRACE_PERIOD, system: Optional[str] = None) -> None:
    """
    Open `path` in the default viewer, then wait `grace` seconds.

    Raises PreviewLaunchError when the platform is unsupported, the launcher
    is missing, or the launcher fails. The wait happens even on failure.
    """
    cmd = launch_command(path, system=system)
    try:
        subprocess.run(cmd, check=True)
    except subprocess.CalledProcessError as e:
        raise PreviewLaunchError(f"{cmd[0]} exited with status {e.returncode}") from e
    except OSError as e:
        raise PreviewLaunchError(f"failed to start {cmd[0]}: {e}") from e
    finally:
        # Give the browser some time to open the file before it's deleted
        time.sleep(grace)


__all__ = ["GRACE_PERIOD", "LAUNCHERS", "launch_command", "preview"]
