#!/usr/bin/env python3
from __future__ import annotations

import os
import tempfile
from typing import Optional

from mdp.errors import OutputWriteError


def write_html(data: bytes, prefix: str = "mdp", suffix: str = ".html", directory: Optional[str] = None) -> str:
    """
    Write `data` to a fresh temp file (mdp*.html) and return its absolute path.
    """
    try:
        fd, path = tempfile.mkstemp(suffix=suffix, prefix=prefix, dir=directory)
    except OSError as e:
        raise OutputWriteError(f"failed to create output file: {e}") from e

    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        # mkstemp creates 0600; previews are plain readable files
        os.chmod(path, 0o644)
    except OSError as e:
        try:
            os.remove(path)
        except OSError:
            pass
        raise OutputWriteError(f"failed to write {path}: {e}") from e

    return os.path.abspath(path)


__all__ = ["write_html"]
