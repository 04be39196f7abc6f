#!/usr/bin/env python3
"""
Pipeline driver: read -> render -> write -> (preview -> delete).
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import Callable, Optional, TextIO, Union

from mdp.errors import InputReadError
from mdp.output import write_html
from mdp.preview import preview
from mdp.render import render

# Display name used when the Markdown comes from standard input
STDIN_NAME = "stdin"


@dataclass(frozen=True)
class Document:
    data: bytes
    name: str


@dataclass(frozen=True)
class FileInput:
    path: str

    def read(self) -> Document:
        try:
            with open(self.path, "rb") as f:
                data = f.read()
        except OSError as e:
            raise InputReadError(f"cannot read {self.path}: {e.strerror or e}") from e
        return Document(data=data, name=os.path.basename(self.path))


@dataclass(frozen=True)
class StreamInput:
    data: bytes
    name: str = STDIN_NAME

    def read(self) -> Document:
        return Document(data=self.data, name=self.name)


Source = Union[FileInput, StreamInput]


def _remove_quietly(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        print(f"[mdp] WARN: could not remove {path}: {e}", file=sys.stderr)


def run(
    source: Source,
    template_source: Optional[str],
    out: TextIO,
    skip_preview: bool = False,
    previewer: Optional[Callable[[str], None]] = None,
) -> str:
    """
    Render `source`, write it to a temp file and print the file path to `out`.

    Unless `skip_preview` is set, the file is opened with `previewer` and
    deleted afterwards, even when the preview fails. Returns the file path.
    """
    doc = source.read()
    html_data = render(doc.data, template_source, doc.name)

    out_name = write_html(html_data)
    print(out_name, file=out, flush=True)

    if skip_preview:
        return out_name

    try:
        (previewer or preview)(out_name)
    finally:
        _remove_quietly(out_name)
    return out_name


__all__ = ["Document", "FileInput", "STDIN_NAME", "Source", "StreamInput", "run"]
