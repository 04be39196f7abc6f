"""
mdp: render Markdown to sanitized HTML and preview it in the default browser.
"""

from __future__ import annotations

__version__ = "0.1.0"

from mdp.errors import (  # noqa: E402
    InputReadError,
    MdpError,
    OutputWriteError,
    PreviewLaunchError,
    RenderError,
    TemplateLoadError,
    UsageError,
)
from mdp.render import DEFAULT_TEMPLATE, render  # noqa: E402
from mdp.pipeline import STDIN_NAME, FileInput, StreamInput, run  # noqa: E402

__all__ = [
    "__version__",
    "DEFAULT_TEMPLATE",
    "FileInput",
    "InputReadError",
    "MdpError",
    "OutputWriteError",
    "PreviewLaunchError",
    "RenderError",
    "STDIN_NAME",
    "StreamInput",
    "TemplateLoadError",
    "UsageError",
    "render",
    "run",
]
