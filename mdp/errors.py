#!/usr/bin/env python3
"""
Exceptions raised by the preview pipeline.

Every stage raises a subclass of MdpError; the CLI prints the message and
exits 1. Library errors are chained (`raise ... from exc`).
"""

from __future__ import annotations


class MdpError(Exception):
    """Base class for all mdp failures."""


class UsageError(MdpError):
    pass


class InputReadError(MdpError):
    pass


class TemplateLoadError(MdpError):
    pass


class RenderError(MdpError):
    pass


class OutputWriteError(MdpError):
    pass


class PreviewLaunchError(MdpError):
    pass


__all__ = [
    "MdpError",
    "UsageError",
    "InputReadError",
    "TemplateLoadError",
    "RenderError",
    "OutputWriteError",
    "PreviewLaunchError",
]
