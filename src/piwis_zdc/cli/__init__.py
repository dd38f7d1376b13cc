"""Command-line interface for ZDC session exports.

This module provides the ``piwis-zdc`` tool with its ``dump`` and ``diff``
commands.
"""

from .main import main

__all__ = ["main"]
