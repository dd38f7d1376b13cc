"""Consumers of loaded sessions: value dump and session diff."""

from .diff import DiffEntry, DiffKind, diff_frame, diff_sessions, format_diff, session_frame
from .dump import dump, dump_lines

__all__ = [
    "DiffEntry",
    "DiffKind",
    "diff_frame",
    "diff_sessions",
    "format_diff",
    "session_frame",
    "dump",
    "dump_lines",
]
