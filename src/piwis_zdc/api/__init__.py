"""Loading and navigation API for ZDC session exports."""

from .loader import (
    find_session_file,
    find_session_files,
    load_session,
    parse_session_file,
    parse_session_string,
)
from .query import (
    iter_values,
    measurement_by_title,
    section_by_title,
    submeasurement_by_title,
    value_by_label,
)

__all__ = [
    "find_session_file",
    "find_session_files",
    "load_session",
    "parse_session_file",
    "parse_session_string",
    "iter_values",
    "measurement_by_title",
    "section_by_title",
    "submeasurement_by_title",
    "value_by_label",
]
