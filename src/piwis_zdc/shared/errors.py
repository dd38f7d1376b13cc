"""Exception hierarchy for ZDC session loading.

Every error raised while locating, reading or binding a session export derives
from ZdcError, so callers can catch the whole family at once. Construction is
all-or-nothing: any of these aborts the session being built.
"""

from typing import Optional


class ZdcError(Exception):
    """Base exception for all session loading errors."""


class SessionPathError(ZdcError):
    """Raised when the supplied session path is missing or not a directory."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


class SessionNotFoundError(ZdcError):
    """Raised when no session export matches in the scanned directory."""

    def __init__(self, message: str, directory: Optional[str] = None) -> None:
        super().__init__(message)
        self.directory = directory


class AmbiguousSessionError(SessionNotFoundError):
    """Raised when several files match and no single export can be chosen."""

    def __init__(
        self,
        message: str,
        directory: Optional[str] = None,
        candidates: Optional[list] = None,
    ) -> None:
        super().__init__(message, directory)
        self.candidates = candidates or []


class DocumentSyntaxError(ZdcError):
    """Raised when the export is not well-formed XML.

    Attributes:
        path: Document path of the last element starting at or before the
            error line, when a recovering parse can tell
    """

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
        path: Optional[str] = None,
    ) -> None:
        location = ""
        if source is not None:
            location = f" in {source}"
        if line is not None:
            location += f" at line {line}"
            if column is not None:
                location += f", column {column}"
        if path:
            location += f" (in {path})"
        super().__init__(f"{message}{location}")
        self.source = source
        self.line = line
        self.column = column
        self.path = path


class SchemaError(ZdcError):
    """Raised when a well-formed document does not match the session schema.

    Attributes:
        path: Document path of the offending element, e.g.
            ``ZDC/HexService/SECTIONS[2]/MEAS[1]``
        line: Source line of the offending element, when known
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        line: Optional[int] = None,
    ) -> None:
        location = ""
        if path:
            location = f" at {path}"
        if line is not None:
            location += f" (line {line})"
        super().__init__(f"{message}{location}")
        self.reason = message
        self.path = path
        self.line = line


class UnknownDiscriminantError(SchemaError):
    """Raised when a discriminant attribute carries an unrecognized value."""

    def __init__(
        self,
        kind: str,
        value: str,
        path: Optional[str] = None,
        line: Optional[int] = None,
    ) -> None:
        super().__init__(f"{kind} '{value}' not implemented", path, line)
        self.kind = kind
        self.value = value


class UnexpectedFieldError(SchemaError):
    """Raised for an attribute, child element or text the schema does not know."""

    def __init__(
        self,
        field_name: str,
        path: Optional[str] = None,
        line: Optional[int] = None,
    ) -> None:
        super().__init__(f"unknown field '{field_name}'", path, line)
        self.field_name = field_name


class MissingFieldError(SchemaError):
    """Raised when a required attribute, child element or text is absent."""

    def __init__(
        self,
        field_name: str,
        path: Optional[str] = None,
        line: Optional[int] = None,
    ) -> None:
        super().__init__(f"missing field '{field_name}'", path, line)
        self.field_name = field_name


class DuplicateFieldError(SchemaError):
    """Raised when a single-valued child element occurs more than once."""

    def __init__(
        self,
        field_name: str,
        path: Optional[str] = None,
        line: Optional[int] = None,
    ) -> None:
        super().__init__(f"duplicate field '{field_name}'", path, line)
        self.field_name = field_name


class InvariantViolationError(SchemaError):
    """Raised when an element claims a structure its variant cannot hold."""


class NestingDepthError(SchemaError):
    """Raised when element nesting exceeds the configured ceiling."""

    def __init__(
        self,
        max_depth: int,
        path: Optional[str] = None,
        line: Optional[int] = None,
    ) -> None:
        super().__init__(f"nesting deeper than {max_depth} levels", path, line)
        self.max_depth = max_depth
