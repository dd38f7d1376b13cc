"""Typed loader for ZDC vehicle-diagnostics session exports.

A session export is an XML file written by the diagnostic tester. This
package binds it to an immutable tree of sections, measurements and values
and offers title/label lookups over it.

Progressive API Disclosure:
- Level 1: load_session() on a session directory
- Level 2: parse_session_file() / parse_session_string() with a LoaderConfig
- Level 3: the model parsers (parse_measurement(), parse_section(), ...)
"""

__version__ = "0.1.0"
__author__ = "piwis-zdc developers"

from .api import (
    iter_values,
    load_session,
    measurement_by_title,
    parse_session_file,
    parse_session_string,
    section_by_title,
    submeasurement_by_title,
    value_by_label,
)
from .model import (
    AlphaValue,
    CodingMeasurement,
    EcuSection,
    ExtendedFaultMemoryMeasurement,
    FaultMeasurement,
    IdentificationMeasurement,
    MeasuredValuesMeasurement,
    Measurement,
    NumberValue,
    Section,
    Value,
    ZdcSession,
)
from .shared.config import LoaderConfig
from .shared.errors import (
    AmbiguousSessionError,
    DocumentSyntaxError,
    InvariantViolationError,
    SchemaError,
    SessionNotFoundError,
    SessionPathError,
    UnknownDiscriminantError,
    ZdcError,
)

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: loading and lookups
    "load_session",
    "section_by_title",
    "measurement_by_title",
    "submeasurement_by_title",
    "value_by_label",
    "iter_values",

    # Level 2: explicit sources and configuration
    "parse_session_file",
    "parse_session_string",
    "LoaderConfig",

    # Model
    "ZdcSession",
    "Section",
    "EcuSection",
    "Measurement",
    "CodingMeasurement",
    "IdentificationMeasurement",
    "FaultMeasurement",
    "MeasuredValuesMeasurement",
    "ExtendedFaultMemoryMeasurement",
    "Value",
    "NumberValue",
    "AlphaValue",

    # Errors
    "ZdcError",
    "SessionPathError",
    "SessionNotFoundError",
    "AmbiguousSessionError",
    "DocumentSyntaxError",
    "SchemaError",
    "UnknownDiscriminantError",
    "InvariantViolationError",
]
