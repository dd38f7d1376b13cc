"""Typed, immutable model of a ZDC session export.

Key Components:
    ElementReader: Strict binding view over one XML element
    NumberValue, AlphaValue: Leaf values, selected by ``FORMAT``
    CodingMeasurement ... FaultMeasurement: Measurements, selected by ``OBJECT``
    EcuSection: Sections of the hex service, selected by ``OBJECT``
    ZdcSession: Root document
"""

from .binding import ElementReader
from .measurements import (
    CodingMeasurement,
    CommonMeasurement,
    ExtendedFaultMemoryMeasurement,
    FaultMeasurement,
    IdentificationMeasurement,
    MeasuredValuesMeasurement,
    Measurement,
    MeasurementBase,
    MeasurementKind,
    measurement_by_title,
    parse_measurement,
)
from .sections import CommonSection, EcuSection, Section, SectionKind, parse_section
from .session import (
    Comment,
    DiagnosisAddress,
    HexService,
    HumanTranslations,
    Parameter,
    ServiceMessage,
    ShortNameService,
    Translation,
    WaitEntry,
    ZdcSession,
    parse_session_element,
)
from .values import AlphaValue, NumberValue, Value, ValueFormat, parse_value, value_by_label

__all__ = [
    "ElementReader",
    "CodingMeasurement",
    "CommonMeasurement",
    "ExtendedFaultMemoryMeasurement",
    "FaultMeasurement",
    "IdentificationMeasurement",
    "MeasuredValuesMeasurement",
    "Measurement",
    "MeasurementBase",
    "MeasurementKind",
    "measurement_by_title",
    "parse_measurement",
    "CommonSection",
    "EcuSection",
    "Section",
    "SectionKind",
    "parse_section",
    "Comment",
    "DiagnosisAddress",
    "HexService",
    "HumanTranslations",
    "Parameter",
    "ServiceMessage",
    "ShortNameService",
    "Translation",
    "WaitEntry",
    "ZdcSession",
    "parse_session_element",
    "AlphaValue",
    "NumberValue",
    "Value",
    "ValueFormat",
    "parse_value",
    "value_by_label",
]
