"""Measurement records of an ECU section.

A ``MEAS`` element has one of five shapes, selected by its ``OBJECT``
attribute rather than by its name. Binding happens in two phases: the element
is first read into CommonMeasurement, a superset record that accepts every
shape, and the record is then dispatched on ``OBJECT`` to its variant class.
Only fault records may contain nested ``MEAS`` elements.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Dict, Optional, Sequence, Tuple, Type, Union

from piwis_zdc.model.binding import ElementReader, read_text
from piwis_zdc.model.values import Value, parse_value, value_by_label
from piwis_zdc.shared.errors import InvariantViolationError, UnknownDiscriminantError

OBJECT_ATTRIBUTE = "OBJECT"
TITLE_ELEMENT = "TITLE"
VALUE_ELEMENT = "VALUE"
MEASUREMENT_ELEMENT = "MEAS"


class MeasurementKind(Enum):
    """Recognized ``OBJECT`` discriminants of a measurement."""

    CODING = "Codierung"
    IDENTIFICATION = "Identifikation"
    FAULT = "Fehler"
    MEASURED_VALUES = "Messwerte"
    EXTENDED_FAULT_MEMORY = "Erweiterter Fehlerspeicher"


@dataclass(frozen=True)
class CommonMeasurement:
    """Shape-agnostic reading of a ``MEAS`` element."""

    object: str
    title: str
    values: Optional[Tuple[Value, ...]] = None
    measurements: Optional[Tuple["Measurement", ...]] = None
    path: str = field(default="", compare=False)
    line: Optional[int] = field(default=None, compare=False)

    @classmethod
    def parse(cls, reader: ElementReader) -> "CommonMeasurement":
        return cls(
            object=reader.attribute(OBJECT_ATTRIBUTE),
            title=reader.child(TITLE_ELEMENT, read_text),
            values=reader.optional_children(VALUE_ELEMENT, parse_value),
            measurements=reader.optional_children(
                MEASUREMENT_ELEMENT, parse_measurement
            ),
            path=reader.path,
            line=reader.line,
        )


@dataclass(frozen=True)
class MeasurementBase:
    """Fields and lookups shared by every measurement variant."""

    title: str
    values: Optional[Tuple[Value, ...]] = None

    kind: ClassVar[MeasurementKind]

    @property
    def nested_measurements(self) -> Optional[Tuple["Measurement", ...]]:
        return None

    def value_by_label(self, label: str) -> Optional[Value]:
        return value_by_label(self.values, label)

    def submeasurement_by_title(self, title: str) -> Optional["Measurement"]:
        return measurement_by_title(self.nested_measurements, title)

    @classmethod
    def from_common(cls, common: CommonMeasurement) -> "MeasurementBase":
        if common.measurements is not None:
            raise InvariantViolationError(
                f"unexpected measurements for {cls.__name__}",
                common.path,
                common.line,
            )
        return cls(title=common.title, values=common.values)


@dataclass(frozen=True)
class CodingMeasurement(MeasurementBase):
    kind: ClassVar[MeasurementKind] = MeasurementKind.CODING


@dataclass(frozen=True)
class IdentificationMeasurement(MeasurementBase):
    kind: ClassVar[MeasurementKind] = MeasurementKind.IDENTIFICATION


@dataclass(frozen=True)
class MeasuredValuesMeasurement(MeasurementBase):
    kind: ClassVar[MeasurementKind] = MeasurementKind.MEASURED_VALUES


@dataclass(frozen=True)
class ExtendedFaultMemoryMeasurement(MeasurementBase):
    kind: ClassVar[MeasurementKind] = MeasurementKind.EXTENDED_FAULT_MEMORY


@dataclass(frozen=True)
class FaultMeasurement(MeasurementBase):
    """Fault record; the only variant that nests further measurements."""

    measurements: Optional[Tuple["Measurement", ...]] = None

    kind: ClassVar[MeasurementKind] = MeasurementKind.FAULT

    @property
    def nested_measurements(self) -> Optional[Tuple["Measurement", ...]]:
        return self.measurements

    @classmethod
    def from_common(cls, common: CommonMeasurement) -> "FaultMeasurement":
        return cls(
            title=common.title,
            values=common.values,
            measurements=common.measurements,
        )


Measurement = Union[
    CodingMeasurement,
    IdentificationMeasurement,
    FaultMeasurement,
    MeasuredValuesMeasurement,
    ExtendedFaultMemoryMeasurement,
]

_MEASUREMENT_VARIANTS: Dict[str, Type[MeasurementBase]] = {
    variant.kind.value: variant
    for variant in (
        CodingMeasurement,
        IdentificationMeasurement,
        FaultMeasurement,
        MeasuredValuesMeasurement,
        ExtendedFaultMemoryMeasurement,
    )
}


def parse_measurement(reader: ElementReader) -> Measurement:
    """Bind a ``MEAS`` element to the variant named by its ``OBJECT``.

    Raises:
        UnknownDiscriminantError: If ``OBJECT`` names no known variant
        InvariantViolationError: If a non-fault record nests measurements
    """
    common = CommonMeasurement.parse(reader)
    variant = _MEASUREMENT_VARIANTS.get(common.object)
    if variant is None:
        raise UnknownDiscriminantError(
            OBJECT_ATTRIBUTE, common.object, common.path, common.line
        )
    return variant.from_common(common)  # type: ignore[return-value]


def measurement_by_title(
    measurements: Optional[Sequence[Measurement]], title: str
) -> Optional[Measurement]:
    """Return the first direct entry titled ``title``; nested ones are not searched."""
    for measurement in measurements or ():
        if measurement.title == title:
            return measurement
    return None
