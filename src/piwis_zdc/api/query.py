"""Read-only navigation over a loaded session.

Lookups match exactly, return the first hit in document order and never
descend on their own: to reach a record nested in a fault, look the fault up
first, then search its nested measurements.
"""

from typing import Iterator, Optional, Sequence, Tuple

from piwis_zdc.model.measurements import Measurement, measurement_by_title
from piwis_zdc.model.sections import Section
from piwis_zdc.model.session import ZdcSession
from piwis_zdc.model.values import Value, value_by_label as _value_by_label

Breadcrumb = Tuple[str, ...]

__all__ = [
    "Breadcrumb",
    "iter_values",
    "measurement_by_title",
    "section_by_title",
    "submeasurement_by_title",
    "value_by_label",
]


def section_by_title(session: ZdcSession, title: str) -> Optional[Section]:
    return session.section_by_title(title)


def submeasurement_by_title(measurement: Measurement, title: str) -> Optional[Measurement]:
    """Search the nested measurements of a fault record; None for other kinds."""
    return measurement_by_title(measurement.nested_measurements, title)


def value_by_label(measurement: Measurement, label: str) -> Optional[Value]:
    return _value_by_label(measurement.values, label)


def _iter_measurements(
    trail: Breadcrumb, measurements: Sequence[Measurement]
) -> Iterator[Tuple[Breadcrumb, Value]]:
    for measurement in measurements:
        path = trail + (measurement.title,)
        if measurement.nested_measurements:
            yield from _iter_measurements(path, measurement.nested_measurements)
        for value in measurement.values or ():
            yield path, value


def iter_values(session: ZdcSession) -> Iterator[Tuple[Breadcrumb, Value]]:
    """Walk every value of the session depth first.

    Yields ``(breadcrumb, value)`` pairs where the breadcrumb holds the section
    title followed by the measurement titles down to the value's owner. The
    values nested in a fault come before the fault's own values.
    """
    for section in session.sections:
        yield from _iter_measurements((section.title,), section.measurements)
