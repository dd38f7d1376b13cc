"""Top-level sections of the hex service.

Sections are bound exactly like measurements: a shape-agnostic CommonSection
first, then a dispatch on ``OBJECT``. Adding a section shape means adding a
variant class and registering it here; the document model and the query API
stay untouched.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Dict, Optional, Tuple, Type, Union

from piwis_zdc.model.binding import ElementReader, read_text
from piwis_zdc.model.measurements import (
    MEASUREMENT_ELEMENT,
    OBJECT_ATTRIBUTE,
    TITLE_ELEMENT,
    Measurement,
    measurement_by_title,
    parse_measurement,
)
from piwis_zdc.shared.errors import UnknownDiscriminantError

SECTION_ELEMENT = "SECTIONS"


class SectionKind(Enum):
    """Recognized ``OBJECT`` discriminants of a section."""

    ECU = "ECU"


@dataclass(frozen=True)
class CommonSection:
    """Shape-agnostic reading of a ``SECTIONS`` element."""

    object: str
    title: str
    measurements: Tuple[Measurement, ...] = ()
    path: str = field(default="", compare=False)
    line: Optional[int] = field(default=None, compare=False)

    @classmethod
    def parse(cls, reader: ElementReader) -> "CommonSection":
        return cls(
            object=reader.attribute(OBJECT_ATTRIBUTE),
            title=reader.child(TITLE_ELEMENT, read_text),
            measurements=reader.children(MEASUREMENT_ELEMENT, parse_measurement),
            path=reader.path,
            line=reader.line,
        )


@dataclass(frozen=True)
class EcuSection:
    """Measurements read from one electronic control unit."""

    title: str
    measurements: Tuple[Measurement, ...] = ()

    kind: ClassVar[SectionKind] = SectionKind.ECU

    def measurement_by_title(self, title: str) -> Optional[Measurement]:
        return measurement_by_title(self.measurements, title)

    @classmethod
    def from_common(cls, common: CommonSection) -> "EcuSection":
        return cls(title=common.title, measurements=common.measurements)


Section = Union[EcuSection]

_SECTION_VARIANTS: Dict[str, Type[EcuSection]] = {
    SectionKind.ECU.value: EcuSection,
}


def parse_section(reader: ElementReader) -> Section:
    """Bind a ``SECTIONS`` element to the variant named by its ``OBJECT``.

    Raises:
        UnknownDiscriminantError: If ``OBJECT`` names no known variant
    """
    common = CommonSection.parse(reader)
    variant = _SECTION_VARIANTS.get(common.object)
    if variant is None:
        raise UnknownDiscriminantError(
            OBJECT_ATTRIBUTE, common.object, common.path, common.line
        )
    return variant.from_common(common)
