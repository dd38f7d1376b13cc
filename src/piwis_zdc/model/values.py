"""Leaf measurement values.

A ``VALUE`` element is either numeric or textual, selected by its ``FORMAT``
attribute. The label is the stable identity of a value across sessions; the
caption (``TEXT``) is for humans and may repeat between labels.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, ClassVar, Dict, Optional, Sequence, Union

from piwis_zdc.model.binding import ElementReader
from piwis_zdc.shared.errors import UnknownDiscriminantError

FORMAT_ATTRIBUTE = "FORMAT"


class ValueFormat(Enum):
    """Recognized ``FORMAT`` discriminants."""

    NUM = "NUM"
    ALPHA = "ALPHA"


@dataclass(frozen=True)
class NumberValue:
    """Numeric reading with an optional physical unit."""

    text: str
    label: str
    value: str
    unit: Optional[str] = None

    value_format: ClassVar[ValueFormat] = ValueFormat.NUM

    @property
    def caption(self) -> str:
        return self.text

    @property
    def raw_value(self) -> Optional[str]:
        return self.value

    @classmethod
    def parse(cls, reader: ElementReader) -> "NumberValue":
        return cls(
            text=reader.attribute("TEXT"),
            unit=reader.optional_attribute("UNIT"),
            label=reader.attribute("LABEL"),
            value=reader.required_text(),
        )


@dataclass(frozen=True)
class AlphaValue:
    """Textual reading; ``value`` is None when the field was empty."""

    text: str
    label: str
    value: Optional[str] = None

    value_format: ClassVar[ValueFormat] = ValueFormat.ALPHA

    @property
    def caption(self) -> str:
        return self.text

    @property
    def unit(self) -> Optional[str]:
        return None

    @property
    def raw_value(self) -> Optional[str]:
        return self.value

    @classmethod
    def parse(cls, reader: ElementReader) -> "AlphaValue":
        return cls(
            text=reader.attribute("TEXT"),
            label=reader.attribute("LABEL"),
            value=reader.text(),
        )


Value = Union[NumberValue, AlphaValue]

_VALUE_PARSERS: Dict[str, Callable[[ElementReader], Value]] = {
    ValueFormat.NUM.value: NumberValue.parse,
    ValueFormat.ALPHA.value: AlphaValue.parse,
}


def parse_value(reader: ElementReader) -> Value:
    """Bind a ``VALUE`` element to the variant named by its ``FORMAT``.

    Raises:
        UnknownDiscriminantError: If ``FORMAT`` names no known variant
    """
    value_format = reader.attribute(FORMAT_ATTRIBUTE)
    parser = _VALUE_PARSERS.get(value_format)
    if parser is None:
        raise UnknownDiscriminantError(
            FORMAT_ATTRIBUTE, value_format, reader.path, reader.line
        )
    return parser(reader)


def value_by_label(
    values: Optional[Sequence[Value]], label: str
) -> Optional[Value]:
    """Return the first value whose label equals ``label``, if any."""
    for value in values or ():
        if value.label == label:
            return value
    return None
