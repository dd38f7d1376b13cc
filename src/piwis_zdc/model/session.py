"""Session document model.

The root of a ZDC export: session metadata, the diagnosis address, the
short-name services, the wait list and the hex service that owns the section
tree. Wire names are German and mixed-case; the Python names are not.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from lxml import etree

from piwis_zdc.model.binding import ElementReader, local_name, read_text
from piwis_zdc.model.sections import SECTION_ELEMENT, Section, parse_section
from piwis_zdc.shared.config import DEFAULT_MAX_NESTING_DEPTH
from piwis_zdc.shared.errors import MissingFieldError

COMMENT_ELEMENT = "Kommentar"
REQUEST_ELEMENT = "Request"
RESPONSE_ELEMENT = "Response"


@dataclass(frozen=True)
class Comment:
    """``Kommentar``: free text attached to a service."""

    xml_space: str
    value: Optional[str] = None

    @classmethod
    def parse(cls, reader: ElementReader) -> "Comment":
        return cls(xml_space=reader.attribute("space"), value=reader.text())


@dataclass(frozen=True)
class DiagnosisAddress:
    coding_order: str
    ivd: str
    sfd: str
    value: str

    @classmethod
    def parse(cls, reader: ElementReader) -> "DiagnosisAddress":
        return cls(
            coding_order=reader.attribute("codingOrder"),
            ivd=reader.attribute("IVD"),
            sfd=reader.attribute("SFD"),
            value=read_text(reader),
        )


@dataclass(frozen=True)
class Parameter:
    short_name: str
    value: str
    xml_space: Optional[str] = None

    @classmethod
    def parse(cls, reader: ElementReader) -> "Parameter":
        return cls(
            short_name=reader.attribute("ShortName"),
            value=reader.attribute("Value"),
            xml_space=reader.optional_attribute("space"),
        )


@dataclass(frozen=True)
class ServiceMessage:
    """Request or response of a short-name service."""

    value: Optional[str] = None
    parameters: Optional[Tuple[Parameter, ...]] = None

    @classmethod
    def parse(cls, reader: ElementReader) -> "ServiceMessage":
        return cls(
            value=reader.optional_attribute("Value"),
            parameters=reader.optional_children("Parameter", Parameter.parse),
        )


@dataclass(frozen=True)
class ShortNameService:
    id: str
    phase: str
    phase_detail: str
    comment: Comment
    request: ServiceMessage
    response: Optional[ServiceMessage] = None
    mode: Optional[str] = None
    evaluation: Optional[str] = None

    @classmethod
    def parse(cls, reader: ElementReader) -> "ShortNameService":
        return cls(
            id=reader.attribute("ID"),
            phase=reader.attribute("Phase"),
            phase_detail=reader.attribute("PhaseDetail"),
            mode=reader.optional_attribute("Mode"),
            evaluation=reader.optional_attribute("Bewertung"),
            comment=reader.child(COMMENT_ELEMENT, Comment.parse),
            request=reader.child(REQUEST_ELEMENT, ServiceMessage.parse),
            response=reader.optional_child(RESPONSE_ELEMENT, ServiceMessage.parse),
        )


@dataclass(frozen=True)
class WaitEntry:
    """``Warten``: a wait step recorded between services."""

    id: str
    value: str

    @classmethod
    def parse(cls, reader: ElementReader) -> "WaitEntry":
        return cls(id=reader.attribute("ID"), value=read_text(reader))


@dataclass(frozen=True)
class Translation:
    """Maps one response parameter to its byte position and raw hex value."""

    parameter_name: str
    byte_position: str
    lsb: str
    bit_length: str
    hex_value: str
    value: str

    @classmethod
    def parse(cls, reader: ElementReader) -> "Translation":
        return cls(
            parameter_name=reader.attribute("ParameterName"),
            byte_position=reader.attribute("BytePosition"),
            lsb=reader.attribute("LSB"),
            bit_length=reader.attribute("BitLength"),
            hex_value=reader.attribute("HexValue"),
            value=read_text(reader),
        )


@dataclass(frozen=True)
class HumanTranslations:
    service_id: Optional[str] = None
    rd_identifier: Optional[str] = None
    service_name: Optional[str] = None
    translations: Optional[Tuple[Translation, ...]] = None

    @classmethod
    def parse(cls, reader: ElementReader) -> "HumanTranslations":
        return cls(
            service_id=reader.optional_attribute("ServiceID"),
            rd_identifier=reader.optional_attribute("RDIdentifier"),
            service_name=reader.optional_attribute("ServiceName"),
            translations=reader.optional_children("Translation", Translation.parse),
        )


@dataclass(frozen=True)
class HexService:
    """Root diagnostic service; owns the section tree of the session."""

    id: str
    phase: str
    phase_detail: str
    evaluation: str
    comment: Comment
    request: str
    human_translations: HumanTranslations
    sections: Tuple[Section, ...] = ()
    did: Optional[str] = None
    expected_value: Optional[str] = None
    response: Optional[str] = None

    @classmethod
    def parse(cls, reader: ElementReader) -> "HexService":
        return cls(
            id=reader.attribute("ID"),
            phase=reader.attribute("Phase"),
            phase_detail=reader.attribute("PhaseDetail"),
            did=reader.optional_attribute("did"),
            evaluation=reader.attribute("Bewertung"),
            comment=reader.child(COMMENT_ELEMENT, Comment.parse),
            request=reader.child(REQUEST_ELEMENT, read_text),
            expected_value=reader.optional_child("ExpectedValue", read_text),
            response=reader.optional_child(RESPONSE_ELEMENT, read_text),
            human_translations=reader.child(
                "HumanTranslations", HumanTranslations.parse
            ),
            sections=reader.children(SECTION_ELEMENT, parse_section),
        )


@dataclass(frozen=True)
class ZdcSession:
    """A complete diagnostic session export.

    Built once by a single parse pass and never mutated afterwards. Navigate
    it with section_by_title() and the lookups on sections and measurements.
    """

    xmlns: str
    zdc_file: str
    file_id: str
    content_version: str
    diagnosis_address: DiagnosisAddress
    hex_service: HexService
    short_name_services: Tuple[ShortNameService, ...] = ()
    wait_list: Tuple[WaitEntry, ...] = ()
    source: Optional[str] = field(default=None, compare=False)

    @property
    def sections(self) -> Tuple[Section, ...]:
        return self.hex_service.sections

    def section_by_title(self, title: str) -> Optional[Section]:
        """Return the first section titled ``title``; measurements are not searched."""
        for section in self.sections:
            if section.title == title:
                return section
        return None

    @classmethod
    def parse(cls, reader: ElementReader, source: Optional[str] = None) -> "ZdcSession":
        xmlns = etree.QName(reader.element).namespace
        if xmlns is None:
            raise MissingFieldError("@xmlns", reader.path, reader.line)
        return cls(
            xmlns=xmlns,
            zdc_file=reader.attribute("ZDCFile"),
            file_id=reader.attribute("DATEI-ID"),
            content_version=reader.attribute("VERSION-INHALT"),
            diagnosis_address=reader.child("diagnosisAddress", DiagnosisAddress.parse),
            short_name_services=reader.children(
                "ShortNameService", ShortNameService.parse
            ),
            wait_list=reader.children("Warten", WaitEntry.parse),
            hex_service=reader.child("HexService", HexService.parse),
            source=source,
        )


def parse_session_element(
    root: etree._Element,
    max_depth: int = DEFAULT_MAX_NESTING_DEPTH,
    source: Optional[str] = None,
) -> ZdcSession:
    """Bind a parsed document root to a ZdcSession.

    The root tag name itself is not checked; exports differ in it.

    Raises:
        SchemaError: If any element does not match the session schema
    """
    reader = ElementReader(root, local_name(root.tag), 0, max_depth)
    session = ZdcSession.parse(reader, source)
    reader.finish()
    return session
