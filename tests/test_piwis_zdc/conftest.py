"""Shared fixtures: a representative session export and binding helpers."""

from pathlib import Path
from typing import Callable, List

import pytest
from lxml import etree

from piwis_zdc.model.binding import ElementReader

SESSION_FILE_NAME = "FAP_XXXXXXXXXXXXXXXXX_IExIL_20240804_132559.xml"

GATEWAY_SECTION = """
    <SECTIONS OBJECT="ECU">
      <TITLE>Gateway (A7.1)</TITLE>
      <MEAS OBJECT="Codierung">
        <TITLE>Control unit, coding</TITLE>
        <VALUE FORMAT="ALPHA" TEXT="Battery change: Scanner code" LABEL="Batteriewechsel_Technologie_zwei.Scannercode">205 BA24H9F0EGE</VALUE>
        <VALUE FORMAT="ALPHA" TEXT="Battery change: Date" LABEL="Batteriewechsel_Technologie_zwei.Datum"/>
      </MEAS>
      <MEAS OBJECT="Messwerte">
        <TITLE>Measured values</TITLE>
        <VALUE FORMAT="NUM" TEXT="Supply voltage" UNIT="V" LABEL="Spannung_Kl30">12.6</VALUE>
        <VALUE FORMAT="NUM" TEXT="Supply voltage" LABEL="Spannung_Kl15">12.4</VALUE>
      </MEAS>
      <MEAS OBJECT="Identifikation">
        <TITLE>Identification</TITLE>
        <VALUE FORMAT="ALPHA" TEXT="Part number" LABEL="Teilenummer">9J1907530</VALUE>
      </MEAS>
    </SECTIONS>"""

AIRBAG_SECTION = """
    <SECTIONS OBJECT="ECU">
      <TITLE>Airbag (variant: A2.8)</TITLE>
      <MEAS OBJECT="Fehler">
        <TITLE>Fault</TITLE>
        <VALUE FORMAT="ALPHA" TEXT="Fault code" LABEL="DTC">B1001</VALUE>
        <MEAS OBJECT="Erweiterter Fehlerspeicher">
          <TITLE>erweiterter Fehlerspeicher</TITLE>
          <VALUE FORMAT="ALPHA" TEXT="Hinweis_Prio" LABEL="Priority">2</VALUE>
          <VALUE FORMAT="NUM" TEXT="Frequency counter" LABEL="Frequency">3</VALUE>
        </MEAS>
      </MEAS>
      <MEAS OBJECT="Fehler">
        <TITLE>Fault memory empty</TITLE>
      </MEAS>
    </SECTIONS>"""

DOCUMENT_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<ZDC xmlns="urn:zdc:session" ZDCFile="IExIL_Session.xml" DATEI-ID="4711" VERSION-INHALT="23.0.1">
  <diagnosisAddress codingOrder="1" IVD="IVD-01" SFD="SFD-01">0x40</diagnosisAddress>
  <ShortNameService ID="SNS1" Phase="Read" PhaseDetail="Identification" Mode="physical" Bewertung="OK">
    <Kommentar xml:space="preserve"></Kommentar>
    <Request Value="22 F1 90">
      <Parameter ShortName="DID" Value="F190"/>
    </Request>
    <Response Value="62 F1 90 57 50 30"/>
  </ShortNameService>
  <Warten ID="W1">500</Warten>
  <HexService ID="HEX1" Phase="Read" PhaseDetail="All" did="F190" Bewertung="OK">
    <Kommentar xml:space="preserve">Readout</Kommentar>
    <Request>22 F1 90</Request>
    <ExpectedValue>62</ExpectedValue>
    <Response>62 F1 90</Response>
    <HumanTranslations ServiceID="22" RDIdentifier="F190" ServiceName="ReadDataByIdentifier">
      <Translation ParameterName="VIN" BytePosition="3" LSB="0" BitLength="136" HexValue="57 50 30">WP0</Translation>
    </HumanTranslations>{sections}
  </HexService>
</ZDC>
"""

SESSION_XML = DOCUMENT_TEMPLATE.format(sections=GATEWAY_SECTION + AIRBAG_SECTION)


@pytest.fixture
def session_xml() -> str:
    return SESSION_XML


@pytest.fixture
def session_document() -> Callable[[str], str]:
    """Factory wrapping ``SECTIONS`` markup in an otherwise valid export."""
    def build(sections: str) -> str:
        return DOCUMENT_TEMPLATE.format(sections=sections)
    return build


@pytest.fixture
def session_dir(tmp_path: Path) -> Path:
    """Session directory holding the sample export next to unrelated files."""
    (tmp_path / SESSION_FILE_NAME).write_text(SESSION_XML, encoding="utf-8")
    (tmp_path / "report.pdf").write_bytes(b"%PDF-1.4")
    (tmp_path / "other.xml").write_text("<other/>", encoding="utf-8")
    return tmp_path


@pytest.fixture
def bind() -> Callable[..., object]:
    """Bind an XML fragment with a model parser, as a parent element would."""
    def run(xml: str, parse, max_depth: int = 64):
        element = etree.fromstring(xml)
        reader = ElementReader(element, etree.QName(element).localname, 0, max_depth)
        value = parse(reader)
        reader.finish()
        return value
    return run


EXPECTED_DUMP = [
    "Gateway (A7.1) >> Control unit, coding >> Battery change: Scanner code: 205 BA24H9F0EGE",
    "Gateway (A7.1) >> Control unit, coding >> Battery change: Date: undefined",
    "Gateway (A7.1) >> Measured values >> Supply voltage: 12.6",
    "Gateway (A7.1) >> Measured values >> Supply voltage: 12.4",
    "Gateway (A7.1) >> Identification >> Part number: 9J1907530",
    "Airbag (variant: A2.8) >> Fault >> erweiterter Fehlerspeicher >> Hinweis_Prio: 2",
    "Airbag (variant: A2.8) >> Fault >> erweiterter Fehlerspeicher >> Frequency counter: 3",
    "Airbag (variant: A2.8) >> Fault >> Fault code: B1001",
]


@pytest.fixture
def expected_dump() -> List[str]:
    """Dump of the sample export, line by line."""
    return list(EXPECTED_DUMP)
