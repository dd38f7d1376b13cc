"""Tests for two-phase measurement binding."""

import pytest

from piwis_zdc.model.measurements import (
    CodingMeasurement,
    CommonMeasurement,
    ExtendedFaultMemoryMeasurement,
    FaultMeasurement,
    IdentificationMeasurement,
    MeasuredValuesMeasurement,
    MeasurementKind,
    measurement_by_title,
    parse_measurement,
)
from piwis_zdc.model.values import AlphaValue
from piwis_zdc.shared.errors import (
    DuplicateFieldError,
    InvariantViolationError,
    MissingFieldError,
    NestingDepthError,
    UnexpectedFieldError,
    UnknownDiscriminantError,
)

FAULT_XML = """
<MEAS OBJECT="Fehler">
  <TITLE>Fault</TITLE>
  <VALUE FORMAT="ALPHA" TEXT="Fault code" LABEL="DTC">B1001</VALUE>
  <MEAS OBJECT="Erweiterter Fehlerspeicher">
    <TITLE>erweiterter Fehlerspeicher</TITLE>
    <VALUE FORMAT="ALPHA" TEXT="Hinweis_Prio" LABEL="Priority">2</VALUE>
  </MEAS>
</MEAS>
"""


def nested(kind: str) -> str:
    return f"""
    <MEAS OBJECT="{kind}">
      <TITLE>Outer</TITLE>
      <MEAS OBJECT="Messwerte"><TITLE>Inner</TITLE></MEAS>
    </MEAS>
    """


class TestCommonMeasurement:
    """Test the shape-agnostic first phase."""

    def test_accepts_any_object(self, bind):
        """Test that the superset record does not judge the discriminant."""
        common = bind(
            '<MEAS OBJECT="Stellglied"><TITLE>Actuator test</TITLE></MEAS>',
            CommonMeasurement.parse,
        )

        assert common.object == "Stellglied"
        assert common.title == "Actuator test"
        assert common.values is None
        assert common.measurements is None


class TestMeasurementDispatch:
    """Test OBJECT dispatch to the five variants."""

    @pytest.mark.parametrize("kind, variant", [
        ("Codierung", CodingMeasurement),
        ("Identifikation", IdentificationMeasurement),
        ("Fehler", FaultMeasurement),
        ("Messwerte", MeasuredValuesMeasurement),
        ("Erweiterter Fehlerspeicher", ExtendedFaultMemoryMeasurement),
    ])
    def test_variants(self, bind, kind, variant):
        """Test every recognized discriminant."""
        measurement = bind(
            f'<MEAS OBJECT="{kind}"><TITLE>Title</TITLE></MEAS>', parse_measurement
        )

        assert type(measurement) is variant
        assert measurement.kind is MeasurementKind(kind)
        assert measurement.title == "Title"

    def test_unknown_object(self, bind):
        """Test that an unknown OBJECT is named in the error."""
        with pytest.raises(UnknownDiscriminantError) as exc_info:
            bind('<MEAS OBJECT="Stellglied"><TITLE>Actuator test</TITLE></MEAS>', parse_measurement)

        assert exc_info.value.value == "Stellglied"
        assert exc_info.value.kind == "OBJECT"
        assert "'Stellglied' not implemented" in str(exc_info.value)

    def test_empty_measurement_is_valid(self, bind):
        """Test a record with neither values nor nested measurements."""
        measurement = bind('<MEAS OBJECT="Fehler"><TITLE>Fault</TITLE></MEAS>', parse_measurement)

        assert measurement.values is None
        assert measurement.nested_measurements is None

    def test_title_required(self, bind):
        """Test that TITLE is mandatory."""
        with pytest.raises(MissingFieldError) as exc_info:
            bind('<MEAS OBJECT="Messwerte"/>', parse_measurement)

        assert exc_info.value.field_name == "TITLE"

    def test_duplicate_title(self, bind):
        """Test that TITLE may only occur once."""
        with pytest.raises(DuplicateFieldError) as exc_info:
            bind(
                '<MEAS OBJECT="Messwerte"><TITLE>A</TITLE><TITLE>B</TITLE></MEAS>',
                parse_measurement,
            )

        assert exc_info.value.path == "MEAS/TITLE[2]"

    def test_unknown_attribute(self, bind):
        """Test that unknown attributes are rejected."""
        with pytest.raises(UnexpectedFieldError):
            bind('<MEAS OBJECT="Messwerte" ID="7"><TITLE>A</TITLE></MEAS>', parse_measurement)

    def test_unknown_child(self, bind):
        """Test that unknown child elements are rejected."""
        with pytest.raises(UnexpectedFieldError) as exc_info:
            bind('<MEAS OBJECT="Messwerte"><TITLE>A</TITLE><NOTE>x</NOTE></MEAS>', parse_measurement)

        assert exc_info.value.field_name == "NOTE"
        assert exc_info.value.path == "MEAS/NOTE"

    def test_stray_text(self, bind):
        """Test that text directly inside a measurement is rejected."""
        with pytest.raises(UnexpectedFieldError) as exc_info:
            bind('<MEAS OBJECT="Messwerte">oops<TITLE>A</TITLE></MEAS>', parse_measurement)

        assert exc_info.value.field_name == "$text"


class TestNestedMeasurements:
    """Test the fault-only nesting invariant."""

    def test_fault_nesting(self, bind):
        """Test a fault holding an extended fault memory record."""
        fault = bind(FAULT_XML, parse_measurement)

        assert isinstance(fault, FaultMeasurement)
        assert fault.values == (AlphaValue(text="Fault code", label="DTC", value="B1001"),)
        (inner,) = fault.nested_measurements
        assert isinstance(inner, ExtendedFaultMemoryMeasurement)
        assert inner.value_by_label("Priority").raw_value == "2"

    @pytest.mark.parametrize("kind", [
        "Codierung",
        "Identifikation",
        "Messwerte",
        "Erweiterter Fehlerspeicher",
    ])
    def test_non_fault_nesting_rejected(self, bind, kind):
        """Test that nested measurements fail the build instead of being dropped."""
        with pytest.raises(InvariantViolationError) as exc_info:
            bind(nested(kind), parse_measurement)

        assert "unexpected measurements" in str(exc_info.value)
        assert exc_info.value.path == "MEAS"

    def test_recursive_faults(self, bind):
        """Test faults nested inside faults."""
        xml = (
            '<MEAS OBJECT="Fehler"><TITLE>L0</TITLE>'
            '<MEAS OBJECT="Fehler"><TITLE>L1</TITLE>'
            '<MEAS OBJECT="Messwerte"><TITLE>L2</TITLE></MEAS>'
            '</MEAS></MEAS>'
        )
        outer = bind(xml, parse_measurement)

        inner = outer.submeasurement_by_title("L1")
        assert inner.submeasurement_by_title("L2").title == "L2"

    def test_nesting_depth_ceiling(self, bind):
        """Test that pathological nesting is cut off."""
        xml = '<MEAS OBJECT="Fehler"><TITLE>leaf</TITLE></MEAS>'
        for level in range(5):
            xml = f'<MEAS OBJECT="Fehler"><TITLE>L{level}</TITLE>{xml}</MEAS>'

        with pytest.raises(NestingDepthError) as exc_info:
            bind(xml, parse_measurement, max_depth=3)

        assert exc_info.value.max_depth == 3

    def test_nested_error_path(self, bind):
        """Test that errors deep in the tree report where they happened."""
        xml = (
            '<MEAS OBJECT="Fehler"><TITLE>Fault</TITLE>'
            '<MEAS OBJECT="Messwerte"><TITLE>A</TITLE></MEAS>'
            '<MEAS OBJECT="Bogus"><TITLE>B</TITLE></MEAS>'
            '</MEAS>'
        )
        with pytest.raises(UnknownDiscriminantError) as exc_info:
            bind(xml, parse_measurement)

        assert exc_info.value.path == "MEAS/MEAS[2]"
        assert exc_info.value.line == 1


class TestMeasurementLookups:
    """Test title lookups and accessors."""

    def test_measurement_by_title_first_match(self):
        """Test that the first entry in document order is returned."""
        first = CodingMeasurement(title="Coding")
        second = IdentificationMeasurement(title="Coding")

        assert measurement_by_title((first, second), "Coding") is first
        assert measurement_by_title((first, second), "Missing") is None

    def test_measurement_by_title_direct_only(self, bind):
        """Test that nested measurements are not searched."""
        fault = bind(FAULT_XML, parse_measurement)

        assert measurement_by_title((fault,), "erweiterter Fehlerspeicher") is None
        assert fault.submeasurement_by_title("erweiterter Fehlerspeicher") is not None

    def test_non_fault_has_no_submeasurements(self):
        """Test nested accessors on non-fault variants."""
        coding = CodingMeasurement(title="Coding")

        assert coding.nested_measurements is None
        assert coding.submeasurement_by_title("anything") is None

    def test_value_by_label_without_values(self):
        """Test value lookups on a record without values."""
        assert FaultMeasurement(title="Fault").value_by_label("DTC") is None
