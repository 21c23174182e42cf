"""
Tests for input records and the record schema.
"""
import pytest

from edgebundling.model.hierarchy import build_hierarchy
from edgebundling.model.links import resolve_links
from edgebundling.model.records import (
    Record, Reference, RecordSchema, normalize_identifier, records_from_rows
)


# ============================================================
# Identifier normalisation
# ============================================================

class TestNormalizeIdentifier:

    @pytest.mark.parametrize("raw", ["3", "3.0", " 3 ", 3, 3.0])
    def test_integral_numbers_share_one_form(self, raw):
        assert normalize_identifier(raw) == "3"

    def test_text_is_stripped_only(self):
        assert normalize_identifier("  flare.vis.Axis ") == "flare.vis.Axis"

    def test_fractional_number_kept_as_text(self):
        assert normalize_identifier("2.5") == "2.5"

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_empty_values(self, raw):
        assert normalize_identifier(raw) == ""

    def test_nan_is_not_a_number_identifier(self):
        assert normalize_identifier("nan") == "nan"

    @pytest.mark.parametrize("raw, expected", [("007", "7"), ("-4.00", "-4"), ("+12", "12"), ("-0", "0")])
    def test_integer_literal_forms(self, raw, expected):
        assert normalize_identifier(raw) == expected

    @pytest.mark.parametrize("raw", ["1_000", "1e3", "0x10", "3.5.0"])
    def test_other_numeric_spellings_kept_verbatim(self, raw):
        assert normalize_identifier(raw) == raw

    def test_long_identifiers_stay_distinct(self):
        """Identifiers differing beyond float precision are not merged."""
        assert normalize_identifier("9007199254740993") == "9007199254740993"
        assert normalize_identifier("9007199254740993.0") == "9007199254740993"
        assert normalize_identifier("9007199254740992") != normalize_identifier("9007199254740993")

    def test_long_identifiers_give_separate_leaves(self):
        schema = RecordSchema(reference_fields=("Link 1",))
        rows = [
            {"Page ID": "9007199254740993", "Page Name": "odd", "Page Type": "A", "Link 1": "9007199254740992"},
            {"Page ID": "9007199254740992", "Page Name": "even", "Page Type": "A"},
        ]
        hierarchy = build_hierarchy(records_from_rows(rows, schema))
        assert [leaf.identifier for leaf in hierarchy.leaves()] == ["9007199254740993", "9007199254740992"]
        links = resolve_links(hierarchy)
        assert [hierarchy.node(l.target).key for l in links] == ["even"]


# ============================================================
# Schema
# ============================================================

class TestRecordSchema:

    def test_reference_fields_detected_by_prefix(self):
        schema = RecordSchema.from_fieldnames(["Page ID", "Page Name", "Page Type", "Link 1", "Notes", "Link 2"])
        assert schema.reference_fields == ("Link 1", "Link 2")

    def test_core_fields_never_become_references(self):
        schema = RecordSchema.from_fieldnames(
            ["LinkId", "Name", "Kind", "Link A"], id_field="LinkId", name_field="Name", category_field="Kind"
        )
        assert schema.reference_fields == ("Link A",)

    def test_duplicate_core_fields_rejected(self):
        with pytest.raises(ValueError):
            RecordSchema(id_field="x", name_field="x", category_field="c")

    def test_reference_clashing_with_core_rejected(self):
        with pytest.raises(ValueError):
            RecordSchema(reference_fields=("Page ID",))

    def test_duplicate_reference_fields_rejected(self):
        with pytest.raises(ValueError):
            RecordSchema(reference_fields=("Link 1", "Link 1"))

    def test_empty_separator_rejected(self):
        with pytest.raises(ValueError):
            RecordSchema(multi_value_separator="")

    def test_reference_fields_stored_as_tuple(self):
        schema = RecordSchema(reference_fields=["Link 1"])
        assert schema.reference_fields == ("Link 1",)


# ============================================================
# Row parsing
# ============================================================

class TestParse:

    @pytest.fixture
    def schema(self):
        return RecordSchema(reference_fields=("Link 1", "Link 2"))

    def test_full_row(self, schema):
        row = {"Page ID": "7", "Page Name": "Alerts", "Page Type": "Product", "Link 1": "8", "Link 2": ""}
        record = schema.parse(row)
        assert record == Record(id="7", name="Alerts", category="Product",
                                references=(Reference("Link 1", "8"),))

    def test_missing_category_goes_to_unspecified(self, schema):
        record = schema.parse({"Page ID": "1", "Page Name": "Home"})
        assert record.category == "unspecified"

    def test_missing_name_falls_back_to_identifier(self, schema):
        record = schema.parse({"Page ID": "1", "Page Type": "Landing"})
        assert record.name == "1"

    def test_missing_identifier_uses_row_number(self, schema):
        record = schema.parse({"Page Name": "Orphan"}, row_number=12)
        assert record.id == "#12"

    def test_multi_valued_reference_split(self, schema):
        record = schema.parse({"Page ID": "1", "Link 1": "2; 3;;4"})
        assert [r.value for r in record.references] == ["2", "3", "4"]

    def test_list_values_are_references(self):
        schema = RecordSchema(reference_fields=("imports",), multi_value_separator=None)
        record = schema.parse({"Page ID": "a", "imports": ["b", "", "c"]})
        assert [r.value for r in record.references] == ["b", "c"]

    def test_reference_order_follows_field_order(self, schema):
        record = schema.parse({"Page ID": "1", "Link 2": "5", "Link 1": "4"})
        assert record.references == (Reference("Link 1", "4"), Reference("Link 2", "5"))

    def test_records_from_rows_numbers_rows_from_one(self, schema):
        records = records_from_rows([{"Page Name": "x"}, {"Page Name": "y"}], schema)
        assert [r.id for r in records] == ["#1", "#2"]
