#!/usr/bin/env python3
"""Tests for FieldMapping and field resolution."""
import pytest
from models import (
    FieldMapping,
    IncompleteMappingError,
    detect_mapping,
    field_value,
    require_complete,
    resolve_header,
)

HEADERS = ["UNITÉ", "PIÈCE REQUISE", "PIÈCE REÇUE", "PIÈCES INSTALLÉES", "COMMENTAIRES"]


@pytest.fixture
def mapping():
    return FieldMapping(*HEADERS)


class TestResolveHeader:
    """Tests for resolve_header."""

    def test_bound_field(self, mapping):
        assert resolve_header(mapping, "partRequired") == "PIÈCE REQUISE"

    def test_unbound_field_is_empty(self):
        assert resolve_header(FieldMapping(), "unit") == ""

    def test_unknown_field_is_empty(self, mapping):
        assert resolve_header(mapping, "mileage") == ""


class TestFieldValue:
    """Tests for field_value."""

    def test_returns_record_value(self, mapping):
        record = {"UNITÉ": "12", "PIÈCE REQUISE": "frein avant"}
        assert field_value(record, mapping, "unit") == "12"
        assert field_value(record, mapping, "partRequired") == "frein avant"

    def test_header_missing_from_record(self, mapping):
        assert field_value({"UNITÉ": "12"}, mapping, "comments") == ""

    def test_unbound_field(self):
        record = {"UNITÉ": "12", "": "stray"}
        assert field_value(record, FieldMapping(), "unit") == ""


class TestFieldMapping:
    """Tests for FieldMapping helpers."""

    def test_complete_mapping(self, mapping):
        assert mapping.is_complete
        assert mapping.missing_fields() == []

    def test_missing_fields_in_field_order(self):
        partial = FieldMapping(unit="UNITÉ", part_received="PIÈCE REÇUE")
        assert not partial.is_complete
        assert partial.missing_fields() == ["partRequired", "partsInstalled", "comments"]

    def test_dict_round_trip(self, mapping):
        assert FieldMapping.from_dict(mapping.to_dict()) == mapping

    def test_with_updates_returns_copy(self, mapping):
        updated = mapping.with_updates(comments="NOTES", unit=None)
        assert updated.comments == "NOTES"
        assert updated.unit == "UNITÉ"
        assert mapping.comments == "COMMENTAIRES"

    def test_with_updates_unknown_field(self, mapping):
        with pytest.raises(KeyError):
            mapping.with_updates(mileage="KM")


class TestDetectMapping:
    """Tests for detect_mapping."""

    def test_detects_log_headers(self):
        assert detect_mapping(HEADERS) == FieldMapping(*HEADERS)

    def test_detects_unaccented_headers(self):
        headers = ["Unite", "Piece requise", "Date reception", "Installé", "Comment"]
        mapping = detect_mapping(headers)
        assert mapping.unit == "Unite"
        assert mapping.part_required == "Piece requise"
        assert mapping.part_received == "Date reception"
        assert mapping.parts_installed == "Installé"
        assert mapping.comments == "Comment"

    def test_unmatched_fields_left_unbound(self):
        mapping = detect_mapping(["UNITÉ", "DESCRIPTION"])
        assert mapping.unit == "UNITÉ"
        assert mapping.missing_fields() == [
            "partRequired",
            "partReceived",
            "partsInstalled",
            "comments",
        ]

    def test_previous_mapping_kept_when_headers_exist(self):
        previous = FieldMapping("No unité", "Pièce", "Reçue le", "Posée", "Notes")
        headers = ["No unité", "Pièce", "Reçue le", "Notes", "UNITÉ"]
        mapping = detect_mapping(headers, previous)
        assert mapping.unit == "No unité"
        assert mapping.part_required == "Pièce"
        assert mapping.parts_installed == ""
        assert mapping.comments == "Notes"


class TestRequireComplete:
    """Tests for require_complete."""

    def test_complete_mapping_passes(self, mapping):
        require_complete(mapping, HEADERS)

    def test_unbound_field_raises(self):
        with pytest.raises(IncompleteMappingError, match="COMMENTAIRES"):
            require_complete(FieldMapping(*HEADERS[:4]), HEADERS)

    def test_header_not_in_dataset_raises(self, mapping):
        with pytest.raises(IncompleteMappingError, match="COMMENTAIRES"):
            require_complete(mapping, HEADERS[:4])
