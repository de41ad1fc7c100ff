"""Tests for column, tracking-number, and status classification"""

import pytest

from shiptrack.classifiers import (
    classify_column,
    classify_status,
    extract_tracking_number,
    find_tracking_number,
    is_carrier_column,
    is_status_column,
    is_tracking_column,
)
from shiptrack.records import ColumnKind, ShipmentStatus


class TestColumnClassifier:

    @pytest.mark.parametrize("title", ["Número de Guía", "NUMERO DE GUIA", "número de guía", "numero_guia"])
    def test_tracking_titles(self, title):
        assert is_tracking_column(title)

    def test_carrier_titles(self):
        assert is_carrier_column("Compañía")
        assert is_carrier_column("Paquetería")
        assert is_carrier_column("Empresa Envío")

    def test_status_titles(self):
        assert is_status_column("Situación")
        assert is_status_column("Estatus")

    def test_unrelated_title(self):
        assert classify_column("Teléfono") == frozenset()

    def test_categories_are_not_exclusive(self):
        assert classify_column("Estado de guía") == frozenset({ColumnKind.TRACKING, ColumnKind.STATUS})


class TestTrackingExtractor:

    def test_fifteen_digits(self):
        assert extract_tracking_number("Tu guía es 123456789012345") == "123456789012345"

    def test_empty(self):
        assert extract_tracking_number("") == ""

    def test_falls_back_to_trimmed_text(self):
        assert extract_tracking_number("  ABC-123-XYZ ") == "ABC-123-XYZ"

    def test_too_short_or_too_long_runs_are_ignored(self):
        assert find_tracking_number("pedido 123456789") is None
        assert find_tracking_number("1" * 23) is None

    def test_first_run_wins(self):
        assert find_tracking_number("1111111111 y 2222222222") == "1111111111"

    def test_requires_word_boundary(self):
        assert find_tracking_number("ref A1234567890123") is None


class TestStatusClassifier:

    def test_no_text_no_tracking(self):
        assert classify_status("", False) == ShipmentStatus.NO_DATA

    def test_tracking_implies_transit(self):
        assert classify_status("", True) == ShipmentStatus.IN_TRANSIT

    def test_delivered_overrides_tracking(self):
        assert classify_status("Entregado", True) == ShipmentStatus.DELIVERED

    def test_transit_keyword(self):
        assert classify_status("En tránsito", False) == ShipmentStatus.IN_TRANSIT

    def test_unrecognized_text_is_pending(self):
        assert classify_status("En preparación", False) == ShipmentStatus.PENDING

    def test_unrecognized_text_with_tracking(self):
        assert classify_status("Revisión", True) == ShipmentStatus.IN_TRANSIT
