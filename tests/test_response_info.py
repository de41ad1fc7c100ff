"""Tests for re-deriving tracking info from assistant replies"""

import pytest

from shiptrack.records import CarrierId, OrderRecord, ShipmentStatus, TrackingInfo
from shiptrack.response_info import detect_provisional_status, extract_tracking_info


class TestProvisionalStatus:

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Tu pedido fue entregado ✅", ShipmentStatus.DELIVERED),
            ("Tu pedido está en tránsito", ShipmentStatus.IN_TRANSIT),
            ("🚚 Revisa el estado aquí", ShipmentStatus.IN_TRANSIT),
            ("Lo siento, no tenemos información de ese pedido", ShipmentStatus.NO_DATA),
            ("⚠️ Revisa tus datos", ShipmentStatus.NO_DATA),
            ("Estamos preparando tu pedido ⏳", ShipmentStatus.PENDING),
            ("Hola, ¿en qué te ayudo?", ShipmentStatus.PENDING),
        ],
    )
    def test_phrases(self, text, expected):
        assert detect_provisional_status(text) == expected

    def test_delivered_checked_before_transit(self):
        assert detect_provisional_status("Estuvo en camino y ya fue entregado") == ShipmentStatus.DELIVERED


class TestExtractTrackingInfo:

    def test_unmatched_number_uses_phrase_status(self):
        info = extract_tracking_info("Tu guía es 98765432109876 y está en camino", [])
        assert info == TrackingInfo("98765432109876", CarrierId.UNKNOWN, ShipmentStatus.IN_TRANSIT)

    def test_unmatched_number_detects_carrier_in_text(self):
        info = extract_tracking_info("Guía Redpack 98765432109876, está en ruta", [])
        assert info.carrier == CarrierId.REDPACK
        assert info.status == ShipmentStatus.IN_TRANSIT

    def test_known_record_is_authoritative(self):
        record = OrderRecord(
            id="1",
            name="Juan",
            fields={"Guía": "12345678901234567890"},
            tracking_number="12345678901234567890",
            carrier=CarrierId.ESTAFETA,
            status=ShipmentStatus.DELIVERED,
        )
        text = "🚚 Guía DHL: 12345678901234567890, tu pedido está en camino"
        info = extract_tracking_info(text, [record])
        assert info == TrackingInfo("12345678901234567890", CarrierId.ESTAFETA, ShipmentStatus.DELIVERED)

    def test_no_number_with_no_data_phrase(self):
        info = extract_tracking_info("No tenemos información de tu pedido", [])
        assert info == TrackingInfo("", CarrierId.UNKNOWN, ShipmentStatus.NO_DATA)

    def test_no_number_defaults_to_pending_card(self):
        info = extract_tracking_info("¿Me compartes tu correo?", [])
        assert info == TrackingInfo("", CarrierId.UNKNOWN, ShipmentStatus.PENDING)

    def test_no_number_with_delivered_phrase_is_no_change(self):
        assert extract_tracking_info("Tu pedido ya fue entregado", []) is None

    def test_no_number_with_transit_phrase_is_no_change(self):
        assert extract_tracking_info("Tu pedido va en camino", []) is None

    def test_sample_records_roundtrip(self, sample_records):
        fedex = sample_records[1]
        info = extract_tracking_info(f"📦 Pedido: María\n🚚 Guía: {fedex.tracking_number}", sample_records)
        assert info.carrier == CarrierId.FEDEX
        assert info.status == fedex.status
