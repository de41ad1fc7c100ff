"""Tests for the monday.com board client"""

import json

import httpx
import pytest

from shiptrack.monday_client import MondayClient, MondayError
from shiptrack.records import CarrierId, ShipmentStatus

from conftest import make_settings

BOARD_PAYLOAD = {
    "data": {
        "boards": [
            {
                "items_page": {
                    "items": [
                        {
                            "id": "101",
                            "name": "Juan Pérez",
                            "column_values": [
                                {"id": "guia", "text": "12345678901234567890", "value": None, "column": {"title": "Guía"}},
                                {"id": "paq", "text": "Estafeta", "value": None, "column": {"title": "Paquetería"}},
                                {"id": "estado", "text": "Entregado", "value": None, "column": {"title": "Estado"}},
                            ],
                        },
                        {
                            "id": "102",
                            "name": "María López",
                            "column_values": [
                                {"id": "status_1", "text": "En camino", "value": None, "column": None},
                                {"id": "notes", "text": None, "value": None, "column": {"title": "Notas"}},
                            ],
                        },
                    ]
                }
            }
        ]
    }
}


def _transport(payload, captured=None, status_code=200):
    def handler(request: httpx.Request) -> httpx.Response:
        if captured is not None:
            captured.append(request)
        return httpx.Response(status_code, json=payload)

    return httpx.MockTransport(handler)


class TestFetchItems:

    def test_parses_items_and_column_titles(self):
        captured = []
        client = MondayClient(make_settings(), transport=_transport(BOARD_PAYLOAD, captured))
        items = client.fetch_items()

        assert [item.id for item in items] == ["101", "102"]
        assert items[0].columns[0].title == "Guía"
        # Missing column metadata falls back to the column id.
        assert items[1].columns[0].title == "status_1"
        assert items[1].columns[1].text == ""

        request = captured[0]
        assert request.headers["Authorization"] == "token-123"
        assert request.headers["API-Version"] == "2023-10"
        body = json.loads(request.content)
        assert "ids: [42]" in body["query"]
        assert "limit: 50" in body["query"]

    def test_fetch_orders_builds_records(self):
        client = MondayClient(make_settings(), transport=_transport(BOARD_PAYLOAD))
        records = client.fetch_orders()
        assert records[0].carrier == CarrierId.ESTAFETA
        assert records[0].status == ShipmentStatus.DELIVERED
        assert records[1].status == ShipmentStatus.IN_TRANSIT

    def test_missing_credentials(self):
        client = MondayClient(make_settings(monday_api_token=""))
        with pytest.raises(ValueError, match="Missing Monday.com credentials"):
            client.fetch_items()

    def test_graphql_errors(self):
        payload = {"errors": [{"message": "Board not found"}]}
        client = MondayClient(make_settings(), transport=_transport(payload))
        with pytest.raises(MondayError, match="Board not found"):
            client.fetch_items()

    def test_http_error(self):
        client = MondayClient(make_settings(), transport=_transport({}, status_code=500))
        with pytest.raises(httpx.HTTPStatusError):
            client.fetch_items()

    def test_empty_board(self):
        client = MondayClient(make_settings(), transport=_transport({"data": {"boards": []}}))
        assert client.fetch_items() == []
