"""Shared fixtures and fakes for the shiptrack tests."""

from pathlib import Path
from typing import List, Optional

import pytest

from shiptrack.config import BASE_DIR, Settings
from shiptrack.order_builder import build_order_records
from shiptrack.records import RawBoardItem, RawColumn


def make_settings(**overrides) -> Settings:
    values = dict(
        gemini_api_key="test-key",
        gemini_model="gemini-2.5-flash",
        gemini_temperature=0.7,
        monday_api_token="token-123",
        monday_board_id="42",
        monday_api_url="https://api.monday.test/v2",
        monday_api_version="2023-10",
        monday_items_limit=50,
        request_timeout=5.0,
        prompts_dir=BASE_DIR / "prompts",
    )
    values.update(overrides)
    return Settings(**values)


def make_item(item_id: str, name: str, *columns) -> RawBoardItem:
    return RawBoardItem(id=item_id, name=name, columns=tuple(RawColumn(title, text) for title, text in columns))


SAMPLE_ITEMS = [
    make_item(
        "1",
        "Juan Pérez",
        ("Correo", "juan@example.com"),
        ("Número de Guía", "12345678901234567890"),
        ("Compañía de envío", "Estafeta"),
        ("Estado", "Entregado"),
    ),
    make_item(
        "2",
        "María López",
        ("Teléfono", "5512345678"),
        ("Guía", "Guía FedEx 9876543210123"),
        ("Paquetería", "Fed Ex Express"),
        ("Estatus", ""),
    ),
    make_item("3", "Ana Ruiz", ("Correo", "ana@example.com"), ("Estado", "Preparando pedido")),
    make_item("4", "Luis Gómez", ("Correo", "luis@example.com")),
]


class FakeMonday:
    """Board client double returning canned items or raising an error."""

    def __init__(self, items: Optional[List[RawBoardItem]] = None, error: Optional[Exception] = None) -> None:
        self.items = list(items if items is not None else SAMPLE_ITEMS)
        self.error = error
        self.calls = 0

    def fetch_orders(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return build_order_records(self.items)


class FakeGemini:
    """Chat model double that replays scripted replies."""

    def __init__(
        self,
        replies: Optional[List[str]] = None,
        error: Optional[Exception] = None,
        start_error: Optional[Exception] = None,
    ) -> None:
        self.replies = list(replies or [])
        self.error = error
        self.start_error = start_error
        self.system_instructions: List[str] = []
        self.sent: List[str] = []

    @property
    def has_chat(self) -> bool:
        return bool(self.system_instructions)

    def start_chat(self, system_instruction: str) -> None:
        if self.start_error is not None:
            raise self.start_error
        self.system_instructions.append(system_instruction)

    def send_message(self, message: str) -> str:
        self.sent.append(message)
        if self.error is not None:
            raise self.error
        return self.replies.pop(0) if self.replies else ""


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def sample_records():
    return build_order_records(SAMPLE_ITEMS)
