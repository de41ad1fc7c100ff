from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException

from .assistant import TrackingAssistant
from .carriers import CARRIER_API_INFO, CARRIER_PROFILES, get_carrier_profile, get_tracking_url
from .config import load_settings
from .models import (
    CarrierListResponse,
    CarrierPayload,
    ChatMessage,
    OrderPayload,
    SearchRequest,
    SearchResponse,
    StatusResponse,
    TrackingPayload,
)
from .records import OrderRecord, TrackingInfo

BASE_DIR = Path(__file__).resolve().parent

log_level_name = os.getenv("LOG_LEVEL", "INFO").upper()
log_level = getattr(logging, log_level_name, logging.INFO)
if not logging.getLogger().handlers:
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

logging.getLogger("shiptrack").setLevel(log_level)

ENV_PATH = BASE_DIR / ".env"
if ENV_PATH.exists():
    load_dotenv(ENV_PATH, override=True)
else:
    load_dotenv()


def tracking_payload(info: TrackingInfo) -> TrackingPayload:
    profile = get_carrier_profile(info.carrier)
    return TrackingPayload(
        tracking_number=info.tracking_number,
        carrier=info.carrier.value,
        carrier_name=profile.display_name,
        carrier_color=profile.color,
        status=info.status.value,
        tracking_url=get_tracking_url(info.carrier, info.tracking_number) if info.tracking_number else "",
    )


def order_payload(record: OrderRecord) -> OrderPayload:
    return OrderPayload(
        id=record.id,
        name=record.name,
        values=dict(record.fields),
        tracking_number=record.tracking_number,
        carrier=record.carrier.value,
        status=record.status.value,
        tracking_url=get_tracking_url(record.carrier, record.tracking_number) if record.tracking_number else "",
    )


def create_app(assistant: Optional[TrackingAssistant] = None) -> FastAPI:
    """Purpose: Build the FastAPI application around a TrackingAssistant.
    Inputs/Outputs: Optional pre-built assistant (tests inject fakes); returns FastAPI.
    Side Effects / State: Loads settings from the environment when no assistant is given.
    Dependencies: TrackingAssistant, carrier helpers, pydantic payload models.
    Failure Modes: Invalid numeric settings raise ValueError at startup; upstream
        board/model failures are reported through /api/status rather than raised.
    If Removed: The tracking assistant has no HTTP surface.
    Testing Notes: Use fastapi.testclient.TestClient with a fake-backed assistant.
    """
    tracker = assistant or TrackingAssistant(load_settings())
    api = FastAPI(title="Shipment Tracking Assistant")

    def _status() -> StatusResponse:
        return StatusResponse(
            is_configured=tracker.is_configured,
            status_message=tracker.status_message,
            order_count=len(tracker.records),
        )

    @api.get("/api/status", response_model=StatusResponse)
    def status() -> StatusResponse:
        """Report connection state, connecting lazily on first call."""
        tracker.ensure_connected()
        return _status()

    @api.post("/api/connect", response_model=StatusResponse)
    def connect() -> StatusResponse:
        """Re-fetch the board and restart the chat with the new orders."""
        tracker.refresh()
        return _status()

    @api.get("/api/orders", response_model=List[OrderPayload])
    def list_orders() -> List[OrderPayload]:
        tracker.ensure_connected()
        return [order_payload(record) for record in tracker.records]

    @api.post("/api/search", response_model=SearchResponse)
    def search(request: SearchRequest) -> SearchResponse:
        """Purpose: Handle a search turn and attach the derived tracking card.
        Inputs/Outputs: Input is SearchRequest; output is SearchResponse.
        Side Effects / State: Appends to the in-memory chat history.
        Dependencies: TrackingAssistant.search.
        Failure Modes: Blank queries return 400; model errors come back as is_error.
        If Removed: The search box has nothing to call.
        Testing Notes: Post a query against a fake model and check the tracking payload.
        """
        if not request.query.strip():
            raise HTTPException(status_code=400, detail="query is required")
        result = tracker.search(request.query)
        return SearchResponse(
            answer_text=result.answer_text,
            is_error=result.is_error,
            tracking=tracking_payload(result.tracking) if result.tracking else None,
        )

    @api.get("/api/messages", response_model=List[ChatMessage])
    def list_messages() -> List[ChatMessage]:
        return tracker.messages

    @api.get("/api/carriers", response_model=CarrierListResponse)
    def list_carriers() -> CarrierListResponse:
        carriers = []
        for carrier, profile in CARRIER_PROFILES.items():
            info = CARRIER_API_INFO.get(carrier)
            carriers.append(
                CarrierPayload(
                    carrier=carrier.value,
                    display_name=profile.display_name,
                    tracking_url=profile.tracking_url,
                    color=profile.color,
                    api_type=info.api_type if info else None,
                    documentation=info.documentation if info else None,
                    notes=info.notes if info else None,
                    requires_contract=info.requires_contract if info else None,
                )
            )
        return CarrierListResponse(carriers=carriers)

    return api


app = create_app()
