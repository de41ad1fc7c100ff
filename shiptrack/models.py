from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class SearchRequest(BaseModel):
    """Request payload for an order search turn."""
    query: str


class TrackingPayload(BaseModel):
    """Tracking card rendered under an assistant reply."""
    tracking_number: str
    carrier: str
    carrier_name: str
    carrier_color: str
    status: str
    tracking_url: str


class SearchResponse(BaseModel):
    """Response payload returned by the search API."""
    answer_text: str
    is_error: bool = False
    tracking: Optional[TrackingPayload] = None


class StatusResponse(BaseModel):
    is_configured: bool
    status_message: str
    order_count: int


class OrderPayload(BaseModel):
    """Serialized OrderRecord."""
    id: str
    name: str
    values: Dict[str, str]
    tracking_number: str
    carrier: str
    status: str
    tracking_url: str


class ChatMessage(BaseModel):
    """In-memory chat turn kept for the current session."""
    id: str
    role: str
    text: str
    timestamp: float
    is_error: bool = False


class CarrierPayload(BaseModel):
    carrier: str
    display_name: str
    tracking_url: str
    color: str
    api_type: Optional[str] = None
    documentation: Optional[str] = None
    notes: Optional[str] = None
    requires_contract: Optional[bool] = None


class CarrierListResponse(BaseModel):
    carriers: List[CarrierPayload] = Field(default_factory=list)
