from __future__ import annotations

"""Shared data model for board items, order records, and tracking info.

Raw board items come from the board collaborator; OrderRecord and TrackingInfo
are produced by the classification pipeline and are immutable once built.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Tuple


class CarrierId(str, Enum):
    """Closed set of recognized shipping carriers."""
    ESTAFETA = "ESTAFETA"
    FEDEX = "FEDEX"
    DHL = "DHL"
    UPS = "UPS"
    REDPACK = "REDPACK"
    PAQUETEXPRESS = "PAQUETEXPRESS"
    UNKNOWN = "UNKNOWN"


class ShipmentStatus(str, Enum):
    """Coarse shipment lifecycle states."""
    PENDING = "PENDING"
    IN_TRANSIT = "IN_TRANSIT"
    DELIVERED = "DELIVERED"
    NO_DATA = "NO_DATA"


class ColumnKind(str, Enum):
    """Categories a board column title can denote (non-exclusive)."""
    TRACKING = "TRACKING"
    CARRIER = "CARRIER"
    STATUS = "STATUS"


@dataclass(frozen=True)
class RawColumn:
    title: str
    text: str = ""


@dataclass(frozen=True)
class RawBoardItem:
    """One row of the source board as delivered by the board collaborator."""
    id: str
    name: str
    columns: Tuple[RawColumn, ...] = ()


@dataclass(frozen=True)
class OrderRecord:
    """Normalized view of a board item with extracted tracking data."""
    id: str
    name: str
    fields: Mapping[str, str] = field(default_factory=dict, hash=False)
    tracking_number: str = ""
    carrier: CarrierId = CarrierId.UNKNOWN
    status: ShipmentStatus = ShipmentStatus.NO_DATA

    def __post_init__(self) -> None:
        # Freeze the field mapping so the record cannot be edited after build.
        if not isinstance(self.fields, MappingProxyType):
            object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def to_context(self) -> Dict[str, object]:
        """Purpose: Serialize the record for the assistant's prompt context.
        Inputs/Outputs: No inputs; returns a JSON-ready dict.
        Side Effects / State: None.
        Dependencies: Used by prompt rendering and the HTTP orders endpoint.
        Failure Modes: None.
        If Removed: The assistant loses the structured data it answers from.
        Testing Notes: Verify keys and enum values are plain strings.
        """
        return {
            "id": self.id,
            "name": self.name,
            "values": dict(self.fields),
            "trackingNumber": self.tracking_number,
            "shippingCarrier": self.carrier.value,
            "shipmentStatus": self.status.value,
        }


@dataclass(frozen=True)
class TrackingInfo:
    """Per-turn tracking triple derived from assistant text."""
    tracking_number: str
    carrier: CarrierId
    status: ShipmentStatus
