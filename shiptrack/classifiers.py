from __future__ import annotations

"""Column, tracking-number, and shipment-status classification.

These keyword lists and helpers are shared by the board-column path
(order_builder) and the assistant free-text path (response_info); neither
path keeps its own copy.
"""

import re
from typing import FrozenSet, List, Optional

from .records import ColumnKind, ShipmentStatus
from .utils import contains_any, normalize_text

TRACKING_COLUMN_PATTERNS = ["guia", "tracking", "rastreo", "numero guia", "numero_guia"]
CARRIER_COLUMN_PATTERNS = ["compania", "carrier", "paqueteria", "empresa envio", "empresa_envio"]
STATUS_COLUMN_PATTERNS = ["estado", "status", "estatus", "situacion"]

DELIVERED_KEYWORDS = ["entregado", "delivered", "completado", "completed", "finalizado", "recibido"]
IN_TRANSIT_KEYWORDS = ["en camino", "en transito", "enviado", "shipped", "transit", "en ruta"]

TRACKING_NUMBER_RE = re.compile(r"\b\d{10,22}\b", re.ASCII)


def is_tracking_column(title: str) -> bool:
    return contains_any(normalize_text(title), TRACKING_COLUMN_PATTERNS)


def is_carrier_column(title: str) -> bool:
    return contains_any(normalize_text(title), CARRIER_COLUMN_PATTERNS)


def is_status_column(title: str) -> bool:
    return contains_any(normalize_text(title), STATUS_COLUMN_PATTERNS)


def classify_column(title: str) -> FrozenSet[ColumnKind]:
    """Purpose: Report every category a column title belongs to.
    Inputs/Outputs: Input is a column title; output is a possibly empty frozenset.
    Side Effects / State: None.
    Dependencies: The three *_COLUMN_PATTERNS lists via normalize_text.
    Failure Modes: None; unmatched titles return an empty set.
    If Removed: OrderRecordBuilder cannot tell which columns feed extraction.
    Testing Notes: "Estado de guía" should be both TRACKING and STATUS.
    """
    # Categories are independent; a title may land in more than one.
    normalized = normalize_text(title)
    kinds: List[ColumnKind] = []
    if contains_any(normalized, TRACKING_COLUMN_PATTERNS):
        kinds.append(ColumnKind.TRACKING)
    if contains_any(normalized, CARRIER_COLUMN_PATTERNS):
        kinds.append(ColumnKind.CARRIER)
    if contains_any(normalized, STATUS_COLUMN_PATTERNS):
        kinds.append(ColumnKind.STATUS)
    return frozenset(kinds)


def find_tracking_number(text: str) -> Optional[str]:
    """Return the first 10-22 digit run bounded by word boundaries, if any."""
    if not text:
        return None
    match = TRACKING_NUMBER_RE.search(text)
    return match.group(0) if match else None


def extract_tracking_number(text: str) -> str:
    """Purpose: Pull a tracking number out of a tracking-like column value.
    Inputs/Outputs: Input is the column text; output is the digit run, or the
        trimmed text itself when no run exists (alphanumeric guides pass through).
    Side Effects / State: None.
    Dependencies: find_tracking_number.
    Failure Modes: Empty input returns "".
    If Removed: Orders never carry a tracking number and status stays PENDING/NO_DATA.
    Testing Notes: "Tu guía es 123456789012345" -> "123456789012345".
    """
    if not text:
        return ""
    found = find_tracking_number(text)
    return found if found is not None else text.strip()


def classify_status(status_text: str, has_tracking_number: bool) -> ShipmentStatus:
    """Purpose: Infer a ShipmentStatus from status text and tracking presence.
    Inputs/Outputs: Inputs are the raw status text and whether a tracking number
        was found; output is a ShipmentStatus.
    Side Effects / State: None.
    Dependencies: DELIVERED_KEYWORDS and IN_TRANSIT_KEYWORDS via normalize_text.
    Failure Modes: None; unrecognized text falls through to IN_TRANSIT or PENDING.
    If Removed: Order cards cannot show shipment progress.
    Testing Notes: ("", False) -> NO_DATA, ("", True) -> IN_TRANSIT,
        ("Entregado", True) -> DELIVERED.
    """
    # Explicit delivered text beats transit text, which beats the tracking default.
    if not status_text and not has_tracking_number:
        return ShipmentStatus.NO_DATA
    normalized = normalize_text(status_text)
    if contains_any(normalized, DELIVERED_KEYWORDS):
        return ShipmentStatus.DELIVERED
    if contains_any(normalized, IN_TRANSIT_KEYWORDS):
        return ShipmentStatus.IN_TRANSIT
    if has_tracking_number:
        return ShipmentStatus.IN_TRANSIT
    return ShipmentStatus.PENDING
