from __future__ import annotations

"""Re-derive tracking info from assistant replies.

The assistant restates board data in free text. This module runs the same
classification vocabulary over that text and, whenever the tracking number can
be matched back to a known OrderRecord, trusts the record over the phrasing.
"""

import logging
import re
from typing import Iterable, List, Optional, Pattern, Sequence, Tuple

from .carriers import detect_carrier
from .classifiers import DELIVERED_KEYWORDS, IN_TRANSIT_KEYWORDS, find_tracking_number
from .records import CarrierId, OrderRecord, ShipmentStatus, TrackingInfo
from .utils import normalize_text

logger = logging.getLogger("shiptrack.response")

NO_DATA_PHRASES = ["sin informacion", "no tenemos informacion", "sin datos"]
PENDING_PHRASES = ["preparando", "procesando", "pendiente"]

# Emoji markers used by the assistant's reply template. The warning sign is
# listed without its variation selector because normalization drops it.
DELIVERED_MARKERS = ["✅"]
NO_DATA_MARKERS = ["⚠"]
PENDING_MARKERS = ["⏳"]
IN_TRANSIT_MARKER_RE = r"\U0001f69a.*estado"


def _alternation(terms: Sequence[str], extra: Sequence[str] = ()) -> Pattern[str]:
    parts = [re.escape(term) for term in terms]
    parts.extend(extra)
    return re.compile("|".join(parts))


STATUS_PHRASE_PATTERNS: List[Tuple[Pattern[str], ShipmentStatus]] = [
    (_alternation(DELIVERED_KEYWORDS + DELIVERED_MARKERS), ShipmentStatus.DELIVERED),
    (_alternation(IN_TRANSIT_KEYWORDS, [IN_TRANSIT_MARKER_RE]), ShipmentStatus.IN_TRANSIT),
    (_alternation(NO_DATA_PHRASES + NO_DATA_MARKERS), ShipmentStatus.NO_DATA),
    (_alternation(PENDING_PHRASES + PENDING_MARKERS), ShipmentStatus.PENDING),
]


def detect_provisional_status(text: str) -> ShipmentStatus:
    """Return the first phrase-matched status, defaulting to PENDING."""
    normalized = normalize_text(text)
    for pattern, status in STATUS_PHRASE_PATTERNS:
        if pattern.search(normalized):
            return status
    return ShipmentStatus.PENDING


def find_record_by_tracking(tracking_number: str, records: Iterable[OrderRecord]) -> Optional[OrderRecord]:
    for record in records:
        if record.tracking_number == tracking_number:
            return record
    return None


def extract_tracking_info(response_text: str, records: Iterable[OrderRecord]) -> Optional[TrackingInfo]:
    """Purpose: Derive the TrackingInfo card for one assistant reply.
    Inputs/Outputs: Inputs are the full reply text and the current OrderRecord
        collection; output is a TrackingInfo, or None when the reply carries no
        new information (no tracking number and a DELIVERED/IN_TRANSIT hint).
    Side Effects / State: None.
    Dependencies: detect_provisional_status, find_tracking_number, detect_carrier.
    Failure Modes: Never raises; unknown carriers fall back to UNKNOWN.
    If Removed: Replies cannot be turned into a status card or tracking link.
    Testing Notes: A number that matches a record must return that record's carrier
        and status even when the phrasing suggests otherwise.
    """
    # Phase A: provisional status from phrasing.
    status = detect_provisional_status(response_text)

    # Phase B: tracking number, then reconcile with known records.
    tracking_number = find_tracking_number(response_text)
    if tracking_number is None:
        if status in (ShipmentStatus.NO_DATA, ShipmentStatus.PENDING):
            return TrackingInfo(tracking_number="", carrier=CarrierId.UNKNOWN, status=status)
        logger.debug("no tracking number; provisional=%s -> no change", status.value)
        return None

    record = find_record_by_tracking(tracking_number, records)
    if record is not None:
        logger.debug("tracking=%s matched record=%s", tracking_number, record.id)
        return TrackingInfo(tracking_number=tracking_number, carrier=record.carrier, status=record.status)

    carrier = detect_carrier(response_text)
    logger.debug("tracking=%s unmatched carrier=%s status=%s", tracking_number, carrier.value, status.value)
    return TrackingInfo(tracking_number=tracking_number, carrier=carrier, status=status)
