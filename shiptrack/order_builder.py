from __future__ import annotations

import logging
from typing import Dict, Iterable, Tuple

from .carriers import detect_carrier
from .classifiers import classify_column, classify_status, extract_tracking_number
from .records import CarrierId, ColumnKind, OrderRecord, RawBoardItem

logger = logging.getLogger("shiptrack.orders")


def build_order_record(item: RawBoardItem) -> OrderRecord:
    """Purpose: Turn one raw board item into an immutable OrderRecord.
    Inputs/Outputs: Input is a RawBoardItem; output is a new OrderRecord.
    Side Effects / State: None; the raw item is only read.
    Dependencies: classify_column, extract_tracking_number, detect_carrier, classify_status.
    Failure Modes: None; items without matching columns yield an UNKNOWN/NO_DATA record.
    If Removed: Board data cannot be fed to the assistant or matched back from replies.
    Testing Notes: With two tracking-like columns, only the first scanned value is kept.
    """
    # Scan columns once; the first column of each category supplies its value.
    fields: Dict[str, str] = {}
    tracking_number = ""
    carrier = CarrierId.UNKNOWN
    status_text = ""

    for column in item.columns:
        if not column.text:
            continue
        fields[column.title] = column.text
        kinds = classify_column(column.title)

        if ColumnKind.TRACKING in kinds and not tracking_number:
            tracking_number = extract_tracking_number(column.text)
        if ColumnKind.CARRIER in kinds and carrier is CarrierId.UNKNOWN:
            carrier = detect_carrier(column.text)
        if ColumnKind.STATUS in kinds and not status_text:
            status_text = column.text

    # Status is classified only after every column has been scanned.
    status = classify_status(status_text, bool(tracking_number))
    logger.debug(
        "item=%s tracking=%s carrier=%s status=%s",
        item.id,
        tracking_number or "-",
        carrier.value,
        status.value,
    )
    return OrderRecord(
        id=item.id,
        name=item.name,
        fields=fields,
        tracking_number=tracking_number,
        carrier=carrier,
        status=status,
    )


def build_order_records(items: Iterable[RawBoardItem]) -> Tuple[OrderRecord, ...]:
    """Build a fresh, immutable record collection; items are independent."""
    return tuple(build_order_record(item) for item in items)
