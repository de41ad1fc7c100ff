from __future__ import annotations

"""Board source client for monday.com.

Fetches board items over the GraphQL API and hands them to the order builder.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

import httpx

from .config import Settings
from .order_builder import build_order_records
from .records import OrderRecord, RawBoardItem, RawColumn

logger = logging.getLogger("shiptrack.monday")

ITEMS_QUERY = """
query {
  boards (ids: [%(board_id)s]) {
    items_page (limit: %(limit)d) {
      items {
        id
        name
        column_values {
          id
          text
          value
          column {
            title
          }
        }
      }
    }
  }
}
"""


class MondayError(RuntimeError):
    """Raised when the board API answers with GraphQL errors."""


class MondayClient:
    """Thin wrapper around the monday.com GraphQL endpoint."""

    def __init__(self, settings: Settings, transport: Optional[httpx.BaseTransport] = None) -> None:
        self._settings = settings
        self._transport = transport

    def fetch_items(self) -> List[RawBoardItem]:
        """Purpose: Fetch the configured board's items as RawBoardItem values.
        Inputs/Outputs: No inputs; returns a list of RawBoardItem.
        Side Effects / State: One HTTP POST to the board API.
        Dependencies: httpx and Settings (token, board id, url, version, limit).
        Failure Modes: Missing credentials raise ValueError; GraphQL errors raise
            MondayError; transport/status failures raise httpx.HTTPError.
        If Removed: No order data reaches the classifier or the assistant.
        Testing Notes: Use httpx.MockTransport to return canned GraphQL payloads.
        """
        settings = self._settings
        if not settings.monday_api_token or not settings.monday_board_id:
            raise ValueError(
                "Missing Monday.com credentials. Set MONDAY_API_TOKEN and MONDAY_BOARD_ID."
            )

        query = ITEMS_QUERY % {"board_id": settings.monday_board_id, "limit": settings.monday_items_limit}
        headers = {
            "Content-Type": "application/json",
            "Authorization": settings.monday_api_token,
            "API-Version": settings.monday_api_version,
        }
        with httpx.Client(transport=self._transport, timeout=settings.request_timeout) as client:
            response = client.post(settings.monday_api_url, headers=headers, json={"query": query})
            response.raise_for_status()
            result = response.json()

        errors = result.get("errors")
        if errors:
            message = errors[0].get("message") if isinstance(errors[0], dict) else None
            logger.error("board=%s graphql_errors=%d", settings.monday_board_id, len(errors))
            raise MondayError(message or "Error fetching data from Monday")

        items = _extract_items(result)
        logger.info("board=%s items=%d", settings.monday_board_id, len(items))
        return [_parse_item(item) for item in items]

    def fetch_orders(self) -> Tuple[OrderRecord, ...]:
        """Fetch the board and build a fresh OrderRecord collection."""
        return build_order_records(self.fetch_items())


def _extract_items(result: Dict[str, Any]) -> List[Dict[str, Any]]:
    # data.boards[0].items_page.items, tolerating missing levels.
    boards = (result.get("data") or {}).get("boards") or []
    if not boards:
        return []
    page = boards[0].get("items_page") or {}
    return page.get("items") or []


def _parse_item(item: Dict[str, Any]) -> RawBoardItem:
    columns = []
    for value in item.get("column_values") or []:
        column = value.get("column") or {}
        title = column.get("title") or value.get("id") or ""
        columns.append(RawColumn(title=title, text=value.get("text") or ""))
    return RawBoardItem(id=str(item.get("id", "")), name=item.get("name") or "", columns=tuple(columns))
