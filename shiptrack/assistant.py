from __future__ import annotations

"""Tracking assistant session: board fetch, chat, and reply classification.

Holds the current OrderRecord collection (replaced wholesale on every fetch),
the Gemini chat seeded with that collection, and the in-memory chat history.
"""

import logging
import threading
import time
import uuid
from dataclasses import dataclass
from typing import List, Optional, Tuple

import httpx
from google.api_core.exceptions import GoogleAPIError
from google.generativeai.types import BlockedPromptException, StopCandidateException

from .config import Settings
from .gemini_client import GeminiClient
from .models import ChatMessage
from .monday_client import MondayClient, MondayError
from .prompt_loader import render_system_instruction
from .records import OrderRecord, TrackingInfo
from .response_info import extract_tracking_info

logger = logging.getLogger("shiptrack.assistant")

STATUS_STARTING = "Iniciando..."
STATUS_ONLINE = "Sistema en línea"
STATUS_CONNECTION_ERROR = "Error de conexión"
CHAT_NOT_CONFIGURED_REPLY = (
    "Error: La conexión con el asistente no está configurada. Por favor verifica los datos de Monday."
)
EMPTY_REPLY = "Lo siento, no pude procesar esa respuesta."
MODEL_ERROR_REPLY = "Hubo un error al conectar con la inteligencia artificial. Por favor intenta más tarde."


@dataclass(frozen=True)
class SearchResult:
    """Outcome of one search turn; tracking is None when there is no card to show."""
    answer_text: str
    is_error: bool = False
    tracking: Optional[TrackingInfo] = None


class TrackingAssistant:
    """Coordinates the board client, the chat model, and reply classification."""

    def __init__(
        self,
        settings: Settings,
        monday: Optional[MondayClient] = None,
        gemini: Optional[GeminiClient] = None,
    ) -> None:
        self._settings = settings
        self._monday = monday or MondayClient(settings)
        self._gemini = gemini
        self._records: Tuple[OrderRecord, ...] = ()
        self._messages: List[ChatMessage] = []
        self._lock = threading.Lock()
        self._attempted = False
        self.is_configured = False
        self.status_message = STATUS_STARTING

    @property
    def records(self) -> Tuple[OrderRecord, ...]:
        return self._records

    @property
    def messages(self) -> List[ChatMessage]:
        return list(self._messages)

    def ensure_connected(self) -> None:
        """Connect once on first use; later calls are no-ops."""
        with self._lock:
            if not self._attempted:
                self._connect_locked()

    def connect(self) -> bool:
        """Purpose: Fetch the board, seed the chat, then swap in the new records.
        Inputs/Outputs: No inputs; returns True when orders and chat are both ready.
        Side Effects / State: Replaces the record tuple, restarts the chat session,
            updates is_configured/status_message.
        Dependencies: MondayClient.fetch_orders, render_system_instruction, GeminiClient.
        Failure Modes: Board or chat failures are logged and reported via
            status_message; the previous records are kept and is_configured is False.
        If Removed: The assistant never sees board data and every search is rejected.
        Testing Notes: Use fake board/model clients and assert status transitions.
        """
        with self._lock:
            return self._connect_locked()

    def refresh(self) -> bool:
        return self.connect()

    def _connect_locked(self) -> bool:
        self._attempted = True
        started = time.perf_counter()
        try:
            records = self._monday.fetch_orders()
        except (ValueError, MondayError, httpx.HTTPError) as exc:
            logger.error("step=connect status=failed error=%s", exc)
            return self._fail(str(exc))

        try:
            self._start_chat(records)
        except (ValueError, OSError, GoogleAPIError) as exc:
            logger.error("step=start_chat status=failed error=%s", exc)
            return self._fail(str(exc))

        # Records are committed only once the chat holds the same collection.
        self._records = records
        logger.info(
            "step=connect orders=%d fetch_ms=%d",
            len(records),
            int((time.perf_counter() - started) * 1000),
        )
        self.is_configured = True
        self.status_message = STATUS_ONLINE
        return True

    def _fail(self, message: str) -> bool:
        self.is_configured = False
        self.status_message = message or STATUS_CONNECTION_ERROR
        return False

    def _start_chat(self, records: Tuple[OrderRecord, ...]) -> None:
        instruction = render_system_instruction(self._settings.prompts_dir, records)
        if self._gemini is None:
            self._gemini = GeminiClient(self._settings)
        self._gemini.start_chat(instruction)

    def _ask_model(self, query: str) -> Tuple[str, bool]:
        if self._gemini is None or not self._gemini.has_chat:
            return CHAT_NOT_CONFIGURED_REPLY, True
        try:
            reply = self._gemini.send_message(query)
        except (GoogleAPIError, BlockedPromptException, StopCandidateException, ValueError, RuntimeError) as exc:
            logger.error("step=send_message status=failed error=%s", exc)
            return MODEL_ERROR_REPLY, True
        return reply or EMPTY_REPLY, False

    def search(self, query: str) -> SearchResult:
        """Purpose: Run one search turn and classify the reply into a tracking card.
        Inputs/Outputs: Input is the user's query; returns a SearchResult.
        Side Effects / State: Appends user and model messages to the history.
        Dependencies: GeminiClient.send_message and extract_tracking_info over the
            current record tuple.
        Failure Modes: Model errors become a fixed error reply with no tracking card.
        If Removed: Users cannot query their orders.
        Testing Notes: Fake the model reply and assert the returned TrackingInfo.
        """
        query = (query or "").strip()
        if not query:
            return SearchResult(answer_text="", is_error=True)
        self.ensure_connected()
        if not self.is_configured:
            return SearchResult(answer_text=self.status_message, is_error=True)

        with self._lock:
            self._append("user", query)
            reply, is_error = self._ask_model(query)
            self._append("model", reply, is_error=is_error)
            records = self._records

        if is_error:
            return SearchResult(answer_text=reply, is_error=True)
        # Classification runs only on the complete reply.
        tracking = extract_tracking_info(reply, records)
        logger.info(
            "step=search tracking=%s status=%s",
            tracking.tracking_number if tracking else "-",
            tracking.status.value if tracking else "-",
        )
        return SearchResult(answer_text=reply, tracking=tracking)

    def _append(self, role: str, text: str, is_error: bool = False) -> None:
        self._messages.append(
            ChatMessage(
                id=uuid.uuid4().hex,
                role=role,
                text=text,
                timestamp=time.time(),
                is_error=is_error,
            )
        )
