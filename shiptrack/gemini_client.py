from __future__ import annotations

from typing import Any, Optional

import google.generativeai as genai
from google.generativeai.types import HarmBlockThreshold, HarmCategory

from .config import Settings

# Order replies quote customer names and addresses; safety stops there are false positives.
DEFAULT_SAFETY_SETTINGS = [
    {"category": HarmCategory.HARM_CATEGORY_HARASSMENT, "threshold": HarmBlockThreshold.BLOCK_NONE},
    {"category": HarmCategory.HARM_CATEGORY_HATE_SPEECH, "threshold": HarmBlockThreshold.BLOCK_NONE},
    {"category": HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT, "threshold": HarmBlockThreshold.BLOCK_NONE},
    {"category": HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT, "threshold": HarmBlockThreshold.BLOCK_NONE},
]


class GeminiClient:
    """Thin wrapper around the Gemini SDK holding one chat session."""

    def __init__(self, settings: Settings) -> None:
        """Purpose: Configure the Gemini SDK for the tracking assistant.
        Inputs/Outputs: Input is Settings; no return value.
        Side Effects / State: Configures the SDK global API key.
        Dependencies: Uses google.generativeai and Settings from config.
        Failure Modes: Raises ValueError if API key or model name is missing.
        If Removed: The assistant cannot answer order questions.
        Testing Notes: Validate missing key raises ValueError.
        """
        # Configure API key and resolve the model name once.
        self._settings = settings
        if not settings.gemini_api_key:
            raise ValueError("GEMINI_API_KEY is required")
        self._model_name = _normalize_model_name(settings.gemini_model)
        if not self._model_name:
            raise ValueError("Gemini model name is required")
        genai.configure(api_key=settings.gemini_api_key)
        self._chat: Optional[Any] = None

    @property
    def has_chat(self) -> bool:
        return self._chat is not None

    def start_chat(self, system_instruction: str) -> None:
        """Purpose: Open a fresh chat session seeded with the order context.
        Inputs/Outputs: Input is the rendered system instruction; no return value.
        Side Effects / State: Replaces any previous chat session and its history.
        Dependencies: genai.GenerativeModel.start_chat.
        Failure Modes: SDK errors propagate to the caller.
        If Removed: Replies would not be grounded on the current board data.
        Testing Notes: Replace with a fake in unit tests; no network calls.
        """
        model = genai.GenerativeModel(
            self._model_name,
            system_instruction=system_instruction,
            generation_config={"temperature": self._settings.gemini_temperature},
            safety_settings=DEFAULT_SAFETY_SETTINGS,
        )
        self._chat = model.start_chat(history=[])

    def send_message(self, message: str) -> str:
        """Send one user turn and return the stripped reply text."""
        if self._chat is None:
            raise RuntimeError("Chat session has not been started")
        response = self._chat.send_message(message)
        text: Optional[str] = getattr(response, "text", None)
        return (text or "").strip()


def _normalize_model_name(name: Optional[str]) -> str:
    # Strip "models/" prefix and whitespace.
    if not name:
        return ""
    cleaned = name.strip()
    if cleaned.startswith("models/"):
        return cleaned.split("/", 1)[1]
    return cleaned
