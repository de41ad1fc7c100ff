from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent

DEFAULT_MONDAY_API_URL = "https://api.monday.com/v2"
DEFAULT_MONDAY_API_VERSION = "2023-10"


@dataclass(frozen=True)
class Settings:
    """Configuration container for the board source, the assistant model, and limits."""
    gemini_api_key: str
    gemini_model: str
    gemini_temperature: float
    monday_api_token: str
    monday_board_id: str
    monday_api_url: str
    monday_api_version: str
    monday_items_limit: int
    request_timeout: float
    prompts_dir: Path


def load_settings() -> Settings:
    """Purpose: Load configuration from environment variables and defaults.
    Inputs/Outputs: No inputs; returns a Settings instance.
    Side Effects / State: Reads environment variables.
    Dependencies: Uses os.getenv and BASE_DIR for the default prompts directory.
    Failure Modes: Invalid numeric env values (MONDAY_ITEMS_LIMIT, REQUEST_TIMEOUT,
        GEMINI_TEMPERATURE) raise ValueError. Missing credentials are not an error
        here; the board and model clients report them when used.
    If Removed: The app cannot reach the board or the model.
    Testing Notes: Verify defaults and overrides via monkeypatched environment.
    """
    # Resolve the prompts directory, then build Settings.
    prompts_path = os.getenv("PROMPTS_DIR")
    prompts_dir = Path(prompts_path) if prompts_path else (BASE_DIR / "prompts").resolve()

    return Settings(
        gemini_api_key=os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY", ""),
        gemini_model=os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
        gemini_temperature=float(os.getenv("GEMINI_TEMPERATURE", "0.7")),
        monday_api_token=os.getenv("MONDAY_API_TOKEN", ""),
        monday_board_id=os.getenv("MONDAY_BOARD_ID", ""),
        monday_api_url=os.getenv("MONDAY_API_URL", DEFAULT_MONDAY_API_URL),
        monday_api_version=os.getenv("MONDAY_API_VERSION", DEFAULT_MONDAY_API_VERSION),
        monday_items_limit=int(os.getenv("MONDAY_ITEMS_LIMIT", "50")),
        request_timeout=float(os.getenv("REQUEST_TIMEOUT", "30")),
        prompts_dir=prompts_dir,
    )
