from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable

from .records import OrderRecord

SYSTEM_INSTRUCTION_FILE = "system_instruction.md"
ORDERS_PLACEHOLDER = "{orders_json}"


def load_prompt(prompt_path: Path) -> str:
    """Purpose: Load a prompt file as UTF-8 text and strip BOM if present.
    Inputs/Outputs: Input is a Path to the prompt file; output is the decoded string.
    Side Effects / State: None; reads the filesystem.
    Dependencies: Uses Path.read_text/read_bytes.
    Failure Modes: UnicodeDecodeError triggers a fallback decode with errors ignored,
        which can drop invalid bytes. A missing file raises FileNotFoundError.
    If Removed: The assistant cannot be given its instructions.
    Testing Notes: Validate BOM-stripping and fallback decoding on non-UTF8 files.
    """
    # Read as UTF-8 and fall back to a tolerant decode if needed.
    try:
        return prompt_path.read_text(encoding="utf-8").lstrip("\ufeff")
    except UnicodeDecodeError:
        raw = prompt_path.read_bytes()
        return raw.decode("utf-8", errors="ignore").lstrip("\ufeff")


def orders_context_json(records: Iterable[OrderRecord]) -> str:
    return json.dumps([record.to_context() for record in records], ensure_ascii=False, indent=2)


def render_system_instruction(prompts_dir: Path, records: Iterable[OrderRecord]) -> str:
    """Fill the system instruction template with the serialized order collection."""
    template = load_prompt(prompts_dir / SYSTEM_INSTRUCTION_FILE)
    return template.replace(ORDERS_PLACEHOLDER, orders_context_json(records))
