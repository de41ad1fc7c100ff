import unicodedata


def normalize_text(text: str) -> str:
    """Purpose: Normalize free-form text for accent- and case-insensitive matching.
    Inputs/Outputs: Input is a raw string; output is the lowercase string with
        diacritics removed (e.g. "Compañía" -> "compania").
    Side Effects / State: None; pure function.
    Dependencies: Uses unicodedata; called by every column, carrier, and status matcher.
    Failure Modes: Returns an empty string when input is falsy. Whitespace and
        punctuation are kept so multi-word keywords ("en camino") still match.
    If Removed: Keyword matching becomes accent/case sensitive and both the column
        path and the free-text path stop recognizing Spanish input.
    Testing Notes: Validate "Número de Guía" -> "numero de guia" and idempotence.
    """
    # Lowercase, decompose, then drop combining marks.
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFD", text.lower())
    return "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn")


def contains_any(normalized: str, keywords) -> bool:
    """Return True when any keyword is a substring of the normalized text."""
    return any(keyword in normalized for keyword in keywords)
