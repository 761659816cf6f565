# utils/sanitization.py
from typing import Optional
import re

CONTROL_CHARS = r"[\x00-\x08\x0b-\x0c\x0e-\x1f\x7f-\x9f]"
PUNCTUATION = r"[^\w\s]"


def clean_text(value: Optional[str]) -> str:
    if value is None:
        return ""

    text = re.sub(CONTROL_CHARS, "", value)
    text = text.strip()
    text = re.sub(r"\s+", " ", text)

    return text


def normalize_title(value: Optional[str]) -> str:
    """Lower-cased, punctuation-free title used for duplicate detection."""
    return re.sub(PUNCTUATION, "", (value or "").lower()).strip()


def normalize_name_key(value: Optional[str]) -> str:
    """Case- and whitespace-insensitive author key."""
    return clean_text(value).lower()


def truncate(value: Optional[str], max_length: int) -> str:
    if not value:
        return ""
    return value[:max_length]
