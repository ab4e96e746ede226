"""
Text normalization for extracted fields (whitespace collapse, trim).
"""

from __future__ import annotations

import re
from typing import Optional


def normalize_whitespace(text: str) -> str:
    """Normalize whitespace: collapse multiples, trim."""
    text = re.sub(r"\s+", " ", text)
    return text.strip()


def clean_field(text: Optional[str]) -> Optional[str]:
    """Normalize a field value; blank or missing values become None."""
    if text is None:
        return None
    cleaned = normalize_whitespace(text)
    return cleaned or None
