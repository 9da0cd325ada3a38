"""Theme runtime constants."""

from __future__ import annotations

STYLE_ELEMENT_ID = "tokiforge-theme"
STORAGE_KEY = "tokiforge-theme"
