from __future__ import annotations

# Key prefixes for TabWindow.id; saved and open ids must never collide.
SAVED_ID_PREFIX: str = "_saved"
OPEN_ID_PREFIX: str = "_open"

EXPORT_TITLE_COLUMN_WIDTH: int = 39
EXPORT_TABLE_HEADER: str = (
    "Title".ljust(EXPORT_TITLE_COLUMN_WIDTH)
    + "| URL\n"
    + "-" * EXPORT_TITLE_COLUMN_WIDTH
    + "|-----------\n"
)

# Tabs parked by a suspender extension keep their real URL in the fragment.
SUSPENDER_URL_MARKERS: tuple[str, ...] = (
    "/suspended.html#",
    "/park.html?",
)

FUZZY_MATCH_THRESHOLD: float = 40.0

LOG_LEVEL_ENV: str = "TABWIN_LOG_LEVEL"
