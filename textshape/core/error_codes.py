"""
Structured error codes for mosaic runs.
Use these keys in MosaicRun.error / batch rows; map to user-facing messages at the edge.
"""

MASK_UNAVAILABLE = "mask_unavailable"
INVALID_SETTINGS = "invalid_settings"
CANCELLED = "cancelled"
NO_PLACEMENTS = "no_placements"

# User-facing messages (short, actionable)
USER_MESSAGES: dict[str, str] = {
    MASK_UNAVAILABLE: "Shape image could not be loaded. Try another file or preset.",
    INVALID_SETTINGS: "Settings are invalid. Check font sizes, item count and the name list.",
    CANCELLED: "Generation was cancelled; the result is partial.",
    NO_PLACEMENTS: "No text fits inside this shape. Try a smaller minimum font size or spacing.",
}


def user_message(error_key: str | None, fallback: str = "Something went wrong.") -> str:
    """Return a user-facing message for the given error key."""
    if not error_key:
        return fallback
    return USER_MESSAGES.get(error_key, fallback)
