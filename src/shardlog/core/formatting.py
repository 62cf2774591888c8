"""Formatting utilities for domain logic."""


def status_to_color(status: str) -> str:
    """Map an inspection status string to a color name.

    Args:
        status: A LookupStatus value ("found", "not_found", ...).

    Returns:
        Color name string:
        - "found" -> "green"
        - "not_found" -> "yellow"
        - "filesystem_error" -> "red"
        - "decode_error" -> "red"
        - invalid -> empty string
    """
    color_map = {
        "found": "green",
        "not_found": "yellow",
        "filesystem_error": "red",
        "decode_error": "red",
    }
    return color_map.get(status, "")
