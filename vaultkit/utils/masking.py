"""
Masking helpers for logging secret values.

Values are never logged in full: a loaded secret keeps only a short prefix
and suffix, and connection strings have their password replaced.
"""

from urllib.parse import urlsplit, urlunsplit

DEFAULT_MASK_CHAR = "*"
DEFAULT_UNMASKED_START = 4
DEFAULT_UNMASKED_END = 4

__all__ = ["mask_string", "sanitize_url_for_log"]


def mask_string(
    value: str,
    unmasked_start: int = DEFAULT_UNMASKED_START,
    unmasked_end: int = DEFAULT_UNMASKED_END,
    mask_with: str = DEFAULT_MASK_CHAR,
) -> str:
    """
    Mask the middle of a string, keeping its first and last characters.

    Args:
        value: String to mask
        unmasked_start: Number of leading characters left visible
        unmasked_end: Number of trailing characters left visible
        mask_with: Character replacing each hidden character

    Returns:
        String of the same length with the middle replaced 1:1,
        e.g. "supersecretvalue" -> "supe********alue". Values too short
        to hide anything are masked entirely.
    """
    value = str(value)
    if len(value) <= unmasked_start + unmasked_end:
        return mask_with * len(value)

    hidden = len(value) - unmasked_start - unmasked_end
    tail = value[len(value) - unmasked_end:] if unmasked_end else ""
    return value[:unmasked_start] + mask_with * hidden + tail


def sanitize_url_for_log(connection_string: str) -> str:
    """Replace the password of a connection URL with '***'."""
    try:
        parts = urlsplit(connection_string)
        if not parts.scheme or not parts.netloc:
            return "***invalid-url***"
        if parts.password is None:
            return connection_string

        # Keep host[:port] as written so IPv6 brackets survive
        host = parts.netloc.rpartition("@")[2]
        netloc = f"{parts.username or ''}:***@{host}"
        return urlunsplit((parts.scheme, netloc, parts.path, parts.query, parts.fragment))
    except ValueError:
        return "***invalid-url***"
