"""
Numeric ID Extraction

Find asset and animation ids in catalog URLs and asset content. An id is a
maximal run of at least six ASCII digits.
"""

from __future__ import annotations

import re
from urllib.parse import urlsplit

from .errors import InvalidAssetIdError

NUMERIC_ID_PATTERN = re.compile(r"\d{6,}", re.ASCII)


def extract_first_numeric_id(text: str | None) -> str | None:
    """
    Extract the first numeric id from a catalog URL.

    When the input parses as an absolute URL only its path and query are
    scanned. Anything else is scanned as raw text.

    Args:
        text: Catalog URL or free-form text

    Returns:
        First digit run of 6+ digits, or None
    """
    if not text:
        return None

    parts = _split_url(text)
    if parts is not None:
        path, query = parts
        # Space keeps a trailing path run from merging with a leading query run
        match = NUMERIC_ID_PATTERN.search(f"{path} {query}")
    else:
        match = NUMERIC_ID_PATTERN.search(text)

    return match.group(0) if match else None


def extract_all_numeric_ids(text: str | None) -> list[str]:
    """
    Extract every distinct numeric id from text, in order of first appearance.

    Args:
        text: Asset content

    Returns:
        Deduplicated list of digit runs (may be empty)
    """
    if not text:
        return []

    seen = set()
    unique_ids = []
    for match in NUMERIC_ID_PATTERN.findall(text):
        if match not in seen:
            seen.add(match)
            unique_ids.append(match)
    return unique_ids


def pick_candidate(ids: list[str]) -> str | None:
    """Return the best-guess animation id: the first match wins."""
    return ids[0] if ids else None


def resolve_target_id(catalog_url: str | None, asset_id: str | None) -> str | None:
    """
    Decide which asset id to look up.

    An explicit asset id takes precedence over the catalog URL.

    Raises:
        InvalidAssetIdError: If the explicit id is not all digits
    """
    if asset_id is not None:
        explicit = str(asset_id).strip()
        if explicit:
            if not (explicit.isascii() and explicit.isdigit()):
                raise InvalidAssetIdError()
            return explicit

    return extract_first_numeric_id(catalog_url)


def _split_url(text: str) -> tuple[str, str] | None:
    """Strictly parse an absolute URL, returning (path, query) or None."""
    try:
        parsed = urlsplit(text.strip())
        # Accessing port validates it and raises ValueError when malformed
        _ = parsed.port
    except ValueError:
        return None

    if not parsed.scheme or not parsed.netloc:
        return None
    return parsed.path, parsed.query
