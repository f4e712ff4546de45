"""Figma URL validation, file ID extraction and preview links."""

import logging
import re
from urllib.parse import quote, urlsplit

from config import settings

logger = logging.getLogger(__name__)

# Route segments accepted when the input is not a well-formed absolute URL
ROUTE_SEGMENTS = ("/file/", "/proto/", "/design/")

# Schemes whose URLs always carry a host, with or without "//"
SPECIAL_SCHEMES = {"http", "https", "ftp", "ws", "wss"}

# Code points a URL host may not contain
FORBIDDEN_HOST_CODE_POINTS = set(" #/:<>?@[\\]^|\x7f")

# Browsers trim C0 controls and spaces at both ends and drop tabs/newlines anywhere
C0_CONTROL_OR_SPACE = "".join(chr(code) for code in range(0x21))
TAB_OR_NEWLINE = re.compile(r"[\t\n\r]")

SCHEME_PATTERN = re.compile(r"^([A-Za-z][A-Za-z0-9+.\-]*):")
FILE_ID_PATTERN = re.compile(r"file/([a-zA-Z0-9]+)")

# Characters encodeURIComponent leaves as-is (besides alphanumerics and "-_.~")
URI_COMPONENT_SAFE = "!*'()"


def is_absolute_url(url: str) -> bool:
    """
    Check whether a string parses as a well-formed absolute URL, the way a
    browser's URL constructor decides it.

    A scheme is required. Spaces in the path, query or fragment are fine
    (browsers percent-encode them); only the host is restricted. Web schemes
    need a non-empty host, but "https:figma.com" counts as having one.
    """
    url = TAB_OR_NEWLINE.sub("", url.strip(C0_CONTROL_OR_SPACE))
    match = SCHEME_PATTERN.match(url)
    if not match:
        return False

    scheme = match.group(1).lower()
    rest = url[match.end():]

    if scheme in SPECIAL_SCHEMES:
        # Any run of slashes or backslashes introduces the authority
        rest = rest.replace("\\", "/").lstrip("/")
        url = f"{scheme}://{rest}"
    elif not rest.startswith("//"):
        # Opaque path such as "mailto:team@figma.com"
        return True

    try:
        parsed = urlsplit(url)
        hostname = parsed.hostname or ""
        # Accessing the port raises ValueError for non-numeric or out-of-range values
        parsed.port
    except ValueError:
        return False

    if scheme in SPECIAL_SCHEMES and not hostname:
        return False
    if "[" in parsed.netloc:
        # IPv6 literal, bracket syntax already checked by urlsplit
        return True

    return not any(
        ch in FORBIDDEN_HOST_CODE_POINTS or ord(ch) < 0x20 for ch in hostname
    )


def validate_figma_url(raw_url: str) -> bool:
    """
    Decide whether a raw string is an acceptable Figma file reference.

    The host marker must appear somewhere in the input. A well-formed
    absolute URL is then accepted regardless of its path; anything else
    must also contain one of the known route segments.
    """
    normalized = raw_url.strip().lower()
    marker = settings.figma_host_marker.lower()

    if marker not in normalized:
        return False

    if is_absolute_url(raw_url):
        return True

    return any(segment in normalized for segment in ROUTE_SEGMENTS)


def extract_file_id(raw_url: str) -> str | None:
    """Return the alphanumeric run following "file/", if any."""
    match = FILE_ID_PATTERN.search(raw_url)
    return match.group(1) if match else None


def build_preview_reference(raw_url: str, file_id: str | None) -> str:
    """
    Build the preview link for a file.

    Prototype and design URLs carry no file ID, so they fall back to the
    submitted URL.
    """
    if file_id:
        return f"{settings.figma_base_url.rstrip('/')}/file/{file_id}"
    logger.debug(f"No file ID in {raw_url!r}, using it as preview reference")
    return raw_url.strip()


def encode_uri_component(value: str) -> str:
    """Percent-encode a value the way a browser's encodeURIComponent does."""
    return quote(value, safe=URI_COMPONENT_SAFE)


def build_embed_url(raw_url: str) -> str:
    """Build the embeddable preview URL for the submitted link."""
    return (
        f"{settings.figma_embed_url}?embed_host=share"
        f"&url={encode_uri_component(raw_url)}"
    )
