"""
Gzip + URL-safe base64 envelope used for compressed level strings.
"""

import base64
import binascii
import gzip
import logging
import re
import zlib

from ..errors import Base64DecodeError, FramingIoError

logger = logging.getLogger(__name__)

# Maximum gzip compression level
COMPRESS_LEVEL = 9

_URLSAFE_B64_RE = re.compile(r"[A-Za-z0-9_-]*={0,2}")


def compress(text: str) -> str:
    """Gzip `text` at maximum level and wrap it in URL-safe base64.

    The gzip header timestamp is fixed to 0 so equal inputs give equal output.
    """
    try:
        compressed = gzip.compress(
            text.encode("utf-8"), compresslevel=COMPRESS_LEVEL, mtime=0
        )
    except (OSError, zlib.error, MemoryError) as e:
        raise FramingIoError(str(e)) from e
    return base64.urlsafe_b64encode(compressed).decode("ascii")


def decompress(encoded: str) -> str:
    """Undo `compress`: base64-decode, gunzip and decode as UTF-8.

    Missing base64 padding is tolerated, since level strings are often
    stored without it.

    Raises:
        Base64DecodeError: If `encoded` is not valid URL-safe base64
        FramingIoError: If the gzip stream is corrupt/truncated or not UTF-8
    """
    stripped = encoded.strip()
    if not _URLSAFE_B64_RE.fullmatch(stripped):
        raise Base64DecodeError("input is not in the URL-safe base64 alphabet")
    missing_padding = len(stripped) % 4
    if missing_padding:
        stripped += "=" * (4 - missing_padding)

    try:
        compressed = base64.b64decode(stripped, altchars=b"-_", validate=True)
    except (binascii.Error, ValueError) as e:
        raise Base64DecodeError(str(e)) from e

    try:
        raw = gzip.decompress(compressed)
    except (OSError, EOFError, zlib.error) as e:
        raise FramingIoError(f"corrupt gzip stream: {e}") from e

    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise FramingIoError(f"decompressed data is not UTF-8: {e}") from e

    logger.debug(f"Decompressed {len(encoded)} base64 chars into {len(text)} chars")
    return text
