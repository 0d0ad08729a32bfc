r"""Request content compression."""

from __future__ import annotations

__all__ = ["MIN_COMPRESSIBLE_LENGTH", "MAX_COMPRESSED_RATIO", "compress_content"]

import gzip
import logging

from webrequests.core.config import COMPRESSED_CONTENT_TYPE, OCTET_STREAM_CONTENT_TYPE

logger: logging.Logger = logging.getLogger(__name__)

# Content shorter than this is never compressed
MIN_COMPRESSIBLE_LENGTH = 1024

# Compressed content is only used if it is at most this fraction of the original length
MAX_COMPRESSED_RATIO = 0.9


def compress_content(content: bytes, content_type: str | None) -> tuple[bytes, str] | None:
    """Gzip request content if that significantly reduces its length.

    Args:
        content: The request content.
        content_type: The content type of the request content.

    Returns:
        A ``(compressed_content, wrapped_content_type)`` tuple, or ``None``
        if the content should be sent uncompressed. The wrapped content
        type is ``application/x-vnd.logos.compressed; type="<content type>"``.

    Example:
        ```pycon
        >>> from webrequests.utils.compression import compress_content
        >>> compress_content(b"short", "text/plain") is None
        True
        >>> compressed, content_type = compress_content(b"a" * 4096, "text/plain")
        >>> content_type
        'application/x-vnd.logos.compressed; type="text/plain"'

        ```
    """
    if len(content) < MIN_COMPRESSIBLE_LENGTH:
        return None
    compressed = gzip.compress(content)
    if len(compressed) > len(content) * MAX_COMPRESSED_RATIO:
        logger.debug(
            f"Request content not compressed ({len(content)} -> {len(compressed)} bytes)"
        )
        return None
    inner_type = (content_type or OCTET_STREAM_CONTENT_TYPE).replace('"', '\\"')
    return compressed, f'{COMPRESSED_CONTENT_TYPE}; type="{inner_type}"'
