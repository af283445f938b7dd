"""
Card image uploads.

Uploaded images are stored inline on the card as a base64 ``data:`` URL,
so they travel with the plan document. Larger files should be linked by URL.
"""

from __future__ import annotations

import base64

from core.exceptions import MediaTooLargeError, UnsupportedMediaError

MAX_IMAGE_BYTES = 5 * 1024 * 1024


def image_data_url(data: bytes, mime_type: str) -> str:
    """
    Encode an uploaded image as a data URL.

    Args:
        data: Raw file content
        mime_type: Content type reported by the upload, e.g. ``image/png``

    Raises:
        MediaTooLargeError: If the file exceeds MAX_IMAGE_BYTES
        UnsupportedMediaError: If the file is not an image
    """
    if len(data) > MAX_IMAGE_BYTES:
        raise MediaTooLargeError(
            "The image is too large (limit: 5 MB). Use an image URL for larger files.",
            context={"size": len(data), "limit": MAX_IMAGE_BYTES},
        )
    if not (mime_type or "").startswith("image/"):
        raise UnsupportedMediaError(
            f"Unsupported file type: {mime_type or 'unknown'}",
            context={"mime_type": mime_type},
        )
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"
