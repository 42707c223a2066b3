"""
Image resizing for uploads.

Wide images are scaled down to a fixed width with the aspect ratio kept, then
re-encoded in their original format. Narrower images pass through untouched.
"""

import cv2
import numpy as np
import structlog

from app.exceptions import ImageProcessingFailed
from app.schemas.upload import ImagePayload

logger = structlog.get_logger()

DEFAULT_TARGET_WIDTH = 400


def scaled_height(target_width: int, width: int, height: int) -> int:
    """Height matching target_width at the same aspect ratio (truncated)."""
    return target_width * height // width


def decode_image(data: bytes) -> np.ndarray:
    """
    Decode raw image bytes into a BGR frame.

    Alpha channels are dropped.

    Raises:
        ImageProcessingFailed: If the bytes are not a decodable image
    """
    try:
        frame = cv2.imdecode(
            np.frombuffer(data, dtype=np.uint8),
            cv2.IMREAD_COLOR | cv2.IMREAD_IGNORE_ORIENTATION
        )
    except cv2.error as e:
        raise ImageProcessingFailed(f"Failed to decode image: {e}") from e
    if frame is None:
        raise ImageProcessingFailed("Failed to decode image")
    return frame


def resize_image(
    data: bytes,
    file_format: str,
    content_type: str,
    width: int = DEFAULT_TARGET_WIDTH,
) -> ImagePayload:
    """
    Resize an image to a fixed width.

    Args:
        data: Original image bytes
        file_format: Encoder format, e.g. "png" or "jpeg"
        content_type: MIME type attached to the returned payload
        width: Target width in pixels

    Returns:
        The original bytes if the image is no wider than ``width``,
        otherwise the re-encoded resized image

    Raises:
        ImageProcessingFailed: If decoding or encoding fails
    """
    frame = decode_image(data)
    origin_height, origin_width = frame.shape[:2]

    if origin_width <= width:
        logger.info(
            "Image within target width, skipping resize",
            width=origin_width,
            target_width=width
        )
        return ImagePayload(data=data, content_type=content_type)

    new_height = scaled_height(width, origin_width, origin_height)
    try:
        resized = cv2.resize(frame, (width, new_height), interpolation=cv2.INTER_AREA)
    except cv2.error as e:
        raise ImageProcessingFailed(
            f"Failed to resize image to {width}x{new_height}: {e}"
        ) from e

    try:
        ok, buffer = cv2.imencode(f".{file_format}", resized)
    except cv2.error as e:
        raise ImageProcessingFailed(f"Failed to encode image as {file_format}: {e}") from e
    if not ok:
        raise ImageProcessingFailed(f"Failed to encode image as {file_format}")

    logger.info(
        "Resized image",
        original_size=(origin_width, origin_height),
        new_size=(width, new_height),
        file_format=file_format
    )
    return ImagePayload(data=buffer.tobytes(), content_type=content_type)
