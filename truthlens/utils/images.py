import base64
from io import BytesIO
from typing import Tuple

from PIL import Image, UnidentifiedImageError

from truthlens.config import IMAGE_CONFIG, logger
from truthlens.exceptions import ValidationException


def inspect_image(data: bytes) -> Tuple[str, str]:
    """Return ``(format, mime_type)`` for encoded image bytes.

    Raises ValidationException when Pillow cannot decode the payload or the
    format is not one the analyzer accepts.
    """
    if not data:
        raise ValidationException("image", "file is empty")

    if len(data) > IMAGE_CONFIG.MAX_BYTES:
        # advisory only, the gateway decides whether it is too large
        logger.warning(
            "Image payload is %d bytes, above the advisory %d byte limit",
            len(data),
            IMAGE_CONFIG.MAX_BYTES,
        )

    try:
        with Image.open(BytesIO(data)) as img:
            img.verify()
            fmt = img.format
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise ValidationException("image", f"not a decodable image ({e})")

    if fmt not in IMAGE_CONFIG.ACCEPTED_FORMATS:
        raise ValidationException("image", f"unsupported format {fmt}")

    mime = Image.MIME.get(fmt, IMAGE_CONFIG.DEFAULT_MIME)
    return fmt, mime


def to_data_uri(data: bytes) -> str:
    """Encode image bytes as a ``data:<mime>;base64,...`` URI."""
    _, mime = inspect_image(data)
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime};base64,{encoded}"
