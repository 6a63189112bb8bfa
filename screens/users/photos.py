# app/screens/users/photos.py
# -------------------------------------------------------------------
# Photos travel inside the JSON user record as data: URLs.
# Uploads are validated and downscaled with Pillow before encoding.
# -------------------------------------------------------------------
from __future__ import annotations

import base64
import binascii
import io
from typing import Optional

from PIL import Image, ImageOps, UnidentifiedImageError

DATA_URL_PREFIX = "data:"


class PhotoError(Exception):
    pass


def photo_to_data_url(data: bytes, max_side: int = 512) -> str:
    """Validate an uploaded image, fit it inside max_side x max_side, return a data URL."""
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (UnidentifiedImageError, OSError) as e:
        raise PhotoError(f"Not a readable image: {e}") from e

    img = ImageOps.exif_transpose(img)
    img.thumbnail((max_side, max_side))

    if img.mode in ("RGBA", "LA", "P"):
        fmt, mime = "PNG", "image/png"
        if img.mode == "P":
            img = img.convert("RGBA")
    else:
        fmt, mime = "JPEG", "image/jpeg"
        if img.mode != "RGB":
            img = img.convert("RGB")

    buf = io.BytesIO()
    img.save(buf, format=fmt)
    encoded = base64.b64encode(buf.getvalue()).decode("ascii")
    return f"data:{mime};base64,{encoded}"


def data_url_bytes(value: Optional[str]) -> Optional[bytes]:
    """Raw bytes of a base64 data URL, or None if value is not one."""
    if not value or not value.startswith(DATA_URL_PREFIX) or ";base64," not in value:
        return None
    try:
        return base64.b64decode(value.split(";base64,", 1)[1], validate=True)
    except (binascii.Error, ValueError):
        return None
