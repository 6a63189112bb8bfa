# app/screens/certificates/renderer.py
# -------------------------------------------------------------------
# Renders a certificate as a PNG from the record's fields.
# Nothing is fetched; the backend only stores the certificate record.
# -------------------------------------------------------------------
from __future__ import annotations

import io
import re
from typing import Any, Dict

from PIL import Image, ImageDraw, ImageFont

WIDTH, HEIGHT = 1400, 990
BACKGROUND = (255, 253, 245)
BORDER = (37, 99, 235)
INK = (31, 41, 55)
MUTED = (107, 114, 128)

DOWNLOADABLE_STATUSES = ("Generated", "Issued")


def can_download(record: Dict[str, Any]) -> bool:
    return record.get("status") in DOWNLOADABLE_STATUSES


def certificate_filename(record: Dict[str, Any]) -> str:
    slug = re.sub(r"[^A-Za-z0-9]+", "_", f"{record.get('candidateName', '')} {record.get('course', '')}")
    return f"certificate_{slug.strip('_') or 'record'}.png"


def _font(size: int) -> ImageFont.ImageFont:
    return ImageFont.load_default(size=size)


def _centered(draw: ImageDraw.ImageDraw, y: int, text: str, size: int, fill) -> None:
    font = _font(size)
    left, _, right, _ = draw.textbbox((0, 0), text, font=font)
    draw.text(((WIDTH - (right - left)) / 2, y), text, font=font, fill=fill)


def render_certificate_png(record: Dict[str, Any], issuer: str = "Training Management System") -> bytes:
    img = Image.new("RGB", (WIDTH, HEIGHT), BACKGROUND)
    draw = ImageDraw.Draw(img)

    draw.rectangle([30, 30, WIDTH - 30, HEIGHT - 30], outline=BORDER, width=10)
    draw.rectangle([55, 55, WIDTH - 55, HEIGHT - 55], outline=BORDER, width=2)

    _centered(draw, 130, "CERTIFICATE OF COMPLETION", 64, BORDER)
    _centered(draw, 260, "This is to certify that", 32, MUTED)
    _centered(draw, 330, str(record.get("candidateName") or "-"), 72, INK)
    _centered(draw, 450, "has successfully completed the course", 32, MUTED)
    _centered(draw, 510, str(record.get("course") or "-"), 56, INK)

    details = " · ".join(
        part for part in (
            str(record.get("courseType") or "").strip(),
            str(record.get("duration") or "").strip(),
        ) if part
    )
    if details:
        _centered(draw, 610, details, 30, MUTED)

    _centered(draw, 800, issuer, 30, INK)
    _centered(draw, 850, f"Status: {record.get('status') or 'Pending'}", 24, MUTED)

    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()
