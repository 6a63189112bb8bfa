import base64
import io

import pytest
from PIL import Image

from screens.users.photos import PhotoError, data_url_bytes, photo_to_data_url


def _image_bytes(size=(800, 400), mode="RGB", fmt="JPEG") -> bytes:
    buf = io.BytesIO()
    Image.new(mode, size, (10, 120, 200) if mode == "RGB" else (10, 120, 200, 128)).save(buf, format=fmt)
    return buf.getvalue()


def test_photo_is_downscaled_and_inlined_as_jpeg():
    url = photo_to_data_url(_image_bytes(), max_side=200)
    assert url.startswith("data:image/jpeg;base64,")
    img = Image.open(io.BytesIO(data_url_bytes(url)))
    assert max(img.size) == 200
    assert img.size == (200, 100)


def test_transparent_photo_stays_png():
    url = photo_to_data_url(_image_bytes(size=(50, 50), mode="RGBA", fmt="PNG"), max_side=512)
    assert url.startswith("data:image/png;base64,")
    img = Image.open(io.BytesIO(data_url_bytes(url)))
    # small images are not enlarged
    assert img.size == (50, 50)


def test_non_image_upload_is_rejected():
    with pytest.raises(PhotoError):
        photo_to_data_url(b"%PDF-1.4 not an image")


@pytest.mark.parametrize("value", [None, "", "https://example.com/a.png", "data:image/png;base64,@@@"])
def test_data_url_bytes_rejects_non_data_urls(value):
    assert data_url_bytes(value) is None


def test_data_url_bytes_round_trip():
    raw = b"\x89PNG fake"
    assert data_url_bytes("data:image/png;base64," + base64.b64encode(raw).decode()) == raw
