import cv2
import pytest
from unittest.mock import patch
from app.exceptions import ImageProcessingFailed
from app.services.image_resizer import resize_image, scaled_height


def test_resize_wide_image(make_image, image_size):
    """Test an 800x600 image is scaled to 400x300."""
    payload = resize_image(make_image(800, 600), "png", "image/png", 400)

    assert image_size(payload.data) == (400, 300)
    assert payload.content_type == "image/png"
    assert payload.size == len(payload.data)


def test_resize_truncates_height(make_image, image_size):
    """Test scaled height uses integer truncation."""
    payload = resize_image(make_image(1000, 333), "png", "image/png", 400)

    # 400 * 333 / 1000 = 133.2
    assert image_size(payload.data) == (400, 133)
    assert scaled_height(400, 999, 1000) == 400
    assert scaled_height(400, 3, 2) == 266


def test_resize_jpeg(make_image, image_size):
    payload = resize_image(make_image(1200, 900, "jpg"), "jpeg", "image/jpeg", 400)
    assert image_size(payload.data) == (400, 300)


def test_narrow_image_returned_unchanged(make_image):
    original = make_image(300, 500)
    payload = resize_image(original, "png", "image/png", 400)

    assert payload.data == original
    assert payload.content_type == "image/png"


def test_image_at_target_width_returned_unchanged(make_image):
    original = make_image(400, 400)
    assert resize_image(original, "png", "image/png", 400).data == original


def test_resize_to_zero_height(make_image):
    """Test a panorama whose scaled height truncates to zero is rejected."""
    assert scaled_height(400, 2000, 4) == 0

    with pytest.raises(ImageProcessingFailed):
        resize_image(make_image(2000, 4), "png", "image/png", 400)


def test_decode_ignores_exif_orientation(make_image):
    """Test images are measured in their stored orientation."""
    with patch('app.services.image_resizer.cv2.imdecode', wraps=cv2.imdecode) as mock_imdecode:
        resize_image(make_image(300, 200), "png", "image/png", 400)

    flags = mock_imdecode.call_args.args[1]
    assert flags == cv2.IMREAD_COLOR | cv2.IMREAD_IGNORE_ORIENTATION


@pytest.mark.parametrize("data", [b"not an image", b""])
def test_undecodable_image(data):
    with pytest.raises(ImageProcessingFailed):
        resize_image(data, "png", "image/png", 400)


def test_unsupported_output_format(make_image):
    with pytest.raises(ImageProcessingFailed):
        resize_image(make_image(800, 600), "svg+xml", "image/svg+xml", 400)
