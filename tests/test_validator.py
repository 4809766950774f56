import pytest

from tryiton.errors import MissingParameter, PayloadTooLarge, UnsupportedMediaType
from tryiton.services.validator import validate_request


URL = "https://cdn.example.com/jacket.jpg"
FIVE_MIB = 5 * 1024 * 1024


def test_valid_request_passes_through():
    req = validate_request(b"abc", "image/jpeg", URL, "Jacket", "Denim Jacket")
    assert req.photo == b"abc"
    assert req.size == 3
    assert req.content_type == "image/jpeg"
    assert req.product_image_url == URL
    assert req.product_type == "Jacket"
    assert req.product_title == "Denim Jacket"


@pytest.mark.parametrize("photo,url", [(None, URL), (b"", URL), (b"abc", None), (b"abc", "   ")])
def test_missing_parameters(photo, url):
    with pytest.raises(MissingParameter) as exc:
        validate_request(photo, "image/jpeg", url)
    assert exc.value.message == "Missing required parameters"
    assert exc.value.status_code == 400


def test_exactly_five_mib_is_accepted():
    req = validate_request(b"x" * FIVE_MIB, "image/png", URL)
    assert req.size == FIVE_MIB


def test_oversize_photo_rejected():
    with pytest.raises(PayloadTooLarge) as exc:
        validate_request(b"x" * (FIVE_MIB + 1), "image/jpeg", URL)
    assert "5MB" in exc.value.message
    assert exc.value.status_code == 400


def test_size_checked_before_type():
    with pytest.raises(PayloadTooLarge):
        validate_request(b"x" * (FIVE_MIB + 1), "image/gif", URL)


@pytest.mark.parametrize("mime", ["image/jpeg", "image/jpg", "image/png", "image/webp", "IMAGE/PNG", "image/webp; charset=binary"])
def test_supported_types(mime):
    validate_request(b"abc", mime, URL)


@pytest.mark.parametrize("mime", ["image/gif", "image/heic", "application/pdf", "text/plain", "", None])
def test_unsupported_types(mime):
    with pytest.raises(UnsupportedMediaType) as exc:
        validate_request(b"abc", mime, URL)
    assert exc.value.message == "Invalid file type. Only JPEG, PNG and WebP are allowed."
