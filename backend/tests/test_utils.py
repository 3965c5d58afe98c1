"""Tests for request helpers."""
import pytest

from sitesnap.models import CaptureRequest
from sitesnap.utils import build_capture_params, format_number, from_data_uri, is_valid_url, to_data_uri


@pytest.mark.parametrize(
    "value,expected",
    [(1920, "1920"), (1920.0, "1920"), (2.5, "2.5"), (0.25, "0.25")],
)
def test_format_number(value, expected):
    assert format_number(value) == expected


@pytest.mark.parametrize(
    "url,valid",
    [
        ("https://example.com", True),
        ("http://localhost:8000/path?q=1", True),
        ("example.com", False),
        ("https://", False),
        ("", False),
        ("http://[::1", False),
    ],
)
def test_is_valid_url(url, valid):
    assert is_valid_url(url) is valid


def test_build_capture_params_with_delay():
    request = CaptureRequest(url="https://example.com", width=390, height=844, delay=5, fullPage=False)
    params = build_capture_params(request, "key")
    assert params == {
        "access_key": "key",
        "url": "https://example.com",
        "full_page": "false",
        "viewport_width": "390",
        "viewport_height": "844",
        "format": "png",
        "delay": "5",
    }


def test_build_capture_params_accepts_field_names():
    request = CaptureRequest(url="https://example.com", width=768, height=1024, full_page=True)
    assert build_capture_params(request, "key")["full_page"] == "true"


def test_data_uri():
    uri = to_data_uri(b"\x00\xffimage")
    assert uri.startswith("data:image/png;base64,")
    assert from_data_uri(uri) == b"\x00\xffimage"
    assert from_data_uri("https://example.com/image.png") is None
