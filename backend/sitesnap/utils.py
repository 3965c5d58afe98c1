"""
Utility functions
"""

import base64
from typing import TYPE_CHECKING, Dict, Optional, Union
from urllib.parse import urlparse

if TYPE_CHECKING:
    from .models import CaptureRequest

Number = Union[int, float]


def format_number(value: Number) -> str:
    """Render a number the way it reads in JSON: 1920.0 becomes "1920" """
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def is_valid_url(url: str) -> bool:
    """True when the string parses as an absolute URL with a host"""
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return bool(parsed.scheme and parsed.netloc)


def build_capture_params(request: "CaptureRequest", access_key: str, image_format: str = "png") -> Dict[str, str]:
    """Query parameters for the rendering service's take endpoint"""
    params = {
        "access_key": access_key,
        "url": request.url,
        "full_page": "true" if request.wants_full_page else "false",
        "viewport_width": format_number(request.width),
        "viewport_height": format_number(request.height),
        "format": image_format,
    }
    # A zero delay is never forwarded
    if request.delay:
        params["delay"] = format_number(request.delay)
    return params


def to_data_uri(image_bytes: bytes, mime_type: str = "image/png") -> str:
    """Encode raw image bytes for inline transport"""
    encoded = base64.b64encode(image_bytes).decode()
    return f"data:{mime_type};base64,{encoded}"


def from_data_uri(data_uri: str) -> Optional[bytes]:
    """Decode a base64 data URI, or None when it is not one"""
    header, sep, payload = data_uri.partition(",")
    if not sep or not header.startswith("data:") or not header.endswith(";base64"):
        return None
    return base64.b64decode(payload)
