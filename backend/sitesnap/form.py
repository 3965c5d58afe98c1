"""
Capture form state

Holds what the browser form holds (target URL, viewport, delay, full-page flag,
device category, verification token) and applies the same rules before a
request is sent to the capture endpoint. The page script mirrors this model;
presets and device sizes are rendered into the page from the tables below.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Protocol

import httpx

from .notifications import Toaster
from .utils import is_valid_url

logger = logging.getLogger(__name__)

CAPTURE_ENDPOINT = "/api/screenshot"


@dataclass(frozen=True)
class Preset:
    name: str
    width: int
    height: int


PRESETS = [
    Preset("iPhone 13 Pro", 390, 844),
    Preset("iPhone 12", 390, 844),
    Preset("Pixel 6", 412, 915),
    Preset("Galaxy S21", 360, 800),
    Preset("iPad", 768, 1024),
    Preset("Desktop (Full HD)", 1920, 1080),
]

DEVICE_SIZES = {
    "mobile": (390, 844),
    "tablet": (768, 1024),
    "desktop": (1920, 1080),
}


class VerificationWidget(Protocol):
    """The parts of the Turnstile script the form drives"""

    def render(
        self,
        container: Any,
        sitekey: str,
        theme: str,
        callback: Callable[[str], None],
        error_callback: Callable[[], None],
    ) -> None: ...

    def reset(self, container: Any) -> None: ...

    def remove(self, container: Any) -> None: ...


class CaptureForm:
    """State and submission rules for one capture form instance"""

    def __init__(self, site_key: str = "", container: Any = "turnstile", theme: str = "light", toaster: Optional[Toaster] = None):
        self.site_key = site_key
        self.container = container
        self.theme = theme
        self.toaster = toaster or Toaster()

        self.url = ""
        self.width = 1920
        self.height = 1080
        self.delay: float = 0
        self.full_page = True
        self.device = "desktop"
        self.token: Optional[str] = None
        self.loading = False
        self.widget_ready = False
        self.widget: Optional[VerificationWidget] = None
        self.screenshot: Optional[str] = None

    # Viewport selection

    def select_device(self, device: str):
        if device not in DEVICE_SIZES:
            return
        self.device = device
        self.width, self.height = DEVICE_SIZES[device]

    def select_preset(self, name: str):
        for preset in PRESETS:
            if preset.name == name:
                self.width, self.height = preset.width, preset.height
                return

    # Verification widget lifecycle

    def on_script_loaded(self, widget: VerificationWidget):
        self.widget = widget
        self.widget_ready = True
        widget.render(
            self.container,
            sitekey=self.site_key,
            theme="dark" if self.theme == "dark" else "light",
            callback=self.on_token,
            error_callback=self.on_widget_error,
        )

    def on_script_error(self):
        self.widget_ready = False
        self.toaster.error("Failed to load CAPTCHA script. Please check your network.")

    def on_token(self, token: str):
        self.token = token

    def on_widget_error(self):
        self.widget_ready = False
        if self.widget is not None:
            self.widget.remove(self.container)
            self.widget = None
        self.toaster.error("Failed to load CAPTCHA. Please try again.")

    def teardown(self):
        if self.widget is not None:
            self.widget.remove(self.container)

    # Submission

    @property
    def can_submit(self) -> bool:
        return not self.loading and bool(self.token) and self.url.startswith("http")

    def payload(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "width": self.width,
            "height": self.height,
            "delay": self.delay,
            "fullPage": self.full_page,
            "cfCaptchaToken": self.token,
        }

    def submit(self, client: httpx.Client) -> Optional[str]:
        """Send the current request; returns the image data URI on success"""
        if self.loading:
            return None
        if not self.token:
            self.toaster.error("Please complete the CAPTCHA verification")
            return None
        if not is_valid_url(self.url):
            self.toaster.error("Please enter a valid URL (e.g., https://example.com)")
            return None

        self.loading = True
        try:
            response = client.post(CAPTURE_ENDPOINT, json=self.payload())
            data = _json_or_empty(response)
            if not response.is_success:
                self.toaster.error(data.get("error") or "Failed to capture screenshot")
                return None

            self.screenshot = data["image"]
            self.toaster.success("Screenshot captured successfully!")
            self._reissue_token()
            return self.screenshot
        except (httpx.HTTPError, KeyError) as e:
            logger.error("Screenshot error: %s", e)
            self.toaster.error("Error capturing screenshot")
            return None
        finally:
            self.loading = False

    def _reissue_token(self):
        self.token = None
        if self.widget is not None:
            self.widget.reset(self.container)


def _json_or_empty(response: httpx.Response) -> Dict[str, Any]:
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}
