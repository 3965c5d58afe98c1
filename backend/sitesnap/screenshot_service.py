"""
Screenshot service backed by the ScreenshotOne rendering API
Validates nothing itself: callers hand it an already validated CaptureRequest
"""

import logging
from typing import Optional

import httpx

from .config import Settings
from .errors import CaptureError, UpstreamError
from .models import CaptureRequest
from .turnstile import verify_token
from .utils import build_capture_params, to_data_uri

logger = logging.getLogger(__name__)

IMAGE_FORMAT = "png"
IMAGE_MIME_TYPE = "image/png"


class ScreenshotService:
    """Forwards capture requests to the rendering service with the server-held key"""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None, timeout: float = 60.0):
        self.transport = transport
        self.timeout = timeout
        self.client: Optional[httpx.AsyncClient] = None

    async def initialize(self):
        """Open the pooled HTTP client"""
        self._get_client()
        logger.info("Screenshot service initialized")

    async def cleanup(self):
        """Close the HTTP client"""
        if self.client is not None:
            await self.client.aclose()
            self.client = None
            logger.info("Screenshot service cleaned up")

    def _get_client(self) -> httpx.AsyncClient:
        if self.client is None or self.client.is_closed:
            self.client = httpx.AsyncClient(transport=self.transport, timeout=self.timeout)
        return self.client

    async def health_check(self, settings: Settings) -> bool:
        """Healthy when the credential is present and the client is usable"""
        if not settings.SCREENSHOTONE_API_KEY:
            return False
        return not self._get_client().is_closed

    async def verify_caller(self, request: CaptureRequest, settings: Settings, remote_ip: Optional[str] = None):
        """Check the Turnstile token when a secret is configured"""
        if not settings.CF_TURNSTILE_SECRET_KEY:
            return
        if not request.verification_token:
            raise CaptureError(400, "Missing CAPTCHA token")

        verified = await verify_token(
            self._get_client(),
            settings.TURNSTILE_VERIFY_URL,
            settings.CF_TURNSTILE_SECRET_KEY,
            request.verification_token,
            remote_ip,
        )
        if not verified:
            raise CaptureError(403, "CAPTCHA verification failed")

    async def capture(self, request: CaptureRequest, api_key: str, api_url: str) -> bytes:
        """Make exactly one call to the rendering service and return the image bytes"""
        params = build_capture_params(request, api_key, IMAGE_FORMAT)
        response = await self._get_client().get(
            api_url,
            params=params,
            headers={"Accept": IMAGE_MIME_TYPE},
        )

        if not response.is_success:
            error_text = response.text
            logger.error("ScreenshotOne API error: %s - %s", response.status_code, error_text)
            raise UpstreamError(response.status_code, error_text)

        logger.debug("Captured %s (%d bytes)", request.url, len(response.content))
        return response.content

    async def capture_data_uri(self, request: CaptureRequest, settings: Settings) -> str:
        """Capture and encode the image for inline transport"""
        image_bytes = await self.capture(request, settings.SCREENSHOTONE_API_KEY, settings.SCREENSHOTONE_API_URL)
        return to_data_uri(image_bytes, IMAGE_MIME_TYPE)
