"""
Errors surfaced to API callers as ``{"error": message}``
"""


class CaptureError(Exception):
    """A failure with a status code and a message that is safe to show the caller"""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class UpstreamError(CaptureError):
    """The rendering service answered with a non-success status"""

    def __init__(self, status_code: int, body: str):
        super().__init__(status_code, f"Failed to fetch screenshot: {body}")
        self.body = body
