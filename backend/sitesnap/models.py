from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .utils import is_valid_url

# Client-facing message for the first invalid field, keyed by JSON name
FIELD_ERRORS = {
    "url": "Invalid or missing URL",
    "width": "Invalid width (must be 320–3840)",
    "height": "Invalid height (must be 480–2160)",
    "delay": "Invalid delay (must be 0–10)",
    "fullPage": "Invalid fullPage value",
}


class CaptureRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    url: str = Field(strict=True, min_length=1)
    width: float = Field(strict=True, ge=320, le=3840, allow_inf_nan=False)
    height: float = Field(strict=True, ge=480, le=2160, allow_inf_nan=False)
    delay: Optional[float] = Field(default=None, strict=True, ge=0, le=10, allow_inf_nan=False)
    full_page: Optional[bool] = Field(default=None, strict=True, alias="fullPage")
    verification_token: Optional[str] = Field(default=None, alias="cfCaptchaToken")

    @field_validator("url")
    @classmethod
    def url_is_absolute(cls, value: str) -> str:
        if not is_valid_url(value):
            raise ValueError("URL must be absolute")
        return value

    @field_validator("width", "height", "delay", mode="before")
    @classmethod
    def reject_booleans(cls, value):
        if isinstance(value, bool):
            raise ValueError("must be a number, not a boolean")
        return value

    @property
    def wants_full_page(self) -> bool:
        return self.full_page is not False


class CaptureResult(BaseModel):
    image: str


class ErrorResponse(BaseModel):
    error: str
