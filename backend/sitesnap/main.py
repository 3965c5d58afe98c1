import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import Depends, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.requests import Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from . import __version__
from .config import Settings, get_settings, settings
from .errors import CaptureError
from .form import DEVICE_SIZES, PRESETS
from .models import FIELD_ERRORS, CaptureRequest, CaptureResult, ErrorResponse
from .screenshot_service import ScreenshotService

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

FRONTEND_DIR = Path(__file__).resolve().parents[2] / "frontend"

# Global screenshot service instance
screenshot_service = ScreenshotService(timeout=settings.SCREENSHOT_TIMEOUT)


def get_screenshot_service() -> ScreenshotService:
    return screenshot_service


@asynccontextmanager
async def lifespan(app: FastAPI):
    await screenshot_service.initialize()
    yield
    await screenshot_service.cleanup()


app = FastAPI(
    title="Sitesnap",
    description="Capture screenshots of any web page",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type"],
)

app.mount("/static", StaticFiles(directory=FRONTEND_DIR / "static"), name="static")
templates = Jinja2Templates(directory=FRONTEND_DIR / "templates")


@app.exception_handler(CaptureError)
async def capture_error_handler(request: Request, exc: CaptureError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Report only the first offending field, as a 400"""
    message = "Invalid request body"
    errors = exc.errors()
    if errors:
        loc = errors[0].get("loc", ())
        if len(loc) > 1 and loc[1] in FIELD_ERRORS:
            message = FIELD_ERRORS[loc[1]]
    logger.debug("Rejected capture request: %s", errors)
    return JSONResponse(status_code=400, content={"error": message})


@app.get("/", response_class=HTMLResponse)
async def home(request: Request, settings: Settings = Depends(get_settings)):
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "site_key": settings.CF_TURNSTILE_SITE_KEY,
            "presets": PRESETS,
            "devices": DEVICE_SIZES,
        },
    )


@app.get("/api/health")
async def health_check(
    settings: Settings = Depends(get_settings),
    service: ScreenshotService = Depends(get_screenshot_service),
):
    """Health check endpoint"""
    is_healthy = await service.health_check(settings)
    return {
        "status": "healthy" if is_healthy else "unhealthy",
        "service": "sitesnap",
    }


@app.post(
    "/api/screenshot",
    response_model=CaptureResult,
    responses={400: {"model": ErrorResponse}, 403: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def capture_screenshot(
    capture: CaptureRequest,
    request: Request,
    settings: Settings = Depends(get_settings),
    service: ScreenshotService = Depends(get_screenshot_service),
):
    """Capture a screenshot of one URL and return it as a data URI"""
    try:
        if not settings.SCREENSHOTONE_API_KEY:
            logger.error("SCREENSHOTONE_API_KEY is not set")
            raise CaptureError(500, "Server configuration error")

        remote_ip = request.client.host if request.client else None
        await service.verify_caller(capture, settings, remote_ip)

        image = await service.capture_data_uri(capture, settings)
        return CaptureResult(image=image)

    except CaptureError:
        raise
    except Exception:
        logger.exception("Screenshot API error")
        raise CaptureError(500, "Internal server error")


def run():
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
